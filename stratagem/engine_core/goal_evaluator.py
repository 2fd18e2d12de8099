"""
Goal Evaluator - Decides whether a player has met a victory goal.

Goals are checked in declaration order and evaluation stops at the first
satisfied goal; that goal decides victory. Multiple simultaneously satisfied
goals are not aggregated or ranked.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..definitions.board import BoardDefinition
from ..definitions.goals import (
    ControlSetsGoal,
    ControlTotalGoal,
    Goal,
    RemovePlayerGoal,
    fallback_chain,
    goal_index,
)
from ..definitions.rule import RuleDefinition
from .state import BoardState


class GoalEvaluationError(Exception):
    """A goal cannot be evaluated against this board."""


@dataclass
class GoalStatus:
    """
    Result of checking a player's goals.

    `checked` lists the goal indices evaluated, in order; it ends at the
    matching goal when there is one.
    """
    player_id: str
    goal: Goal | None = None
    goal_index: int | None = None
    checked: list[int] = field(default_factory=list)

    @property
    def satisfied(self) -> bool:
        return self.goal is not None


class GoalEvaluator:
    """
    Evaluates a rule's goals on a board.

    Usage:
        evaluator = GoalEvaluator(game.rule, game.board)
        status = evaluator.evaluate("red", board_state)
        if status.satisfied:
            ...
    """

    def __init__(self, rule: RuleDefinition, board: BoardDefinition):
        self.rule = rule
        self.board = board
        self._index = goal_index(rule.goals)

    def evaluate(self, player_id: str, state: BoardState) -> GoalStatus:
        """First satisfied goal in declaration order, if any."""
        status = GoalStatus(player_id=player_id)
        for position, goal in enumerate(self.rule.goals):
            status.checked.append(position)
            if self.is_satisfied(goal, player_id, state):
                status.goal = goal
                status.goal_index = position
                break
        return status

    def is_satisfied(self, goal: Goal, player_id: str, state: BoardState) -> bool:
        """
        Check a single goal.

        A remove_player goal is met once its target has lost every field it
        held. Until then, and always when the target is the player being
        checked, its fallback (if any) is checked instead.
        """
        for link in fallback_chain(goal, self._index):
            if isinstance(link, RemovePlayerGoal):
                if link.player != player_id and state.is_eliminated(link.player):
                    return True
                continue
            if isinstance(link, ControlSetsGoal):
                return self._controls_sets(link, player_id, state)
            if isinstance(link, ControlTotalGoal):
                return len(state.fields_owned_by(player_id)) >= link.min_fields
            raise GoalEvaluationError(f"Unsupported goal kind: {link!r}")
        return False

    def _controls_sets(self, goal: ControlSetsGoal, player_id: str, state: BoardState) -> bool:
        field_sets = []
        for name in goal.sets:
            field_set = self.board.field_set(name)
            if field_set is None:
                raise GoalEvaluationError(
                    f"Goal refers to set '{name}', which board '{self.board.id}' does not define"
                )
            field_sets.append(field_set)

        total_figures = 0
        for field_set in field_sets:
            for field_id in field_set.fields:
                if state.owner_of(field_id) != player_id:
                    return False
                total_figures += state.figures_on(field_id)
        return total_figures >= goal.min_figures
