"""
Goal Definitions - Victory conditions declared by a rule.

Variants (tagged by `kind`):
- control_sets: control every field of the named sets with at least
  `min_figures` figures in total on them
- control_total: control at least `min_fields` fields anywhere
- remove_player: eliminate `player`; until then the optional fallback goal
  applies instead

A fallback is either an inline goal (an owned tree) or the `id` of another goal
declared in the same rule. Chains must terminate and are capped at
MAX_FALLBACK_DEPTH links.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import ConfigDict, Field, with_config

from .validation import FailureCode, ValidationFailure, find_duplicates, is_blank

MAX_FALLBACK_DEPTH = 8


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class ControlSetsGoal:
    """Control whole field sets (e.g. continents)."""
    sets: tuple[str, ...]
    min_figures: int
    id: Optional[str] = None
    description: str = ""
    kind: Literal["control_sets"] = "control_sets"


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class ControlTotalGoal:
    """Control a number of fields anywhere on the board."""
    min_fields: int
    id: Optional[str] = None
    description: str = ""
    kind: Literal["control_total"] = "control_total"


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class RemovePlayerGoal:
    """Eliminate a player, or fall back to another goal."""
    player: str
    fallback: Optional[Union[GoalSpec, str]] = None
    id: Optional[str] = None
    description: str = ""
    kind: Literal["remove_player"] = "remove_player"


GoalSpec = Annotated[
    Union[ControlSetsGoal, ControlTotalGoal, RemovePlayerGoal],
    Field(discriminator="kind"),
]
Goal = Union[ControlSetsGoal, ControlTotalGoal, RemovePlayerGoal]


def goal_index(goals: tuple[Goal, ...]) -> dict[str, Goal]:
    """Map goal id to goal for the goals that declare one."""
    return {g.id: g for g in goals if g.id is not None}


def resolve_fallback(goal: Goal, index: dict[str, Goal]) -> Goal | None:
    """
    Return the goal a remove_player goal falls back to, if any.

    Raises KeyError for an id reference that is not in the index; validated
    rules never contain one.
    """
    if not isinstance(goal, RemovePlayerGoal) or goal.fallback is None:
        return None
    if isinstance(goal.fallback, str):
        return index[goal.fallback]
    return goal.fallback


def fallback_chain(goal: Goal, index: dict[str, Goal]) -> Iterator[Goal]:
    """Yield the goal followed by each fallback in turn."""
    current: Goal | None = goal
    depth = 0
    while current is not None:
        yield current
        depth += 1
        if depth > MAX_FALLBACK_DEPTH + 1:
            return
        current = resolve_fallback(current, index)


def validate_goals(kind: str, goals: tuple[Goal, ...]) -> list[ValidationFailure]:
    """Validate the goal list of a rule."""
    failures: list[ValidationFailure] = []
    index = goal_index(goals)

    for dup in find_duplicates(g.id for g in goals if g.id is not None):
        failures.append(ValidationFailure(
            kind, "goals", f"duplicate goal id '{dup}'", FailureCode.DUPLICATE_NAME,
        ))

    for position, goal in enumerate(goals):
        path = f"goals[{position}]"
        failures.extend(_validate_goal_tree(kind, goal, path, index))
        failures.extend(_validate_chain(kind, goal, path, index))

    return failures


def _validate_goal_tree(
    kind: str, goal: Goal, path: str, index: dict[str, Goal], depth: int = 0
) -> list[ValidationFailure]:
    """Check the fields of a goal and of its inline fallbacks."""
    failures = []

    if goal.id is not None and is_blank(goal.id):
        failures.append(ValidationFailure(
            kind, f"{path}.id", "goal id must not be blank", FailureCode.MISSING_VALUE,
        ))

    if isinstance(goal, ControlSetsGoal):
        if not goal.sets:
            failures.append(ValidationFailure(
                kind, f"{path}.sets", "at least one set is required",
                FailureCode.EMPTY_COLLECTION,
            ))
        for name in goal.sets:
            if is_blank(name):
                failures.append(ValidationFailure(
                    kind, f"{path}.sets", "set name must not be blank",
                    FailureCode.MISSING_VALUE,
                ))
        for dup in find_duplicates(goal.sets):
            failures.append(ValidationFailure(
                kind, f"{path}.sets", f"set '{dup}' listed twice",
                FailureCode.DUPLICATE_NAME,
            ))
        if goal.min_figures < 0:
            failures.append(ValidationFailure(
                kind, f"{path}.min_figures", "must be >= 0", FailureCode.OUT_OF_RANGE,
            ))

    elif isinstance(goal, ControlTotalGoal):
        if goal.min_fields < 1:
            failures.append(ValidationFailure(
                kind, f"{path}.min_fields", "must be >= 1", FailureCode.OUT_OF_RANGE,
            ))

    elif isinstance(goal, RemovePlayerGoal):
        if is_blank(goal.player):
            failures.append(ValidationFailure(
                kind, f"{path}.player", "target player is required",
                FailureCode.MISSING_VALUE,
            ))
        if isinstance(goal.fallback, str):
            if goal.fallback not in index:
                failures.append(ValidationFailure(
                    kind, f"{path}.fallback",
                    f"fallback references unknown goal '{goal.fallback}'",
                    FailureCode.DANGLING_REFERENCE,
                ))
        elif goal.fallback is not None and depth < MAX_FALLBACK_DEPTH:
            failures.extend(_validate_goal_tree(
                kind, goal.fallback, f"{path}.fallback", index, depth + 1,
            ))

    return failures


def _validate_chain(
    kind: str, goal: Goal, path: str, index: dict[str, Goal]
) -> list[ValidationFailure]:
    """Walk the fallback chain; it must end within MAX_FALLBACK_DEPTH links."""
    visited: set[int] = set()
    current: Goal | None = goal
    depth = 0

    while current is not None:
        if id(current) in visited:
            label = f"'{current.id}'" if current.id else "itself"
            return [ValidationFailure(
                kind, f"{path}.fallback",
                f"fallback chain does not terminate (returns to {label})",
                FailureCode.FALLBACK_CYCLE,
            )]
        visited.add(id(current))

        if depth > MAX_FALLBACK_DEPTH:
            return [ValidationFailure(
                kind, f"{path}.fallback",
                f"fallback chain is deeper than {MAX_FALLBACK_DEPTH}",
                FailureCode.FALLBACK_TOO_DEEP,
            )]

        if (
            isinstance(current, RemovePlayerGoal)
            and isinstance(current.fallback, str)
            and current.fallback not in index
        ):
            # Reported as a dangling reference by the tree check
            return []

        current = resolve_fallback(current, index)
        depth += 1

    return []
