"""
Phase Machine - Drives a session's current phase through a rule.

The machine never decides outcomes. An external evaluator (combat, movement,
dice) resolves an action and hands back a result token; the machine only
checks that the action is legal in the current phase and that the token was
declared, then moves the cursor.

Transition algorithm for phase P, action A, token T:
1. A must be an action of P (UnknownActionError; TerminalPhaseError when P is
   absorbing)
2. A's constraints must be recognized and well-typed
3. T must be declared in A's result mapping (UnknownResultTokenError)
4. The cursor moves to the mapped phase

Failures leave the cursor where it was. Observers hear ActionExecuted and
PhaseChanged only after the step is committed; an exception raised by an
observer propagates to the caller but does not undo the step.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Mapping

from ..definitions.constraints import constraint_problems
from ..definitions.rule import ActionSpec, RuleDefinition
from .events import ActionExecuted, ConstraintChecked, PhaseChanged, PhaseEvent, PhaseObserver

logger = logging.getLogger(__name__)


class PhaseMachineError(Exception):
    """Base class for rejected transitions."""

    def __init__(self, message: str, phase: str):
        self.phase = phase
        super().__init__(message)


class UnknownActionError(PhaseMachineError):
    """The action is not defined in the current phase."""

    def __init__(self, phase: str, action: str, available: list[str]):
        self.action = action
        self.available = available
        super().__init__(
            f"Action '{action}' is not available in phase '{phase}' "
            f"(available: {', '.join(available) or 'none'})",
            phase,
        )


class TerminalPhaseError(UnknownActionError):
    """The current phase is absorbing; no further tokens are accepted."""


class UnknownResultTokenError(PhaseMachineError):
    """The token was not declared for the action."""

    def __init__(self, phase: str, action: str, token: str, declared: list[str]):
        self.action = action
        self.token = token
        self.declared = declared
        super().__init__(
            f"Action '{action}' in phase '{phase}' has no result '{token}' "
            f"(declared: {', '.join(declared)})",
            phase,
        )


class ConstraintShapeError(PhaseMachineError):
    """An action carries an unrecognized or ill-typed constraint."""


@dataclass(frozen=True)
class Step:
    """One accepted transition."""
    phase: str
    action: str
    token: str
    next_phase: str


class PhaseMachine:
    """
    The mutable phase cursor of one session over a shared rule.

    Usage:
        machine = PhaseMachine(game.rule)
        machine.available_actions()          # {"encounter": ActionSpec(...)}
        machine.submit("encounter", "won")   # -> "change_ownership"

    A machine belongs to a single session and is driven by that session's
    game loop only.
    """

    def __init__(self, rule: RuleDefinition, observers: list[PhaseObserver] | None = None):
        self.rule = rule
        self._current = rule.default_phase
        self._observers: list[PhaseObserver] = list(observers or [])
        self.history: list[Step] = []

    @property
    def current_phase(self) -> str:
        return self._current

    @property
    def is_terminal(self) -> bool:
        """True when the current phase has no outgoing actions."""
        return not self.rule.actions(self._current)

    def add_observer(self, observer: PhaseObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: PhaseObserver) -> None:
        self._observers.remove(observer)

    def _notify(self, event: PhaseEvent) -> None:
        for observer in self._observers:
            observer(event)

    def available_actions(self) -> Mapping[str, ActionSpec]:
        """Actions legal in the current phase, with their declared constraints."""
        return dict(self.rule.actions(self._current))

    def is_action_allowed(self, action: str) -> bool:
        return action in self.rule.actions(self._current)

    def _action_spec(self, action: str) -> ActionSpec:
        spec = self.rule.action(self._current, action)
        if spec is None:
            available = sorted(self.rule.actions(self._current))
            if self.is_terminal:
                raise TerminalPhaseError(self._current, action, available)
            raise UnknownActionError(self._current, action, available)
        return spec

    def check_constraints(self, action: str) -> Mapping[str, object]:
        """
        Check the shape of an action's constraints and return them.

        Only key recognition and value kind are checked; what the values mean
        is up to the external evaluator.
        """
        spec = self._action_spec(action)
        problems = constraint_problems(spec.constraints)
        self._notify(ConstraintChecked(self._current, action, not problems))
        if problems:
            raise ConstraintShapeError(
                "; ".join(reason for _, reason, _ in problems), self._current,
            )
        return dict(spec.constraints)

    def submit(self, action: str, token: str) -> str:
        """
        Apply an evaluated action and return the new current phase.

        Raises UnknownActionError, TerminalPhaseError, ConstraintShapeError or
        UnknownResultTokenError without changing the phase. Once the token is
        accepted the step is recorded before any observer is notified.
        """
        spec = self._action_spec(action)
        self.check_constraints(action)

        next_phase = spec.result.get(token)
        if next_phase is None:
            raise UnknownResultTokenError(
                self._current, action, token, sorted(spec.result),
            )

        previous = self._current
        self._current = next_phase
        self.history.append(Step(previous, action, token, next_phase))

        logger.debug("%s --%s/%s--> %s", previous, action, token, next_phase)
        if self.is_terminal:
            logger.info("Entered absorbing phase '%s'", next_phase)

        self._notify(ActionExecuted(previous, action, token))
        self._notify(PhaseChanged(previous, next_phase))
        return next_phase

    def reset(self) -> None:
        """Return to the default phase and forget the history."""
        self._current = self.rule.default_phase
        self.history.clear()
