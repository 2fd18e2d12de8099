"""
Engine Core - Runtime bookkeeping over loaded definitions.

The engine core:
1. Tracks a session's current phase through a rule (PhaseMachine)
2. Reports transitions to observers
3. Tracks field occupancy (BoardState)
4. Evaluates victory goals (GoalEvaluator)
"""

from .events import ActionExecuted, ConstraintChecked, PhaseChanged, PhaseEvent, PhaseObserver
from .phase_machine import (
    PhaseMachine,
    PhaseMachineError,
    UnknownActionError,
    TerminalPhaseError,
    UnknownResultTokenError,
    ConstraintShapeError,
    Step,
)
from .state import BoardState, FieldStatus, Participant
from .goal_evaluator import GoalEvaluator, GoalStatus, GoalEvaluationError

__all__ = [
    "ActionExecuted",
    "ConstraintChecked",
    "PhaseChanged",
    "PhaseEvent",
    "PhaseObserver",
    "PhaseMachine",
    "PhaseMachineError",
    "UnknownActionError",
    "TerminalPhaseError",
    "UnknownResultTokenError",
    "ConstraintShapeError",
    "Step",
    "BoardState",
    "FieldStatus",
    "Participant",
    "GoalEvaluator",
    "GoalStatus",
    "GoalEvaluationError",
]
