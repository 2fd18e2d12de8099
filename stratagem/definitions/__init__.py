"""Definition models - typed, validated content of each definition file."""

from .validation import (
    FailureCode,
    Validatable,
    ValidationFailure,
    ValidationResult,
    check,
    ensure_valid,
)
from .errors import (
    DefinitionError,
    DefinitionNotFoundError,
    DefinitionParseError,
    DefinitionValidationError,
    GameLoadError,
    CatalogError,
)
from .constraints import ConstraintKind, RECOGNIZED_CONSTRAINTS
from .goals import (
    ControlSetsGoal,
    ControlTotalGoal,
    RemovePlayerGoal,
    Goal,
    MAX_FALLBACK_DEPTH,
)
from .rule import RuleDefinition, ActionSpec, Transition
from .board import BoardDefinition, FieldDefinition, FieldSetDefinition
from .pieces import PiecesDefinition, PieceSet, Piece
from .cards import CardsDefinition, CardDefinition
from .dices import DicesDefinition, DiceSet, DiceFace
from .game import GameDefinition, GameParameters, PlacementConfig, ControlBonusMode

__all__ = [
    "FailureCode",
    "Validatable",
    "ValidationFailure",
    "ValidationResult",
    "check",
    "ensure_valid",
    "DefinitionError",
    "DefinitionNotFoundError",
    "DefinitionParseError",
    "DefinitionValidationError",
    "GameLoadError",
    "CatalogError",
    "ConstraintKind",
    "RECOGNIZED_CONSTRAINTS",
    "ControlSetsGoal",
    "ControlTotalGoal",
    "RemovePlayerGoal",
    "Goal",
    "MAX_FALLBACK_DEPTH",
    "RuleDefinition",
    "ActionSpec",
    "Transition",
    "BoardDefinition",
    "FieldDefinition",
    "FieldSetDefinition",
    "PiecesDefinition",
    "PieceSet",
    "Piece",
    "CardsDefinition",
    "CardDefinition",
    "DicesDefinition",
    "DiceSet",
    "DiceFace",
    "GameDefinition",
    "GameParameters",
    "PlacementConfig",
    "ControlBonusMode",
]
