"""
Action Constraints - Typed key/value parameters attached to actions.

Constraint semantics (how many figures, which fields are adjacent) belong to
the external move evaluator. Here we only know the closed table of recognized
keys and the kind of value each one takes.
"""

from __future__ import annotations
from enum import Enum
from typing import Mapping, Union

ConstraintValue = Union[bool, int, str]


class ConstraintKind(Enum):
    """Value kinds a constraint may take."""
    INTEGER = "integer"
    BOOLEAN = "boolean"
    PLAYER_ID = "player_id"
    FIELD_ID = "field_id"


RECOGNIZED_CONSTRAINTS: dict[str, ConstraintKind] = {
    "min_origin_figures": ConstraintKind.INTEGER,
    "min_figures_left": ConstraintKind.INTEGER,
    "max_move": ConstraintKind.INTEGER,
    "max_attack_dice": ConstraintKind.INTEGER,
    "max_defense_dice": ConstraintKind.INTEGER,
    "adjacency_required": ConstraintKind.BOOLEAN,
    "own_origin_required": ConstraintKind.BOOLEAN,
    "once_per_turn": ConstraintKind.BOOLEAN,
    "target_player": ConstraintKind.PLAYER_ID,
    "target_field": ConstraintKind.FIELD_ID,
}


def value_matches(kind: ConstraintKind, value: ConstraintValue) -> bool:
    """Check a value against its declared kind."""
    # bool is a subclass of int
    if kind == ConstraintKind.BOOLEAN:
        return isinstance(value, bool)
    if kind in (ConstraintKind.INTEGER, ConstraintKind.FIELD_ID):
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if kind == ConstraintKind.PLAYER_ID:
        return isinstance(value, str) and bool(value.strip())
    return False


def constraint_problems(constraints: Mapping[str, ConstraintValue]) -> list[tuple[str, str, bool]]:
    """
    Return (key, reason, unknown) for every bad constraint entry.

    `unknown` is True when the key is not recognized at all, False when the key
    is known but the value has the wrong kind.
    """
    problems = []
    for key, value in constraints.items():
        kind = RECOGNIZED_CONSTRAINTS.get(key)
        if kind is None:
            problems.append((key, f"unrecognized constraint '{key}'", True))
        elif not value_matches(kind, value):
            problems.append((
                key,
                f"constraint '{key}' expects {kind.value}, got {value!r}",
                False,
            ))
    return problems
