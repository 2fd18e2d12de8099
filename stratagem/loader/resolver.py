"""
Reference Resolution - Which file a component field points to.

The rules are deterministic and identical for every component kind; only
the suffix differs.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..definitions import (
    BoardDefinition,
    CardsDefinition,
    DicesDefinition,
    PiecesDefinition,
    RuleDefinition,
)

CUSTOM_REFERENCE = "custom"
GAME_SUFFIX = ".game.yaml"


@dataclass(frozen=True)
class ComponentKind:
    """A component field of a game, its file suffix and definition type."""
    field: str
    suffix: str
    definition: type


COMPONENTS: tuple[ComponentKind, ...] = (
    ComponentKind("rule", ".rule.yaml", RuleDefinition),
    ComponentKind("board", ".board.yaml", BoardDefinition),
    ComponentKind("pieces", ".pieces.yaml", PiecesDefinition),
    ComponentKind("cards", ".cards.yaml", CardsDefinition),
    ComponentKind("dices", ".dices.yaml", DicesDefinition),
)

COMPONENT_SUFFIXES: dict[str, str] = {c.field: c.suffix for c in COMPONENTS}


def component_kind(field_name: str) -> ComponentKind:
    for kind in COMPONENTS:
        if kind.field == field_name:
            return kind
    raise KeyError(f"unknown component field '{field_name}'")


def resolve_reference(reference: str | None, owner_id: str, suffix: str) -> str | None:
    """
    Resolve a reference to a file name.

    - None          -> None (component absent, nothing to load)
    - ""            -> <owner_id><suffix>
    - "custom"      -> custom<suffix>
    - any other str -> <reference><suffix>
    """
    if reference is None:
        return None
    if reference == "":
        return f"{owner_id}{suffix}"
    if reference == CUSTOM_REFERENCE:
        return f"{CUSTOM_REFERENCE}{suffix}"
    return f"{reference}{suffix}"


def game_file_name(game_id: str) -> str:
    return f"{game_id}{GAME_SUFFIX}"


def game_id_from_file(file_name: str) -> str | None:
    if not file_name.endswith(GAME_SUFFIX):
        return None
    return file_name[: -len(GAME_SUFFIX)]


__all__ = [
    "CUSTOM_REFERENCE",
    "GAME_SUFFIX",
    "ComponentKind",
    "COMPONENTS",
    "COMPONENT_SUFFIXES",
    "component_kind",
    "resolve_reference",
    "game_file_name",
    "game_id_from_file",
]
