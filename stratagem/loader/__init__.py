"""
Loader - Generic, validated loading of definition files.

The loader:
1. Resolves a component reference to a file name
2. Reads and decodes the YAML into the target definition type
3. Validates the definition
4. Assembles a game only when every referenced component is valid
"""

from .codec import decode, encode, to_data
from .resolver import (
    CUSTOM_REFERENCE,
    GAME_SUFFIX,
    COMPONENTS,
    COMPONENT_SUFFIXES,
    ComponentKind,
    component_kind,
    resolve_reference,
)
from .loader import DefinitionLoader, LoadedGame, load_definition, load_game
from .catalog import GameCatalog, CatalogReport

__all__ = [
    "decode",
    "encode",
    "to_data",
    "CUSTOM_REFERENCE",
    "GAME_SUFFIX",
    "COMPONENTS",
    "COMPONENT_SUFFIXES",
    "ComponentKind",
    "component_kind",
    "resolve_reference",
    "DefinitionLoader",
    "LoadedGame",
    "load_definition",
    "load_game",
    "GameCatalog",
    "CatalogReport",
]
