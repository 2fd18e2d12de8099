"""
Definition Errors - Everything that can abort a load.

Kinds:
- DefinitionNotFoundError: the resolved file does not exist
- DefinitionParseError: the file is not well-formed, or its shape does not
  match the target definition type
- DefinitionValidationError: the file parsed but broke a structural invariant
- GameLoadError: a component of a game failed; wraps one of the above with the
  game id, the component field and the file that broke the load
- CatalogError: two game files claim the same identifier

All of them are terminal for the load attempt that produced them.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import ValidationFailure


class DefinitionError(Exception):
    """Base class for load and validation failures."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        self.message = message
        super().__init__(message if path is None else f"{path}: {message}")


class DefinitionNotFoundError(DefinitionError):
    """Raised when a definition file does not exist."""

    def __init__(self, path: Path):
        super().__init__("definition file not found", path=path)


class DefinitionParseError(DefinitionError):
    """Raised when a definition file cannot be deserialized."""

    def __init__(self, reason: str, path: Path | None = None):
        self.reason = reason
        super().__init__(f"parse error: {reason}", path=path)


class DefinitionValidationError(DefinitionError):
    """Raised when a deserialized definition breaks an invariant."""

    def __init__(
        self,
        kind: str,
        failures: list[ValidationFailure],
        path: Path | None = None,
    ):
        self.kind = kind
        self.failures = list(failures)
        summary = "; ".join(str(f) for f in self.failures)
        super().__init__(
            f"{kind} validation failed with {len(self.failures)} error(s): {summary}",
            path=path,
        )

    @property
    def codes(self) -> set:
        return {f.code for f in self.failures}


class GameLoadError(DefinitionError):
    """
    Raised by the aggregator when any file of a game fails to load.

    `error` is the underlying DefinitionError; `component` is the game field
    being loaded ("game" for the root file itself).
    """

    def __init__(self, game_id: str, component: str, error: DefinitionError):
        self.game_id = game_id
        self.component = component
        self.error = error
        super().__init__(
            f"game '{game_id}': failed to load {component}: {error.message}",
            path=error.path,
        )


class CatalogError(DefinitionError):
    """Raised when a catalog holds two games with the same identifier."""

    def __init__(self, game_id: str, paths: list[Path]):
        self.game_id = game_id
        self.paths = list(paths)
        listed = ", ".join(str(p) for p in self.paths)
        super().__init__(f"duplicate game id '{game_id}' in {listed}")
