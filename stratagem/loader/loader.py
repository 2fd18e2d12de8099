"""
Definition Loader - Read, decode and validate definition files.

`DefinitionLoader.load` is the one generic path every file takes:

    exists? -> read -> decode (YAML + shape) -> validate -> return

It knows nothing about specific kinds; kind-specific behavior lives in each
definition's `validate` and in the suffix table of `resolver`.

`DefinitionLoader.load_game` is the aggregator: it loads the root game file,
then each referenced component, and only returns once every non-absent
component loaded and validated. A failed load never leaves a partial game
behind.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging
from typing import TypeVar

from ..definitions import (
    BoardDefinition,
    CardsDefinition,
    DicesDefinition,
    GameDefinition,
    PiecesDefinition,
    RuleDefinition,
    Validatable,
    ensure_valid,
)
from ..definitions.errors import (
    DefinitionError,
    DefinitionNotFoundError,
    DefinitionParseError,
    DefinitionValidationError,
    GameLoadError,
)
from ..definitions.validation import FailureCode, ValidationFailure, freeze_mapping
from .codec import decode
from .resolver import COMPONENTS, game_file_name, resolve_reference

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Validatable)


@dataclass(frozen=True)
class LoadedGame:
    """
    A fully loaded and validated game.

    Immutable; may be shared read-only by any number of sessions.
    """
    definition: GameDefinition
    rule: RuleDefinition
    board: BoardDefinition
    pieces: PiecesDefinition
    cards: CardsDefinition | None = None
    dices: DicesDefinition | None = None
    component_files: dict[str, str | None] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "component_files", freeze_mapping(self.component_files))

    @property
    def game_id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name


class DefinitionLoader:
    """
    Loads definitions from one directory.

    Usage:
        loader = DefinitionLoader("data/games")
        game = loader.load_game("teg")
        board = loader.load(Path("data/games/teg.board.yaml"), BoardDefinition)

    `files_read` counts file reads, so callers (and tests) can see that absent
    references never touch the filesystem.
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)
        self.files_read = 0

    def load(self, path: str | Path, kind: type[T]) -> T:
        """
        Load one definition file.

        Raises DefinitionNotFoundError, DefinitionParseError or
        DefinitionValidationError, each carrying the path.
        """
        path = Path(path)
        if not path.is_file():
            raise DefinitionNotFoundError(path)

        logger.debug("Loading %s as %s", path, kind.__name__)
        self.files_read += 1
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DefinitionParseError(f"not UTF-8 text: {e}", path=path) from e
        except OSError as e:
            raise DefinitionParseError(f"cannot read file: {e}", path=path) from e

        value = decode(text, kind, path=path)
        ensure_valid(value, path=path)
        return value

    def load_component(
        self,
        owner_id: str,
        reference: str | None,
        kind: type[T],
        suffix: str,
    ) -> T | None:
        """Resolve a component reference and load it; None when absent."""
        file_name = resolve_reference(reference, owner_id, suffix)
        if file_name is None:
            logger.debug("Skipping absent %s component of '%s'", suffix, owner_id)
            return None
        return self.load(self.base_dir / file_name, kind)

    def load_game(self, game_id: str) -> LoadedGame:
        """
        Load a game and every component it references.

        Raises GameLoadError naming the component that broke the load.
        """
        path = self.base_dir / game_file_name(game_id)
        try:
            definition = self.load(path, GameDefinition)
        except DefinitionError as e:
            raise GameLoadError(game_id, "game", e) from e

        if definition.id != game_id:
            error = DefinitionValidationError(
                kind=GameDefinition.definition_kind,
                failures=[ValidationFailure(
                    GameDefinition.definition_kind,
                    "id",
                    f"file declares id '{definition.id}', expected '{game_id}'",
                    FailureCode.ID_MISMATCH,
                )],
                path=path,
            )
            raise GameLoadError(game_id, "game", error)

        loaded: dict[str, Validatable | None] = {}
        files: dict[str, str | None] = {}
        for component in COMPONENTS:
            reference = definition.reference(component.field)
            files[component.field] = resolve_reference(reference, game_id, component.suffix)
            try:
                loaded[component.field] = self.load_component(
                    game_id, reference, component.definition, component.suffix,
                )
            except DefinitionError as e:
                raise GameLoadError(game_id, component.field, e) from e

        game = LoadedGame(
            definition=definition,
            rule=loaded["rule"],
            board=loaded["board"],
            pieces=loaded["pieces"],
            cards=loaded["cards"],
            dices=loaded["dices"],
            component_files=files,
        )
        logger.info(
            "Loaded game '%s' (%s)",
            game_id,
            ", ".join(f"{k}={v}" for k, v in files.items() if v is not None),
        )
        return game


def load_definition(path: str | Path, kind: type[T]) -> T:
    """Load a single definition file."""
    path = Path(path)
    return DefinitionLoader(path.parent).load(path, kind)


def load_game(game_id: str, data_dir: str | Path | None = None) -> LoadedGame:
    """
    Convenience function to load a game.

    Uses the configured data directory when none is given.
    """
    if data_dir is None:
        from ..config import get_settings
        data_dir = get_settings().data_dir
    return DefinitionLoader(data_dir).load_game(game_id)
