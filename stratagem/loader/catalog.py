"""
Game Catalog - The games available across one or more data directories.

Game identifiers must be unique within a catalog. Each game's components are
resolved relative to the directory its game file lives in.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging

from ..definitions.errors import CatalogError, GameLoadError
from .loader import DefinitionLoader, LoadedGame
from .resolver import GAME_SUFFIX, game_id_from_file

logger = logging.getLogger(__name__)


@dataclass
class CatalogReport:
    """Outcome of loading every game in a catalog."""
    games: dict[str, LoadedGame] = field(default_factory=dict)
    errors: dict[str, GameLoadError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class GameCatalog:
    """
    Index of game files.

    Usage:
        catalog = GameCatalog(["data/games", "~/.stratagem/games"])
        for game_id in catalog.game_ids():
            game = catalog.load(game_id)
    """

    def __init__(self, directories: list[str | Path] | str | Path):
        if isinstance(directories, (str, Path)):
            directories = [directories]
        self.directories = [Path(d).expanduser() for d in directories]

    def _scan(self) -> dict[str, list[Path]]:
        found: dict[str, list[Path]] = {}
        for directory in self.directories:
            if not directory.is_dir():
                logger.debug("Catalog directory %s does not exist", directory)
                continue
            for path in sorted(directory.glob(f"*{GAME_SUFFIX}")):
                game_id = game_id_from_file(path.name)
                if game_id:
                    found.setdefault(game_id, []).append(path)
        return found

    def _index(self) -> dict[str, Path]:
        index = {}
        for game_id, paths in self._scan().items():
            if len(paths) > 1:
                raise CatalogError(game_id, paths)
            index[game_id] = paths[0]
        return index

    def game_ids(self) -> list[str]:
        """Sorted identifiers of every game file. Raises CatalogError on duplicates."""
        return sorted(self._index())

    def path_of(self, game_id: str) -> Path | None:
        return self._index().get(game_id)

    def load(self, game_id: str) -> LoadedGame:
        """
        Load one game.

        Raises GameLoadError when the game is unknown or any component fails,
        and CatalogError when the catalog holds duplicate game ids.
        """
        path = self.path_of(game_id)
        if path is None:
            directory = self.directories[0] if self.directories else Path(".")
            return DefinitionLoader(directory).load_game(game_id)
        return DefinitionLoader(path.parent).load_game(game_id)

    def load_all(self) -> CatalogReport:
        """Load every game, collecting failures per game."""
        report = CatalogReport()
        for game_id, path in sorted(self._index().items()):
            try:
                report.games[game_id] = DefinitionLoader(path.parent).load_game(game_id)
            except GameLoadError as e:
                logger.warning("Game '%s' failed to load: %s", game_id, e)
                report.errors[game_id] = e
        return report


