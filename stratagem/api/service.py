"""
API Service - Business logic between the HTTP layer and the loader.

This layer is framework-agnostic. Loaded games are immutable, so they are
cached after the first successful load; failed loads are never cached.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .. import __version__
from ..definitions.errors import (
    CatalogError,
    DefinitionNotFoundError,
    DefinitionParseError,
    DefinitionValidationError,
    GameLoadError,
)
from ..loader import GameCatalog, LoadedGame
from .schemas import (
    BoardInfo,
    ErrorCode,
    ErrorResponse,
    FailureInfo,
    GameListEntry,
    GameListResponse,
    GameLoadStatus,
    GameSummaryResponse,
    GoalInfo,
    HealthResponse,
    LoadErrorInfo,
    PhaseGraphResponse,
    TransitionInfo,
)


def _error_info(error: GameLoadError) -> LoadErrorInfo:
    inner = error.error
    failures = []
    if isinstance(inner, DefinitionValidationError):
        failures = [
            FailureInfo(kind=f.kind, field=f.field, reason=f.reason, code=f.code.value)
            for f in inner.failures
        ]
    return LoadErrorInfo(
        component=error.component,
        path=str(error.path) if error.path else None,
        message=inner.message,
        failures=failures,
    )


def _error_code(error: GameLoadError) -> ErrorCode:
    inner = error.error
    if isinstance(inner, DefinitionNotFoundError):
        return ErrorCode.GAME_NOT_FOUND if error.component == "game" else ErrorCode.DEFINITION_INVALID
    if isinstance(inner, DefinitionParseError):
        return ErrorCode.DEFINITION_PARSE_ERROR
    return ErrorCode.DEFINITION_INVALID


@dataclass
class CatalogService:
    """
    Read-only access to the game catalog.

    Usage:
        service = CatalogService(GameCatalog("data/games"))
        service.list_games()
        service.get_game("teg")
    """
    catalog: GameCatalog
    env: str = "development"
    _games: dict[str, LoadedGame] = field(default_factory=dict)

    def health(self) -> HealthResponse:
        return HealthResponse(
            version=__version__,
            env=self.env,
            data_dirs=[str(d) for d in self.catalog.directories],
        )

    def load(self, game_id: str) -> LoadedGame:
        """Load (or return the cached) game. Raises GameLoadError."""
        game = self._games.get(game_id)
        if game is None:
            game = self.catalog.load(game_id)
            self._games[game_id] = game
        return game

    def reload(self) -> None:
        self._games.clear()

    def list_games(self) -> GameListResponse | ErrorResponse:
        try:
            game_ids = self.catalog.game_ids()
        except CatalogError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.DUPLICATE_GAME)

        entries = []
        for game_id in game_ids:
            try:
                game = self.load(game_id)
            except GameLoadError as e:
                entries.append(GameListEntry(
                    game_id=game_id,
                    status=GameLoadStatus.FAILED,
                    error=_error_info(e),
                ))
            else:
                entries.append(GameListEntry(
                    game_id=game_id,
                    name=game.name,
                    status=GameLoadStatus.LOADED,
                ))
        return GameListResponse(games=entries, count=len(entries))

    def get_game(self, game_id: str) -> GameSummaryResponse | ErrorResponse:
        try:
            game = self.load(game_id)
        except CatalogError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.DUPLICATE_GAME)
        except GameLoadError as e:
            return ErrorResponse(error=str(e), error_code=_error_code(e), details=_error_info(e))
        return self._summary(game)

    def get_phases(self, game_id: str) -> PhaseGraphResponse | ErrorResponse:
        try:
            game = self.load(game_id)
        except CatalogError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.DUPLICATE_GAME)
        except GameLoadError as e:
            return ErrorResponse(error=str(e), error_code=_error_code(e), details=_error_info(e))

        rule = game.rule
        return PhaseGraphResponse(
            game_id=game.game_id,
            default_phase=rule.default_phase,
            absorbing_phases=[p for p in rule.phase_ids if rule.is_absorbing(p)],
            transitions=[
                TransitionInfo(
                    phase=t.phase, action=t.action, token=t.token, next_phase=t.next_phase,
                )
                for t in rule.transitions()
            ],
        )

    def _summary(self, game: LoadedGame) -> GameSummaryResponse:
        params = game.definition.parameters
        board = game.board
        return GameSummaryResponse(
            game_id=game.game_id,
            name=game.name,
            description=game.definition.description,
            min_players=params.min_players,
            max_players=params.max_players,
            component_files=dict(game.component_files),
            default_phase=game.rule.default_phase,
            phases=game.rule.phase_ids,
            goals=[
                GoalInfo(index=i, kind=g.kind, id=g.id, description=g.description)
                for i, g in enumerate(game.rule.goals)
            ],
            board=BoardInfo(
                board_id=board.id,
                name=board.name,
                field_count=len(board.fields),
                set_names=[s.name for s in board.sets],
                relation_count=len(board.relations),
            ),
            piece_sets=[s.name for s in game.pieces.sets],
            card_count=game.cards.deck_size if game.cards else None,
            dice_sets=[d.name for d in game.dices.dice_sets] if game.dices else None,
        )
