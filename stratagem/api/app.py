"""
FastAPI Application - Read-only REST API over the game catalog.

Endpoints:
    GET  /api/v1/health                 Service status
    GET  /api/v1/games                  List games and their load status
    GET  /api/v1/games/{id}             Summary of a fully loaded game
    GET  /api/v1/games/{id}/phases      Phase transition graph of a game

Sessions are not exposed over HTTP.
"""

from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_settings
from ..loader import GameCatalog
from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameSummaryResponse,
    HealthResponse,
    PhaseGraphResponse,
)
from .service import CatalogService

_STATUS_BY_CODE = {
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.DEFINITION_PARSE_ERROR: 422,
    ErrorCode.DEFINITION_INVALID: 422,
    ErrorCode.DUPLICATE_GAME: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


def _error_response(error: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_CODE[error.error_code],
        content=error.model_dump(mode="json"),
    )


def create_app(service: Optional[CatalogService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional CatalogService (built from settings if not provided)

    Returns:
        FastAPI application instance
    """
    settings = get_settings()
    if service is None:
        service = CatalogService(catalog=GameCatalog(settings.data_dir), env=settings.env)

    app = FastAPI(
        title="Stratagem Definitions API",
        description="Inspect validated strategy game definitions.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Service"],
        summary="Service status",
    )
    async def health() -> HealthResponse:
        return service.health()

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        responses={409: {"model": ErrorResponse}},
        tags=["Games"],
        summary="List games in the catalog",
    )
    async def list_games() -> Union[GameListResponse, JSONResponse]:
        """List every game file and whether it loads."""
        result = service.list_games()
        if isinstance(result, ErrorResponse):
            return _error_response(result)
        return result

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameSummaryResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Duplicate game id"},
            422: {"model": ErrorResponse, "description": "A definition file is broken"},
        },
        tags=["Games"],
        summary="Get a loaded game",
    )
    async def get_game(game_id: str) -> Union[GameSummaryResponse, JSONResponse]:
        """Load a game with all its components and summarise it."""
        result = service.get_game(game_id)
        if isinstance(result, ErrorResponse):
            return _error_response(result)
        return result

    @app.get(
        "/api/v1/games/{game_id}/phases",
        response_model=PhaseGraphResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            422: {"model": ErrorResponse, "description": "A definition file is broken"},
        },
        tags=["Games"],
        summary="Get the phase graph of a game",
    )
    async def get_phases(game_id: str) -> Union[PhaseGraphResponse, JSONResponse]:
        result = service.get_phases(game_id)
        if isinstance(result, ErrorResponse):
            return _error_response(result)
        return result

    return app


# Module-level app for `uvicorn stratagem.api.app:app`
app = create_app()
