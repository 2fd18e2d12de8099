"""
API Module - HTTP access to the game catalog.

Read-only: lists games, reports why a game fails to load, and exposes the
summary and phase graph of loaded games.
"""

from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameSummaryResponse,
    HealthResponse,
    PhaseGraphResponse,
)
from .service import CatalogService
from .app import create_app

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "GameListResponse",
    "GameSummaryResponse",
    "HealthResponse",
    "PhaseGraphResponse",
    "CatalogService",
    "create_app",
]
