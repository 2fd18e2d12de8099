"""
Pydantic Schemas for API - Response models for OpenAPI.

Error Codes:
- GAME_NOT_FOUND: No game file with that identifier
- DEFINITION_PARSE_ERROR: A referenced file is malformed
- DEFINITION_INVALID: A referenced file broke a structural invariant
- DUPLICATE_GAME: Two game files declare the same identifier
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    DEFINITION_PARSE_ERROR = "DEFINITION_PARSE_ERROR"
    DEFINITION_INVALID = "DEFINITION_INVALID"
    DUPLICATE_GAME = "DUPLICATE_GAME"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GameLoadStatus(str, Enum):
    LOADED = "loaded"
    FAILED = "failed"


# =============================================================================
# Shared Models
# =============================================================================

class FailureInfo(BaseModel):
    """One validation failure."""
    kind: str
    field: str
    reason: str
    code: str


class LoadErrorInfo(BaseModel):
    """Why a game could not be loaded."""
    component: str
    path: Optional[str] = None
    message: str
    failures: list[FailureInfo] = Field(default_factory=list)


class GoalInfo(BaseModel):
    index: int
    kind: str
    id: Optional[str] = None
    description: str = ""


class BoardInfo(BaseModel):
    board_id: str
    name: str
    field_count: int
    set_names: list[str] = Field(default_factory=list)
    relation_count: int = 0


class TransitionInfo(BaseModel):
    """One edge of the phase graph."""
    phase: str
    action: str
    token: str
    next_phase: str


# =============================================================================
# Responses
# =============================================================================

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    env: str
    data_dirs: list[str] = Field(default_factory=list)


class GameListEntry(BaseModel):
    game_id: str
    name: Optional[str] = None
    status: GameLoadStatus
    error: Optional[LoadErrorInfo] = None


class GameListResponse(BaseModel):
    games: list[GameListEntry] = Field(default_factory=list)
    count: int = 0


class GameSummaryResponse(BaseModel):
    """A fully loaded game."""
    game_id: str
    name: str
    description: str = ""
    min_players: int
    max_players: int
    component_files: dict[str, Optional[str]] = Field(
        description="Resolved file per component; null when absent"
    )
    default_phase: str
    phases: list[str] = Field(default_factory=list)
    goals: list[GoalInfo] = Field(default_factory=list)
    board: BoardInfo
    piece_sets: list[str] = Field(default_factory=list)
    card_count: Optional[int] = None
    dice_sets: Optional[list[str]] = None


class PhaseGraphResponse(BaseModel):
    game_id: str
    default_phase: str
    absorbing_phases: list[str] = Field(default_factory=list)
    transitions: list[TransitionInfo] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    error_code: ErrorCode
    details: Optional[LoadErrorInfo] = None
