"""
Session Module - In-memory game sessions.

A session represents one play-through of a loaded game:
- Shares the game's immutable definitions
- Owns its phase cursor and board state
- Ends when a goal is met or the session is abandoned

Sessions are never persisted.
"""

from .manager import SessionManager, GameSession, SessionState

__all__ = [
    "SessionManager",
    "GameSession",
    "SessionState",
]
