"""
Session Manager - Creates and tracks in-memory game sessions.

LIFECYCLE:
1. A game is loaded once (validated, immutable) and may back many sessions
2. Creating a session gives it a private phase cursor and board state
3. The session's own game loop submits evaluated actions one at a time
4. A session ends when a goal is met or it is abandoned; nothing is persisted

Definitions are shared read-only; everything mutable is owned by exactly one
session.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid
from typing import Any, Mapping

from ..definitions.rule import ActionSpec
from ..engine_core import (
    BoardState,
    GoalEvaluator,
    GoalStatus,
    Participant,
    PhaseMachine,
    PhaseObserver,
)
from ..loader import LoadedGame

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class GameSession:
    """
    One play-through of a loaded game.

    Contains:
    - The shared, immutable game definitions
    - The session's phase machine and board state
    - Participants and the winner, once there is one
    """
    session_id: str
    game: LoadedGame
    machine: PhaseMachine
    board_state: BoardState
    evaluator: GoalEvaluator
    participants: list[Participant] = field(default_factory=list)
    created_at: float = 0.0
    state: SessionState = SessionState.ACTIVE
    winner: GoalStatus | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def current_phase(self) -> str:
        return self.machine.current_phase

    def available_actions(self) -> Mapping[str, ActionSpec]:
        return self.machine.available_actions()

    def submit(self, action: str, token: str) -> str:
        """
        Advance the phase with an evaluated action.

        Errors from the machine propagate; the phase is left unchanged.
        """
        if not self.is_active():
            raise RuntimeError(f"Session {self.session_id} is {self.state.value}")
        return self.machine.submit(action, token)

    def participant(self, player_id: str) -> Participant | None:
        for p in self.participants:
            if p.player_id == player_id:
                return p
        return None

    def check_goals(self, player_id: str) -> GoalStatus:
        """
        Evaluate the rule's goals for a player.

        A satisfied goal ends the session with that player as winner.
        """
        status = self.evaluator.evaluate(player_id, self.board_state)
        if status.satisfied and self.is_active():
            self.winner = status
            self.state = SessionState.GAME_OVER
            logger.info(
                "Session %s: %s met goal #%d", self.session_id, player_id, status.goal_index,
            )
        return status


class SessionManager:
    """
    Manages game sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        game: LoadedGame,
        players: list[tuple[str, str]] | None = None,
        observers: list[PhaseObserver] | None = None,
    ) -> GameSession:
        """
        Create a new session for a loaded game.

        Args:
            game: A fully loaded game
            players: (player_id, name) pairs
            observers: Phase event observers for this session's machine

        Returns:
            New GameSession at the rule's default phase
        """
        players = players or []
        params = game.definition.parameters
        if players and not params.min_players <= len(players) <= params.max_players:
            raise ValueError(
                f"{game.name} needs {params.min_players}-{params.max_players} players, "
                f"got {len(players)}"
            )

        session = GameSession(
            session_id=str(uuid.uuid4()),
            game=game,
            machine=PhaseMachine(game.rule, observers=observers),
            board_state=BoardState.from_board(game.board),
            evaluator=GoalEvaluator(game.rule, game.board),
            participants=[Participant(player_id=pid, name=name) for pid, name in players],
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.debug("Created session %s for game '%s'", session.session_id, game.game_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = (
                SessionState.GAME_OVER if reason == "completed" else SessionState.ABANDONED
            )
        return True

    def list_active_sessions(self) -> list[str]:
        return [sid for sid, s in self._sessions.items() if s.is_active()]
