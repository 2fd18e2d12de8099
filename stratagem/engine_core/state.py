"""
Board State - Who holds which field, with how many figures.

This is the session-owned, mutable counterpart of a BoardDefinition. The
game logic that decides placements and combat lives elsewhere; it records
outcomes here so goals can be evaluated.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..definitions.board import BoardDefinition


@dataclass
class Participant:
    """A player seated in a session."""
    player_id: str
    name: str
    active: bool = True
    available_figures: int = 0


@dataclass
class FieldStatus:
    owner: str | None = None
    figures: int = 0


@dataclass
class BoardState:
    """
    Occupancy of every field of a board.

    `ever_owned` remembers every player that has held a field, so a player
    only counts as eliminated after losing ground they once had.

    Usage:
        state = BoardState.from_board(game.board)
        state.place(12, "red", 3)
        state.fields_owned_by("red")   # {12}
    """
    fields: dict[int, FieldStatus] = field(default_factory=dict)
    ever_owned: set[str] = field(default_factory=set)

    @classmethod
    def from_board(cls, board: BoardDefinition) -> BoardState:
        """Empty state with one unowned entry per board field."""
        return cls(fields={f.id: FieldStatus() for f in board.fields})

    def _status(self, field_id: int) -> FieldStatus:
        try:
            return self.fields[field_id]
        except KeyError:
            raise KeyError(f"Field {field_id} is not on this board") from None

    def place(self, field_id: int, owner: str | None, figures: int) -> None:
        """Set the owner and figure count of a field."""
        if figures < 0:
            raise ValueError(f"Figure count must be >= 0, got {figures}")
        status = self._status(field_id)
        status.owner = owner
        status.figures = figures
        if owner is not None:
            self.ever_owned.add(owner)

    def owner_of(self, field_id: int) -> str | None:
        return self._status(field_id).owner

    def figures_on(self, field_id: int) -> int:
        return self._status(field_id).figures

    def fields_owned_by(self, player_id: str) -> set[int]:
        return {fid for fid, status in self.fields.items() if status.owner == player_id}

    def figures_of(self, player_id: str) -> int:
        return sum(s.figures for s in self.fields.values() if s.owner == player_id)

    def is_eliminated(self, player_id: str) -> bool:
        """True once a player that held a field holds none."""
        return player_id in self.ever_owned and not self.fields_owned_by(player_id)
