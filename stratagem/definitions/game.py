"""
Game Definition - The root file that names every component of a game.

Each component field is a reference:
- missing or null: the component is absent and never loaded
- "" (empty): use the game id as file prefix
- "custom": use the shared `custom` prefix
- anything else: use it as the file prefix

`rule`, `board` and `pieces` must be present; `cards` and `dices` are optional.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, with_config

from .validation import FailureCode, Validatable, ValidationFailure, is_blank

REQUIRED_COMPONENTS = ("rule", "board", "pieces")
OPTIONAL_COMPONENTS = ("cards", "dices")


class ControlBonusMode(Enum):
    """When field set bonuses are granted."""
    OFF = "off"
    ONCE = "once"
    TURN = "turn"


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class PlacementConfig:
    """How many figures players place per round."""
    setup_round_figures: int
    regular_round_figures: int
    fieldsets_bonus: bool = False
    control_bonus: ControlBonusMode = ControlBonusMode.OFF


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class GameParameters:
    min_players: int
    max_players: int
    placement: PlacementConfig
    card_bonus_sequence: tuple[int, ...]


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class GameDefinition(Validatable):
    """Top-level content of a `.game.yaml` file."""
    id: str
    name: str
    parameters: GameParameters
    rule: Optional[str] = None
    board: Optional[str] = None
    pieces: Optional[str] = None
    cards: Optional[str] = None
    dices: Optional[str] = None
    description: str = ""

    definition_kind = "game"

    def reference(self, component: str) -> str | None:
        """The raw reference value of a component field."""
        if component not in REQUIRED_COMPONENTS + OPTIONAL_COMPONENTS:
            raise KeyError(component)
        return getattr(self, component)

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.id):
            failures.append(self.failure("id", "id must not be empty", FailureCode.MISSING_VALUE))
        if is_blank(self.name):
            failures.append(self.failure("name", "name must not be empty", FailureCode.MISSING_VALUE))

        for component in REQUIRED_COMPONENTS:
            if getattr(self, component) is None:
                failures.append(self.failure(
                    component, f"{component} reference is required",
                    FailureCode.MISSING_VALUE,
                ))

        params = self.parameters
        if params.min_players < 1:
            failures.append(self.failure(
                "parameters.min_players", "must be >= 1", FailureCode.OUT_OF_RANGE,
            ))
        if params.max_players < params.min_players:
            failures.append(self.failure(
                "parameters.max_players", "must be >= min_players", FailureCode.OUT_OF_RANGE,
            ))
        if not params.card_bonus_sequence:
            failures.append(self.failure(
                "parameters.card_bonus_sequence", "must not be empty",
                FailureCode.EMPTY_COLLECTION,
            ))
        if any(bonus < 0 for bonus in params.card_bonus_sequence):
            failures.append(self.failure(
                "parameters.card_bonus_sequence", "bonuses must be >= 0",
                FailureCode.OUT_OF_RANGE,
            ))
        if params.placement.setup_round_figures < 0 or params.placement.regular_round_figures < 0:
            failures.append(self.failure(
                "parameters.placement", "figure counts must be >= 0",
                FailureCode.OUT_OF_RANGE,
            ))

        return failures
