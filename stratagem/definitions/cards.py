"""Cards Definition - The deck of field cards players trade in for bonuses."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pydantic import ConfigDict, with_config

from .validation import FailureCode, Validatable, ValidationFailure, find_duplicates, is_blank


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class CardDefinition:
    """
    A card kind.

    `field` optionally ties the card to a board field id; boards are not
    consulted here, so the id is not checked against one.
    """
    name: str
    symbol: str
    field: Optional[int] = None
    count: int = 1
    image: str = ""


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class CardsDefinition(Validatable):
    """Top-level content of a `.cards.yaml` file."""
    id: str
    name: str
    cards: tuple[CardDefinition, ...]
    author: str = ""
    version: str = ""
    description: str = ""

    definition_kind = "cards"

    @property
    def deck_size(self) -> int:
        return sum(c.count for c in self.cards)

    def card(self, name: str) -> CardDefinition | None:
        for c in self.cards:
            if c.name == name:
                return c
        return None

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.id):
            failures.append(self.failure("id", "id must not be empty", FailureCode.MISSING_VALUE))

        for dup in find_duplicates(c.name for c in self.cards):
            failures.append(self.failure(
                "cards", f"duplicate card name '{dup}'", FailureCode.DUPLICATE_NAME,
            ))

        for card in self.cards:
            path = f"cards.{card.name}"
            if is_blank(card.name):
                failures.append(self.failure(
                    "cards", "card name must not be empty", FailureCode.MISSING_VALUE,
                ))
            if is_blank(card.symbol):
                failures.append(self.failure(
                    f"{path}.symbol", "symbol must not be empty", FailureCode.MISSING_VALUE,
                ))
            if card.count < 1:
                failures.append(self.failure(
                    f"{path}.count", "count must be >= 1", FailureCode.OUT_OF_RANGE,
                ))

        return failures
