"""Dices Definition - Named dice and their faces."""

from __future__ import annotations
from dataclasses import dataclass

from pydantic import ConfigDict, with_config

from .validation import FailureCode, Validatable, ValidationFailure, find_duplicates, is_blank


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class DiceFace:
    value: int
    image: str = ""


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class DiceSet:
    """One die (e.g. the attacker's red die)."""
    name: str
    faces: tuple[DiceFace, ...]


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class DicesDefinition(Validatable):
    """Top-level content of a `.dices.yaml` file."""
    id: str
    name: str
    dice_sets: tuple[DiceSet, ...]
    author: str = ""
    version: str = ""
    description: str = ""

    definition_kind = "dices"

    def dice_set(self, name: str) -> DiceSet | None:
        for d in self.dice_sets:
            if d.name == name:
                return d
        return None

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.id):
            failures.append(self.failure("id", "id must not be empty", FailureCode.MISSING_VALUE))
        if not self.dice_sets:
            failures.append(self.failure(
                "dice_sets", "at least one dice set is required", FailureCode.EMPTY_COLLECTION,
            ))

        for dup in find_duplicates(d.name for d in self.dice_sets):
            failures.append(self.failure(
                "dice_sets", f"duplicate dice set name '{dup}'", FailureCode.DUPLICATE_NAME,
            ))

        for dice_set in self.dice_sets:
            if is_blank(dice_set.name):
                failures.append(self.failure(
                    "dice_sets", "dice set name must not be empty", FailureCode.MISSING_VALUE,
                ))
            if not dice_set.faces:
                failures.append(self.failure(
                    f"dice_sets.{dice_set.name}", "a die needs at least one face",
                    FailureCode.EMPTY_COLLECTION,
                ))

        return failures
