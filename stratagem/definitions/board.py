"""
Board Definition - Fields, their borders, and named field sets.

Fields are the positions figures occupy. Relations are bidirectional borders
between two fields. Sets group fields into regions (continents) that goals and
bonuses refer to by name.
"""

from __future__ import annotations
from dataclasses import dataclass

from pydantic import ConfigDict, with_config

from .validation import FailureCode, Validatable, ValidationFailure, find_duplicates, is_blank


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class FieldDefinition:
    """A single board position."""
    id: int
    name: str
    position: tuple[int, int] = (0, 0)
    piece_position: tuple[int, int] = (0, 0)
    image: str = ""


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class FieldSetDefinition:
    """A named region made of fields."""
    name: str
    fields: tuple[int, ...]
    bonus: int = 0
    color: tuple[int, int, int] | None = None


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class BoardDefinition(Validatable):
    """Top-level content of a `.board.yaml` file."""
    id: str
    name: str
    fields: tuple[FieldDefinition, ...]
    sets: tuple[FieldSetDefinition, ...] = ()
    relations: tuple[tuple[int, int], ...] = ()
    author: str = ""
    version: str = ""
    description: str = ""

    definition_kind = "board"

    @property
    def field_ids(self) -> set[int]:
        return {f.id for f in self.fields}

    def field(self, field_id: int) -> FieldDefinition | None:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None

    def field_set(self, name: str) -> FieldSetDefinition | None:
        for s in self.sets:
            if s.name == name:
                return s
        return None

    def neighbours(self, field_id: int) -> set[int]:
        """Fields sharing a border with `field_id`."""
        result = set()
        for a, b in self.relations:
            if a == field_id:
                result.add(b)
            elif b == field_id:
                result.add(a)
        return result

    def are_adjacent(self, a: int, b: int) -> bool:
        return b in self.neighbours(a)

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.id):
            failures.append(self.failure("id", "id must not be empty", FailureCode.MISSING_VALUE))
        if is_blank(self.name):
            failures.append(self.failure("name", "name must not be empty", FailureCode.MISSING_VALUE))
        if not self.fields:
            failures.append(self.failure(
                "fields", "at least one field is required", FailureCode.EMPTY_COLLECTION,
            ))

        for dup in find_duplicates(f.id for f in self.fields):
            failures.append(self.failure(
                "fields", f"duplicate field id {dup}", FailureCode.DUPLICATE_NAME,
            ))
        for dup in find_duplicates(f.name for f in self.fields):
            failures.append(self.failure(
                "fields", f"duplicate field name '{dup}'", FailureCode.DUPLICATE_NAME,
            ))
        for f in self.fields:
            if is_blank(f.name):
                failures.append(self.failure(
                    f"fields.{f.id}.name", "field name must not be empty",
                    FailureCode.MISSING_VALUE,
                ))

        ids = self.field_ids
        for position, (a, b) in enumerate(self.relations):
            if a not in ids or b not in ids:
                failures.append(self.failure(
                    f"relations[{position}]",
                    f"relation ({a}, {b}) refers to an unknown field",
                    FailureCode.DANGLING_REFERENCE,
                ))
            elif a == b:
                failures.append(self.failure(
                    f"relations[{position}]",
                    f"field {a} cannot border itself",
                    FailureCode.DANGLING_REFERENCE,
                ))

        for dup in find_duplicates(s.name for s in self.sets):
            failures.append(self.failure(
                "sets", f"duplicate set name '{dup}'", FailureCode.DUPLICATE_NAME,
            ))
        for field_set in self.sets:
            path = f"sets.{field_set.name}"
            if is_blank(field_set.name):
                failures.append(self.failure(
                    "sets", "set name must not be empty", FailureCode.MISSING_VALUE,
                ))
            if not field_set.fields:
                failures.append(self.failure(
                    path, "set has no fields", FailureCode.EMPTY_COLLECTION,
                ))
            for member in field_set.fields:
                if member not in ids:
                    failures.append(self.failure(
                        path, f"member {member} is not a field of this board",
                        FailureCode.DANGLING_REFERENCE,
                    ))
            for dup in find_duplicates(field_set.fields):
                failures.append(self.failure(
                    path, f"field {dup} listed twice", FailureCode.DUPLICATE_NAME,
                ))
            if field_set.bonus < 0:
                failures.append(self.failure(
                    f"{path}.bonus", "bonus must be >= 0", FailureCode.OUT_OF_RANGE,
                ))

        return failures
