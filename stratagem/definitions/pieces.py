"""Pieces Definition - Figure sets, one per player colour."""

from __future__ import annotations
from dataclasses import dataclass

from pydantic import ConfigDict, with_config

from .validation import FailureCode, Validatable, ValidationFailure, find_duplicates, is_blank


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class Piece:
    """A figure worth `value` units."""
    value: int
    image: str = ""


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class PieceSet:
    name: str
    pieces: tuple[Piece, ...]


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class PiecesDefinition(Validatable):
    """Top-level content of a `.pieces.yaml` file."""
    id: str
    name: str
    sets: tuple[PieceSet, ...]
    author: str = ""
    version: str = ""
    description: str = ""

    definition_kind = "pieces"

    def piece_set(self, name: str) -> PieceSet | None:
        for s in self.sets:
            if s.name == name:
                return s
        return None

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.id):
            failures.append(self.failure("id", "id must not be empty", FailureCode.MISSING_VALUE))
        if not self.sets:
            failures.append(self.failure(
                "sets", "at least one piece set is required", FailureCode.EMPTY_COLLECTION,
            ))

        for dup in find_duplicates(s.name for s in self.sets):
            failures.append(self.failure(
                "sets", f"duplicate piece set name '{dup}'", FailureCode.DUPLICATE_NAME,
            ))

        for piece_set in self.sets:
            path = f"sets.{piece_set.name}"
            if is_blank(piece_set.name):
                failures.append(self.failure(
                    "sets", "piece set name must not be empty", FailureCode.MISSING_VALUE,
                ))
            if not piece_set.pieces:
                failures.append(self.failure(
                    path, "piece set must contain at least one piece",
                    FailureCode.EMPTY_COLLECTION,
                ))
            for dup in find_duplicates(p.value for p in piece_set.pieces):
                failures.append(self.failure(
                    path, f"duplicate piece value {dup}", FailureCode.DUPLICATE_NAME,
                ))
            for piece in piece_set.pieces:
                if piece.value < 1:
                    failures.append(self.failure(
                        f"{path}.pieces", f"piece value {piece.value} must be >= 1",
                        FailureCode.OUT_OF_RANGE,
                    ))

        return failures
