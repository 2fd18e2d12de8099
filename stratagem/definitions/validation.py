"""
Definition Validation - The check every definition kind implements.

Validation runs immediately after a file is deserialized and before the value
is handed to any caller. A definition with no failures is valid and is treated
as immutable truth from then on. Nothing is defaulted or repaired: any failure
aborts the load of the enclosing definition.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Iterable


class FailureCode(Enum):
    """Why a definition was rejected."""
    MISSING_VALUE = "missing_value"
    EMPTY_COLLECTION = "empty_collection"
    DUPLICATE_NAME = "duplicate_name"
    DANGLING_REFERENCE = "dangling_reference"
    DANGLING_PHASE = "dangling_phase"
    MISSING_DEFAULT_PHASE = "missing_default_phase"
    UNKNOWN_CONSTRAINT = "unknown_constraint"
    CONSTRAINT_TYPE = "constraint_type"
    FALLBACK_CYCLE = "fallback_cycle"
    FALLBACK_TOO_DEEP = "fallback_too_deep"
    OUT_OF_RANGE = "out_of_range"
    ID_MISMATCH = "id_mismatch"


@dataclass(frozen=True)
class ValidationFailure:
    """
    One reason a definition is invalid.

    `field` is a dotted path into the definition, e.g.
    `phases.attack.encounter.result.won`.
    """
    kind: str
    field: str
    reason: str
    code: FailureCode

    def __str__(self) -> str:
        return f"{self.kind}: {self.field}: {self.reason}"


class Validatable(ABC):
    """
    Implemented by every definition kind.

    Subclasses set `definition_kind` and return every failure they find,
    not just the first one.
    """
    definition_kind: ClassVar[str] = "definition"

    @abstractmethod
    def validate(self) -> list[ValidationFailure]:
        """Check internal and cross-field consistency."""

    def failure(self, field_path: str, reason: str, code: FailureCode) -> ValidationFailure:
        return ValidationFailure(
            kind=self.definition_kind,
            field=field_path,
            reason=reason,
            code=code,
        )


@dataclass
class ValidationResult:
    """Result of validating a single definition."""
    kind: str
    failures: list[ValidationFailure] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.failures

    @property
    def errors(self) -> list[str]:
        return [str(f) for f in self.failures]


def check(definition: Validatable) -> ValidationResult:
    """Run validation and wrap the failures in a result."""
    return ValidationResult(
        kind=definition.definition_kind,
        failures=list(definition.validate()),
    )


def ensure_valid(definition: Validatable, path: Path | None = None) -> None:
    """
    Raise DefinitionValidationError if the definition has any failures.
    """
    from .errors import DefinitionValidationError

    result = check(definition)
    if not result.valid:
        raise DefinitionValidationError(
            kind=result.kind,
            failures=result.failures,
            path=path,
        )


def find_duplicates(names: Iterable) -> list:
    """Return values occurring more than once, in first-seen order."""
    counts = Counter(names)
    seen = []
    for name, count in counts.items():
        if count > 1:
            seen.append(name)
    return seen


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ReadOnlyDict(dict):
    """
    A dict that refuses mutation.

    Validated definitions are shared between sessions, so their mapping
    fields are wrapped in this after decoding. It stays a real dict for
    serialization and equality.
    """

    def _readonly(self, *args, **kwargs):
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = _readonly
    __delitem__ = _readonly
    __ior__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly

    def __reduce__(self):
        return type(self), (dict(self),)

    def __hash__(self):
        return hash(frozenset(self.items()))


def freeze_mapping(value) -> ReadOnlyDict:
    """Copy a mapping into a ReadOnlyDict; nested dict values are frozen too."""
    if isinstance(value, ReadOnlyDict):
        return value
    return ReadOnlyDict(
        (key, freeze_mapping(item) if isinstance(item, dict) else item)
        for key, item in value.items()
    )
