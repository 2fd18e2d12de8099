"""
Definition Codec - YAML text <-> typed definition models.

YAML is parsed with `yaml.safe_load`; the resulting plain data is shaped into
the target dataclass by a pydantic TypeAdapter. Both malformed YAML and
well-formed YAML of the wrong shape are parse failures. Semantic checks are
not done here; see `definitions.validation`.
"""

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from ..definitions.errors import DefinitionParseError

T = TypeVar("T")


@lru_cache(maxsize=None)
def adapter_for(kind: type) -> TypeAdapter:
    """Build (once) the adapter for a definition type."""
    return TypeAdapter(kind)


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def decode_data(data: Any, kind: type[T], path: Path | None = None) -> T:
    """Shape already-parsed data into `kind`."""
    try:
        return adapter_for(kind).validate_python(data)
    except ValidationError as e:
        raise DefinitionParseError(_describe(e), path=path) from e


def decode(text: str, kind: type[T], path: Path | None = None) -> T:
    """Parse YAML text into `kind`."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionParseError(f"malformed YAML: {e}", path=path) from e

    if not isinstance(data, dict):
        raise DefinitionParseError(
            f"expected a mapping at the top level, got {type(data).__name__}",
            path=path,
        )
    return decode_data(data, kind, path)


def to_data(value: Any) -> dict[str, Any]:
    """Plain JSON-compatible data for a definition."""
    return adapter_for(type(value)).dump_python(value, mode="json", exclude_none=True)


def encode(value: Any) -> str:
    """Serialize a definition back to YAML text."""
    return yaml.safe_dump(to_data(value), sort_keys=False, allow_unicode=True)
