"""Schema registry entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ASCENDING = 1
DESCENDING = -1


class ValidationRule(str, Enum):
    """Validation rules derived from key options."""

    PRESENCE = "presence"
    UNIQUENESS = "uniqueness"
    NUMERICALITY = "numericality"
    FORMAT = "format"
    LENGTH = "length"


@dataclass(frozen=True)
class ValidationRequest:
    """One validation rule to attach to one attribute."""

    attribute: str
    rule: ValidationRule
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class IndexRequest:
    """Index to create for a persistable document collection."""

    fields: tuple[tuple[str, int], ...]
    unique: bool = False
