"""Model definition entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class KeySpec:
    """One key as declared in a definitions file."""

    name: str
    type_name: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class AssociationSpec:
    """One association as declared in a definitions file."""

    name: str
    cardinality: str
    target: str


@dataclass(frozen=True)
class ModelSpec:
    """Normalized model declaration."""

    name: str
    parent: str | None
    document: bool
    keys: tuple[KeySpec, ...]
    associations: tuple[AssociationSpec, ...]


@dataclass(frozen=True)
class ModelDefinitions:
    """Top-level definitions aggregate."""

    path: Path | None
    models: tuple[ModelSpec, ...]

    def model(self, name: str) -> ModelSpec | None:
        for spec in self.models:
            if spec.name == name:
                return spec
        return None
