"""Key definition entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .type_coercion import TypeCoercer, coercer_for, is_native_type

KNOWN_OPTIONS: tuple[str, ...] = ("required", "unique", "numeric", "format", "length", "index")


@dataclass(frozen=True)
class KeyDefinition:
    """Named, typed field declaration on a document class."""

    name: str
    type: Any
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Key name must be a non-empty string.")
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        # Resolves eagerly so unsupported types fail at declaration time.
        coercer_for(self.type)

    @property
    def native(self) -> bool:
        return is_native_type(self.type)

    @property
    def coercer(self) -> TypeCoercer:
        return coercer_for(self.type)

    @property
    def type_name(self) -> str:
        return getattr(self.type, "__name__", repr(self.type))

    def set(self, value: Any) -> Any:
        """Coerce a raw value on write."""
        return self.coercer.set(value)

    def get(self, value: Any) -> Any:
        """Coerce a stored value on read."""
        return self.coercer.get(value)
