"""Association entities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from embedded_documents.key_definitions.type_coercion import CoercionError, EmbeddedValueCoercer


class Cardinality(str, Enum):
    """Supported association cardinalities."""

    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class Association:
    """Declared relation from one document class to another."""

    name: str
    cardinality: Cardinality
    target_type: type

    @property
    def storage_name(self) -> str:
        return f"_association__{self.name}"

    def get(self, instance: Any) -> Any:
        return instance.__dict__.get(self.storage_name)

    def set(self, instance: Any, value: Any) -> None:
        self.store(instance, self.coerce(value))

    def store(self, instance: Any, coerced: Any) -> None:
        instance.__dict__[self.storage_name] = coerced

    def coerce(self, value: Any) -> Any:
        coercer = EmbeddedValueCoercer(self.target_type)
        if self.cardinality is Cardinality.ONE or value is None:
            return coercer.set(value)
        if isinstance(value, str | bytes | Mapping) or not isinstance(value, Iterable):
            raise CoercionError(
                f"Association '{self.name}' expects a collection of "
                f"{self.target_type.__name__}, got {value!r}."
            )
        return [coercer.set(item) for item in value]
