"""Per-instance raw and typed attribute storage."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from embedded_documents.key_definitions.key_models import KeyDefinition

KeyLookup = Callable[[], Mapping[str, KeyDefinition]]


class UnknownAttributeError(KeyError):
    """Raised when an attribute name is not a registered key."""

    def __init__(self, name: str, owner: str | None = None) -> None:
        self.name = name
        self.owner = owner
        location = f" on {owner}" if owner else ""
        super().__init__(f"Unknown attribute '{name}'{location}.")

    def __str__(self) -> str:
        return str(self.args[0])


class AttributeStore:
    """Raw (pre-coercion) and typed (post-coercion) values keyed by key name.

    The typed slot is always derived from the raw slot through the key's
    coercer. An instance owns its store exclusively; it is not thread-safe.
    """

    def __init__(self, key_lookup: KeyLookup, owner_name: str | None = None) -> None:
        self._key_lookup = key_lookup
        self._owner_name = owner_name
        self._raw: dict[str, Any] = {}
        self._typed: dict[str, Any] = {}

    def read(self, name: str) -> Any:
        return self._read(self._defined_key(name))

    def read_raw(self, name: str) -> Any:
        self._defined_key(name)
        return self._raw.get(name)

    def write(self, name: str, value: Any) -> None:
        key = self._defined_key(name)
        self._raw[name] = value
        try:
            self._typed[name] = key.set(value)
        except Exception:
            self._typed.pop(name, None)
            raise

    def assign(self, attrs: Mapping[str, Any] | None) -> None:
        """Write every entry of ``attrs`` or, on any error, none of them."""
        if not attrs:
            return
        self.commit(self.stage(attrs))

    def stage(self, attrs: Mapping[str, Any]) -> dict[str, tuple[Any, Any]]:
        """Check names and coerce every entry without storing anything.

        Unknown names are rejected before any value is coerced.
        """
        keys = self._key_lookup()
        for name in attrs:
            if name not in keys:
                raise UnknownAttributeError(name, self._owner_name)
        return {name: (value, keys[name].set(value)) for name, value in attrs.items()}

    def commit(self, staged: Mapping[str, tuple[Any, Any]]) -> None:
        for name, (raw, typed) in staged.items():
            self._raw[name] = raw
            self._typed[name] = typed

    def to_attribute_mapping(self) -> dict[str, Any]:
        attributes: dict[str, Any] = {}
        for key in self._key_lookup().values():
            value = self._read(key)
            if value is not None and not key.native:
                value = value.attributes
            if value is not None:
                attributes[key.name] = value
        return attributes

    def _read(self, key: KeyDefinition) -> Any:
        if key.name not in self._typed:
            return None
        return key.get(self._typed[key.name])

    def _defined_key(self, name: str) -> KeyDefinition:
        key = self._key_lookup().get(name)
        if key is None:
            raise UnknownAttributeError(name, self._owner_name)
        return key
