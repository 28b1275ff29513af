"""Descriptors exposing registered keys as instance attributes."""

from __future__ import annotations

import logging
from typing import Any

from embedded_documents.key_definitions.key_models import KeyDefinition

_LOGGER = logging.getLogger(__name__)

RAW_SUFFIX = "_before_typecast"


class ReservedKeyNameError(ValueError):
    """Raised when a key name collides with an existing class attribute."""


class KeyAccessor:
    """Typed read/write access to one key."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.read_attribute(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.write_attribute(self.name, value)


class RawValueAccessor:
    """Read-only access to the value last written to a key, before coercion."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.read_attribute_before_typecast(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"'{self.name}{RAW_SUFFIX}' is read-only")


def ensure_accessors_available(owner: type, name: str) -> None:
    """Raise ``ReservedKeyNameError`` unless ``owner`` can take accessors for ``name``."""
    _ensure_available(owner, name, KeyAccessor)
    _ensure_available(owner, f"{name}{RAW_SUFFIX}", RawValueAccessor)


def install_accessors(owner: type, key: KeyDefinition) -> None:
    """Install the typed and raw accessors for ``key`` on ``owner``."""
    ensure_accessors_available(owner, key.name)
    setattr(owner, key.name, KeyAccessor(key.name))
    setattr(owner, f"{key.name}{RAW_SUFFIX}", RawValueAccessor(key.name))
    _LOGGER.debug("Installed accessors for %s.%s", owner.__name__, key.name)


def _ensure_available(owner: type, attribute: str, accessor_type: type) -> None:
    for klass in owner.__mro__:
        if attribute in klass.__dict__:
            if isinstance(klass.__dict__[attribute], accessor_type):
                return
            raise ReservedKeyNameError(
                f"Key name '{attribute}' on {owner.__name__} collides with "
                f"{klass.__name__}.{attribute}."
            )
