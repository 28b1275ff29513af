"""Attribute storage exports."""

from .attribute_store import AttributeStore, KeyLookup, UnknownAttributeError
from .key_accessors import (
    RAW_SUFFIX,
    KeyAccessor,
    RawValueAccessor,
    ReservedKeyNameError,
    ensure_accessors_available,
    install_accessors,
)

__all__ = [
    "AttributeStore",
    "KeyLookup",
    "UnknownAttributeError",
    "RAW_SUFFIX",
    "KeyAccessor",
    "RawValueAccessor",
    "ReservedKeyNameError",
    "ensure_accessors_available",
    "install_accessors",
]
