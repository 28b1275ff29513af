"""Key definition exports."""

from .key_models import KNOWN_OPTIONS, KeyDefinition
from .type_coercion import (
    CoercionError,
    EmbeddedValueCoercer,
    TypeCoercer,
    UnsupportedKeyTypeError,
    coercer_for,
    is_native_type,
    register_coercer,
)

__all__ = [
    "KNOWN_OPTIONS",
    "KeyDefinition",
    "CoercionError",
    "EmbeddedValueCoercer",
    "TypeCoercer",
    "UnsupportedKeyTypeError",
    "coercer_for",
    "is_native_type",
    "register_coercer",
]
