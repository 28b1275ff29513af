"""Typed document model with inheritable key schemas and embedded associations."""

import logging

from .association_bridge import Association, AssociationCycleError, Cardinality
from .attribute_store import ReservedKeyNameError, UnknownAttributeError
from .document_model import Document, EmbeddedDocument, describe, equals
from .key_definitions import (
    CoercionError,
    KeyDefinition,
    UnsupportedKeyTypeError,
    register_coercer,
)
from .schema_registry import (
    ASCENDING,
    DESCENDING,
    IndexRequest,
    InvalidIndexSpecError,
    InvalidLengthSpecError,
    ValidationRequest,
    ValidationRule,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Association",
    "AssociationCycleError",
    "Cardinality",
    "ReservedKeyNameError",
    "UnknownAttributeError",
    "Document",
    "EmbeddedDocument",
    "describe",
    "equals",
    "CoercionError",
    "KeyDefinition",
    "UnsupportedKeyTypeError",
    "register_coercer",
    "ASCENDING",
    "DESCENDING",
    "IndexRequest",
    "InvalidIndexSpecError",
    "InvalidLengthSpecError",
    "ValidationRequest",
    "ValidationRule",
]
