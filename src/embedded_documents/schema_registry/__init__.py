"""Schema registry exports."""

from .registry_models import (
    ASCENDING,
    DESCENDING,
    IndexRequest,
    ValidationRequest,
    ValidationRule,
)
from .rule_derivation import (
    InvalidIndexSpecError,
    InvalidLengthSpecError,
    derive_index_requests,
    derive_validation_requests,
)
from .schema_registry import (
    SchemaRegistry,
    SchemaRegistryError,
    attach_registry,
    get_registry,
    is_embeddable,
    own_registry,
    parent_model,
    registry_of,
)

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "IndexRequest",
    "ValidationRequest",
    "ValidationRule",
    "InvalidIndexSpecError",
    "InvalidLengthSpecError",
    "derive_index_requests",
    "derive_validation_requests",
    "SchemaRegistry",
    "SchemaRegistryError",
    "attach_registry",
    "get_registry",
    "is_embeddable",
    "own_registry",
    "parent_model",
    "registry_of",
]
