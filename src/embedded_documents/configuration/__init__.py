"""Model definitions exports."""

from .definition_models import AssociationSpec, KeySpec, ModelDefinitions, ModelSpec
from .definitions_scaffold_builder import (
    DEFAULT_DEFINITIONS_FILENAME,
    build_placeholder_definitions,
    write_placeholder_definitions,
)
from .loader import (
    ConfigurationError,
    load_attribute_file,
    load_model_definitions,
    parse_model_definitions,
)
from .model_builder import TYPE_NAMES, build_models

__all__ = [
    "AssociationSpec",
    "KeySpec",
    "ModelDefinitions",
    "ModelSpec",
    "DEFAULT_DEFINITIONS_FILENAME",
    "build_placeholder_definitions",
    "write_placeholder_definitions",
    "ConfigurationError",
    "load_attribute_file",
    "load_model_definitions",
    "parse_model_definitions",
    "TYPE_NAMES",
    "build_models",
]
