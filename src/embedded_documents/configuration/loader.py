"""Model definitions loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from embedded_documents.key_definitions.key_models import KNOWN_OPTIONS

from .definition_models import AssociationSpec, KeySpec, ModelDefinitions, ModelSpec

_MODEL_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_BOOLEAN_OPTIONS = ("required", "unique", "numeric", "index")
_CARDINALITIES = ("many", "one")


class ConfigurationError(Exception):
    """Raised when a definitions file is invalid."""


def load_model_definitions(definitions_path: Path | str) -> ModelDefinitions:
    """Load and validate a YAML/JSON model definitions file."""
    path = Path(definitions_path)
    parsed = _load_yaml_file(path, "Definitions")
    return parse_model_definitions(parsed, path=path)


def load_attribute_file(attributes_path: Path | str) -> dict[str, Any]:
    """Load a YAML/JSON mapping of document attributes."""
    path = Path(attributes_path)
    parsed = _load_yaml_file(path, "Attributes")
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Attributes root must be a mapping.")
    return dict(parsed)


def parse_model_definitions(parsed: Any, *, path: Path | None = None) -> ModelDefinitions:
    """Validate already-parsed definitions data."""
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Definitions root must be a mapping.")

    models_section = _require_mapping(parsed.get("models"), "models")
    models = tuple(
        _parse_model(name, definition) for name, definition in models_section.items()
    )
    if not models:
        raise ConfigurationError("Definitions must declare at least one model.")
    return ModelDefinitions(path=path, models=models)


def _load_yaml_file(path: Path, label: str) -> Any:
    if not path.exists():
        raise ConfigurationError(f"{label} file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {label.lower()} file: {exc}") from exc


def _parse_model(name: Any, value: Any) -> ModelSpec:
    if not isinstance(name, str) or not _MODEL_NAME_PATTERN.fullmatch(name):
        raise ConfigurationError(f"Invalid model name: {name!r}")
    section = {} if value is None else _require_mapping(value, f"models.{name}")
    parent = _optional_string(section.get("parent"), f"models.{name}.parent")
    document = section.get("document", False)
    if not isinstance(document, bool):
        raise ConfigurationError(f"models.{name}.document must be a boolean.")
    if parent and document:
        raise ConfigurationError(
            f"models.{name} cannot set both parent and document; document models inherit it."
        )

    keys_section = section.get("keys") or {}
    keys_mapping = _require_mapping(keys_section, f"models.{name}.keys")
    keys = tuple(
        _parse_key(f"models.{name}.keys.{key_name}", key_name, definition)
        for key_name, definition in keys_mapping.items()
    )

    associations_section = section.get("associations") or {}
    associations_mapping = _require_mapping(associations_section, f"models.{name}.associations")
    associations = tuple(
        _parse_association(f"models.{name}.associations.{assoc_name}", assoc_name, definition)
        for assoc_name, definition in associations_mapping.items()
    )

    return ModelSpec(
        name=name,
        parent=parent,
        document=document,
        keys=keys,
        associations=associations,
    )


def _parse_key(label: str, name: Any, definition: Any) -> KeySpec:
    key_name = _require_non_empty_string(name, f"{label} name")
    if isinstance(definition, str):
        return KeySpec(name=key_name, type_name=definition.strip(), options={})

    section = _require_mapping(definition, label)
    type_name = _require_non_empty_string(section.get("type"), f"{label}.type")
    options: dict[str, Any] = {}
    for option, value in section.items():
        if option == "type":
            continue
        if option not in KNOWN_OPTIONS:
            raise ConfigurationError(f"{label}: unknown option '{option}'.")
        options[option] = _normalize_option(f"{label}.{option}", option, value)
    return KeySpec(name=key_name, type_name=type_name, options=options)


def _normalize_option(label: str, option: str, value: Any) -> Any:
    if option in _BOOLEAN_OPTIONS:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{label} must be a boolean.")
        return value
    if option == "format":
        pattern = _require_non_empty_string(value, label)
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigurationError(f"{label} is not a valid pattern: {exc}") from exc
        return pattern
    return _normalize_length(label, value)


def _normalize_length(label: str, value: Any) -> int | range | dict[str, int]:
    if isinstance(value, bool):
        raise ConfigurationError(f"{label} must be an integer, a [min, max] pair or a mapping.")
    if isinstance(value, int):
        return _require_non_negative_int(value, label)
    if isinstance(value, Mapping):
        bounds: dict[str, int] = {}
        for bound, bound_value in value.items():
            if bound not in ("min", "max"):
                raise ConfigurationError(f"{label}: unknown bound '{bound}'.")
            bounds[bound] = _require_non_negative_int(bound_value, f"{label}.{bound}")
        if not bounds:
            raise ConfigurationError(f"{label} must define min and/or max.")
        return bounds
    if isinstance(value, Sequence) and not isinstance(value, str):
        if len(value) != 2:
            raise ConfigurationError(f"{label} range must be a [min, max] pair.")
        minimum = _require_non_negative_int(value[0], f"{label}[0]")
        maximum = _require_non_negative_int(value[1], f"{label}[1]")
        if minimum > maximum:
            raise ConfigurationError(f"{label} range minimum must not exceed maximum.")
        return range(minimum, maximum + 1)
    raise ConfigurationError(f"{label} must be an integer, a [min, max] pair or a mapping.")


def _parse_association(label: str, name: Any, definition: Any) -> AssociationSpec:
    assoc_name = _require_non_empty_string(name, f"{label} name")
    section = _require_mapping(definition, label)
    present = [cardinality for cardinality in _CARDINALITIES if section.get(cardinality)]
    if len(present) != 1 or len(section) != 1:
        raise ConfigurationError(f"{label} must declare exactly one of 'many' or 'one'.")
    cardinality = present[0]
    target = _require_non_empty_string(section[cardinality], f"{label}.{cardinality}")
    return AssociationSpec(name=assoc_name, cardinality=cardinality, target=target)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Definitions section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
