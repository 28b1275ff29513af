"""Builds document classes from model definitions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from embedded_documents.association_bridge.association_bridge import AssociationCycleError
from embedded_documents.attribute_store.key_accessors import ReservedKeyNameError
from embedded_documents.document_model.embedded_document import Document, EmbeddedDocument
from embedded_documents.key_definitions.type_coercion import UnsupportedKeyTypeError
from embedded_documents.schema_registry.rule_derivation import InvalidLengthSpecError

from .definition_models import ModelDefinitions, ModelSpec
from .loader import ConfigurationError

_LOGGER = logging.getLogger(__name__)

TYPE_NAMES: Mapping[str, type] = {
    "String": str,
    "Integer": int,
    "Float": float,
    "Decimal": Decimal,
    "Boolean": bool,
    "Date": date,
    "Time": datetime,
    "Array": list,
    "Hash": dict,
    "Object": object,
}

_DECLARATION_ERRORS = (
    AssociationCycleError,
    InvalidLengthSpecError,
    ReservedKeyNameError,
    UnsupportedKeyTypeError,
)


def build_models(definitions: ModelDefinitions) -> dict[str, type[EmbeddedDocument]]:
    """Create one document class per model, parents first, then declare keys and associations."""
    specs = {spec.name: spec for spec in definitions.models}
    models: dict[str, type[EmbeddedDocument]] = {}
    for name in _parent_first_order(specs):
        models[name] = _create_class(specs[name], models)

    for spec in definitions.models:
        model = models[spec.name]
        for key_spec in spec.keys:
            key_type = _resolve_type(spec.name, key_spec.type_name, models)
            try:
                model.key(key_spec.name, key_type, key_spec.options)
            except _DECLARATION_ERRORS as exc:
                raise ConfigurationError(f"Model '{spec.name}': {exc}") from exc

    for spec in definitions.models:
        model = models[spec.name]
        for association_spec in spec.associations:
            target = models.get(association_spec.target)
            if target is None:
                raise ConfigurationError(
                    f"Model '{spec.name}': association '{association_spec.name}' targets "
                    f"unknown model '{association_spec.target}'."
                )
            declare = model.many if association_spec.cardinality == "many" else model.one
            try:
                declare(association_spec.name, target)
            except _DECLARATION_ERRORS as exc:
                raise ConfigurationError(f"Model '{spec.name}': {exc}") from exc

    _LOGGER.debug("Built %d models from definitions", len(models))
    return models


def _parent_first_order(specs: Mapping[str, ModelSpec]) -> list[str]:
    ordered: list[str] = []
    visiting: set[str] = set()

    def visit(name: str) -> None:
        if name in ordered:
            return
        if name in visiting:
            raise ConfigurationError(f"Model '{name}' has a cyclic parent chain.")
        visiting.add(name)
        parent = specs[name].parent
        if parent is not None:
            if parent not in specs:
                raise ConfigurationError(f"Model '{name}' has unknown parent '{parent}'.")
            visit(parent)
        visiting.discard(name)
        ordered.append(name)

    for name in specs:
        visit(name)
    return ordered


def _create_class(
    spec: ModelSpec, models: Mapping[str, type[EmbeddedDocument]]
) -> type[EmbeddedDocument]:
    if spec.parent is not None:
        base: type[EmbeddedDocument] = models[spec.parent]
    else:
        base = Document if spec.document else EmbeddedDocument
    return type(spec.name, (base,), {"__module__": __name__, "__qualname__": spec.name})


def _resolve_type(
    model_name: str, type_name: str, models: Mapping[str, type[EmbeddedDocument]]
) -> Any:
    if type_name in TYPE_NAMES:
        return TYPE_NAMES[type_name]
    if type_name in models:
        return models[type_name]
    raise ConfigurationError(f"Model '{model_name}': unknown key type '{type_name}'.")
