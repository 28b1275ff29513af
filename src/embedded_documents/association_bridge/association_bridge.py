"""Association declaration, initialization and embedded flattening."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from embedded_documents.attribute_store.key_accessors import ReservedKeyNameError
from embedded_documents.schema_registry.schema_registry import is_embeddable

from .association_models import Association, Cardinality

_LOGGER = logging.getLogger(__name__)

_ASSOCIATIONS_ATTRIBUTE = "__associations__"


class AssociationCycleError(ValueError):
    """Raised when embedded "many" associations would form a cycle."""


class AssociationAccessor:
    """Attribute access routed through an association's getter and setter."""

    def __init__(self, association: Association) -> None:
        self.association = association

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return self.association.get(instance)

    def __set__(self, instance: Any, value: Any) -> None:
        self.association.set(instance, value)


def declare_association(owner: type, association: Association) -> Association:
    """Record ``association`` on ``owner`` and install its accessor."""
    _ensure_available(owner, association.name)
    if association.cardinality is Cardinality.MANY and is_embeddable(association.target_type):
        _reject_cycles(owner, association)

    declared = owner.__dict__.get(_ASSOCIATIONS_ATTRIBUTE)
    if declared is None:
        declared = {}
        setattr(owner, _ASSOCIATIONS_ATTRIBUTE, declared)
    declared[association.name] = association
    setattr(owner, association.name, AssociationAccessor(association))
    _LOGGER.debug(
        "Declared %s association %s.%s -> %s",
        association.cardinality.value,
        owner.__name__,
        association.name,
        association.target_type.__name__,
    )
    return association


def associations_for(cls: type) -> dict[str, Association]:
    """Declared associations of ``cls`` including inherited ones."""
    merged: dict[str, Association] = {}
    for klass in reversed(cls.__mro__):
        merged.update(klass.__dict__.get(_ASSOCIATIONS_ATTRIBUTE, {}))
    return merged


def split_associations(
    cls: type, attrs: Mapping[str, Any]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split ``attrs`` into association entries and key entries."""
    associations = associations_for(cls)
    routed = {name: value for name, value in attrs.items() if name in associations}
    remaining = {name: value for name, value in attrs.items() if name not in associations}
    return routed, remaining


def stage_associations(cls: type, routed: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce association values without touching any instance."""
    associations = associations_for(cls)
    return {name: associations[name].coerce(value) for name, value in routed.items()}


def commit_associations(instance: Any, staged: Mapping[str, Any]) -> None:
    associations = associations_for(type(instance))
    for name, value in staged.items():
        associations[name].store(instance, value)


def embedded_association_attributes(instance: Any) -> dict[str, list[dict[str, Any]]]:
    """Flatten embedded "many" associations into lists of attribute mappings.

    Each element is the embedded document's attribute mapping merged with its
    own flattened embedded associations.
    """
    embedded: dict[str, list[dict[str, Any]]] = {}
    for name, association in associations_for(type(instance)).items():
        if association.cardinality is not Cardinality.MANY:
            continue
        if not is_embeddable(association.target_type):
            continue
        documents = association.get(instance)
        if documents is None:
            continue
        embedded[name] = [_flatten_item(item) for item in documents]
    return embedded


def _flatten_item(item: Any) -> dict[str, Any]:
    attributes = dict(item.attributes)
    attributes.update(embedded_association_attributes(item))
    return attributes


def _reject_cycles(owner: type, association: Association) -> None:
    visited: set[type] = set()
    pending = [association.target_type]
    while pending:
        node = pending.pop()
        if node is owner or issubclass(node, owner):
            raise AssociationCycleError(
                f"Embedded association {owner.__name__}.{association.name} -> "
                f"{association.target_type.__name__} forms a cycle through {node.__name__}."
            )
        if node in visited:
            continue
        visited.add(node)
        for candidate in associations_for(node).values():
            if candidate.cardinality is Cardinality.MANY and is_embeddable(candidate.target_type):
                pending.append(candidate.target_type)


def _ensure_available(owner: type, attribute: str) -> None:
    for klass in owner.__mro__:
        existing = klass.__dict__.get(attribute)
        if existing is None or isinstance(existing, AssociationAccessor):
            continue
        raise ReservedKeyNameError(
            f"Association name '{attribute}' on {owner.__name__} collides with "
            f"{klass.__name__}.{attribute}."
        )
