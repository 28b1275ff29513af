"""Document base classes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from embedded_documents.association_bridge.association_bridge import (
    associations_for,
    commit_associations,
    declare_association,
    embedded_association_attributes,
    split_associations,
    stage_associations,
)
from embedded_documents.association_bridge.association_models import Association, Cardinality
from embedded_documents.attribute_store.attribute_store import AttributeStore
from embedded_documents.attribute_store.key_accessors import ReservedKeyNameError
from embedded_documents.key_definitions.key_models import KeyDefinition
from embedded_documents.key_definitions.type_coercion import (
    UnsupportedKeyTypeError,
    is_native_type,
)
from embedded_documents.schema_registry.registry_models import IndexRequest, ValidationRequest
from embedded_documents.schema_registry.schema_registry import (
    attach_registry,
    is_embeddable,
    parent_model,
    registry_of,
)

from .inspection import describe, equals


class EmbeddedDocument:
    """Document whose keys are declared on the class and stored per instance.

    Subclasses declare keys with :meth:`key` and associations with
    :meth:`many` / :meth:`one`. Instances are built from a mapping and/or
    keyword arguments::

        class Address(EmbeddedDocument):
            pass

        Address.key("city", str, required=True)
        Address({"city": "Lisbon"}).attributes  # {"city": "Lisbon"}
    """

    def __init_subclass__(
        cls, schema_root: bool = False, persistable: bool = False, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        attach_registry(cls, root=schema_root, persistable=persistable)

    def __init__(self, attrs: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        registry = registry_of(type(self))
        self._attribute_store = AttributeStore(registry.keys, type(self).__name__)
        merged = {**(attrs or {}), **kwargs}
        if merged:
            self.attributes = merged

    # Class-level schema API

    @classmethod
    def key(
        cls, name: str, key_type: Any, options: Mapping[str, Any] | None = None, **extra: Any
    ) -> KeyDefinition:
        """Declare a typed key; subclasses inherit it, now and later."""
        if name.startswith("_"):
            raise ReservedKeyNameError(f"Key names must not start with an underscore: '{name}'")
        if not is_native_type(key_type) and not (
            isinstance(key_type, type) and issubclass(key_type, EmbeddedDocument)
        ):
            raise UnsupportedKeyTypeError(
                f"Key '{name}' on {cls.__name__} has unsupported type {key_type!r}."
            )
        return registry_of(cls).register_key(name, key_type, {**(options or {}), **extra})

    @classmethod
    def keys(cls) -> Mapping[str, KeyDefinition]:
        return registry_of(cls).keys()

    @classmethod
    def subclasses(cls) -> tuple[type, ...]:
        return tuple(registry_of(cls).subclasses)

    @classmethod
    def parent_model(cls) -> type | None:
        return parent_model(cls)

    @classmethod
    def embeddable(cls) -> bool:
        return is_embeddable(cls)

    @classmethod
    def validation_requests(cls) -> tuple[ValidationRequest, ...]:
        return registry_of(cls).validation_requests()

    @classmethod
    def index_requests(cls) -> tuple[IndexRequest, ...]:
        return registry_of(cls).index_requests()

    @classmethod
    def ensure_index(
        cls, name_or_pairs: str | Sequence[tuple[str, int]], *, unique: bool = False
    ) -> IndexRequest:
        return registry_of(cls).ensure_index(name_or_pairs, unique=unique)

    @classmethod
    def many(cls, name: str, target_type: type) -> Association:
        return declare_association(cls, Association(name, Cardinality.MANY, target_type))

    @classmethod
    def one(cls, name: str, target_type: type) -> Association:
        return declare_association(cls, Association(name, Cardinality.ONE, target_type))

    @classmethod
    def associations(cls) -> dict[str, Association]:
        return associations_for(cls)

    @classmethod
    def defined_attributes(cls, attrs: Mapping[str, Any]) -> dict[str, Any]:
        """Entries of ``attrs`` named by a key or an association; the rest are dropped."""
        known = {*cls.keys(), *associations_for(cls)}
        return {name: value for name, value in attrs.items() if name in known}

    # Instance attribute API

    @property
    def attributes(self) -> dict[str, Any]:
        """Attribute mapping; absent values omitted, embedded keys nested."""
        return self._attribute_store.to_attribute_mapping()

    @attributes.setter
    def attributes(self, attrs: Mapping[str, Any] | None) -> None:
        if not attrs:
            return
        routed, remaining = split_associations(type(self), attrs)
        staged = stage_associations(type(self), routed)
        self._attribute_store.assign(remaining)
        commit_associations(self, staged)

    def read_attribute(self, name: str) -> Any:
        return self._attribute_store.read(name)

    def write_attribute(self, name: str, value: Any) -> None:
        self._attribute_store.write(name, value)

    def read_attribute_before_typecast(self, name: str) -> Any:
        return self._attribute_store.read_raw(name)

    def embedded_association_attributes(self) -> dict[str, list[dict[str, Any]]]:
        return embedded_association_attributes(self)

    def flattened_attributes(self) -> dict[str, Any]:
        """Attributes merged with every embedded "many" association, recursively."""
        flattened = self.attributes
        flattened.update(self.embedded_association_attributes())
        return flattened

    def __getitem__(self, name: str) -> Any:
        return self.read_attribute(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.write_attribute(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return describe(self)


attach_registry(EmbeddedDocument, root=True)


class Document(EmbeddedDocument, schema_root=True, persistable=True):
    """Top-level persistable document; never embeddable in another document."""
