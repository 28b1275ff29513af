"""Per-class key registry with inheritance propagation.

Every participating document class carries one ``SchemaRegistry``. A class
that never declared a key of its own reads a copy of the merged registries of
its participating bases; the first own declaration seeds an independent copy,
so a subclass never mutates its parents. Keys declared on a parent after a
subclass exists are re-registered on every tracked subclass, keeping each
subclass registry a superset of every parent's.

Registration is a class-definition-time setup step and must not run
concurrently on the same class. Reads after setup are safe to share.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from embedded_documents.attribute_store.key_accessors import (
    ensure_accessors_available,
    install_accessors,
)
from embedded_documents.key_definitions.key_models import KeyDefinition

from .registry_models import IndexRequest, ValidationRequest, ValidationRule
from .rule_derivation import (
    derive_index_requests,
    derive_validation_requests,
    normalize_index_request,
)

_LOGGER = logging.getLogger(__name__)

_REGISTRY_ATTRIBUTE = "__schema_registry__"


class SchemaRegistryError(TypeError):
    """Raised when a class does not participate in the schema system."""


@dataclass
class _RegistryState:
    keys: dict[str, KeyDefinition] = field(default_factory=dict)
    validations: dict[tuple[str, ValidationRule], ValidationRequest] = field(default_factory=dict)
    key_indexes: dict[str, tuple[IndexRequest, ...]] = field(default_factory=dict)
    explicit_indexes: list[IndexRequest] = field(default_factory=list)

    def copy(self) -> _RegistryState:
        return _RegistryState(
            keys=dict(self.keys),
            validations=dict(self.validations),
            key_indexes=dict(self.key_indexes),
            explicit_indexes=list(self.explicit_indexes),
        )

    def adopt(self, other: _RegistryState) -> None:
        """Take over keys (with their rules) that are not yet present; first parent wins."""
        for name, key in other.keys.items():
            if name in self.keys:
                continue
            self.keys[name] = key
            for pair, request in other.validations.items():
                if pair[0] == name:
                    self.validations[pair] = request
            if name in other.key_indexes:
                self.key_indexes[name] = other.key_indexes[name]
        for request in other.explicit_indexes:
            if request not in self.explicit_indexes:
                self.explicit_indexes.append(request)


class SchemaRegistry:
    """Ordered key registry for one document class."""

    def __init__(
        self,
        owner: type,
        parents: Sequence[SchemaRegistry] = (),
        *,
        root: bool = False,
        persistable: bool = False,
    ) -> None:
        self.owner = owner
        self.parents = tuple(parents)
        self.root = root
        self.persistable = persistable
        self.subclasses: list[type] = []
        self._state: _RegistryState | None = None

    @property
    def owned(self) -> bool:
        """True once this class has declared a key or index of its own."""
        return self._state is not None

    def keys(self) -> Mapping[str, KeyDefinition]:
        if self._state is not None:
            return MappingProxyType(self._state.keys)
        return self._inherited_keys()

    def validation_requests(self) -> tuple[ValidationRequest, ...]:
        return tuple(self._current_state().validations.values())

    def index_requests(self) -> tuple[IndexRequest, ...]:
        state = self._current_state()
        requests: list[IndexRequest] = []
        for request in [
            *(request for derived in state.key_indexes.values() for request in derived),
            *state.explicit_indexes,
        ]:
            if request not in requests:
                requests.append(request)
        return tuple(requests)

    def register_key(
        self, name: str, key_type: Any, options: Mapping[str, Any] | None = None
    ) -> KeyDefinition:
        """Declare or redeclare a key and propagate it to tracked subclasses.

        Accessor availability is checked on this class and every tracked
        subclass before anything is written, so a rejected name leaves the
        whole hierarchy unchanged.
        """
        if self.root:
            raise SchemaRegistryError(
                f"Keys cannot be declared on {self.owner.__name__}; declare them on a subclass."
            )
        key = KeyDefinition(name, key_type, dict(options or {}))
        validations = derive_validation_requests(key)
        indexes = derive_index_requests(key)
        for registry in self._with_descendants():
            ensure_accessors_available(registry.owner, key.name)
        self._register(key, validations, indexes)
        return key

    def ensure_index(
        self, name_or_pairs: str | Sequence[tuple[str, int]], *, unique: bool = False
    ) -> IndexRequest:
        request = normalize_index_request(name_or_pairs, unique=unique)
        self._add_index(request)
        return request

    def track_subclass(self, subclass: type) -> None:
        self.subclasses.append(subclass)

    def _register(
        self,
        key: KeyDefinition,
        validations: list[ValidationRequest],
        indexes: list[IndexRequest],
    ) -> None:
        install_accessors(self.owner, key)
        state = self._own_state()
        state.keys[key.name] = key
        for stale in [pair for pair in state.validations if pair[0] == key.name]:
            del state.validations[stale]
        for request in validations:
            state.validations[(request.attribute, request.rule)] = request
        if indexes:
            state.key_indexes[key.name] = tuple(indexes)
        else:
            state.key_indexes.pop(key.name, None)
        _LOGGER.debug(
            "Registered key %s.%s (%s)", self.owner.__name__, key.name, key.type_name
        )

        for subclass in self.subclasses:
            _LOGGER.debug(
                "Propagating key %s.%s to %s", self.owner.__name__, key.name, subclass.__name__
            )
            registry_of(subclass)._register(key, validations, indexes)

    def _add_index(self, request: IndexRequest) -> None:
        state = self._own_state()
        if request not in state.explicit_indexes:
            state.explicit_indexes.append(request)
        for subclass in self.subclasses:
            registry_of(subclass)._add_index(request)

    def _with_descendants(self) -> Iterator[SchemaRegistry]:
        yield self
        for subclass in self.subclasses:
            yield from registry_of(subclass)._with_descendants()

    def _own_state(self) -> _RegistryState:
        if self._state is None:
            self._state = self._inherited_state()
        return self._state

    def _current_state(self) -> _RegistryState:
        if self._state is not None:
            return self._state
        return self._inherited_state()

    def _inherited_state(self) -> _RegistryState:
        state = _RegistryState()
        for parent in self.parents:
            state.adopt(parent._current_state())
        return state

    def _inherited_keys(self) -> dict[str, KeyDefinition]:
        keys: dict[str, KeyDefinition] = {}
        for parent in self.parents:
            for name, key in parent.keys().items():
                keys.setdefault(name, key)
        return keys


def attach_registry(cls: type, *, root: bool = False, persistable: bool = False) -> SchemaRegistry:
    """Create the registry for a newly defined class and track it on its parents.

    Every participating non-root base is a parent: the new class inherits the
    merged keys of all of them and receives every key they declare later.
    """
    parents = [
        registry
        for registry in (own_registry(base) for base in cls.__bases__)
        if registry is not None and not registry.root
    ]
    registry = SchemaRegistry(cls, parents, root=root, persistable=persistable)
    setattr(cls, _REGISTRY_ATTRIBUTE, registry)
    for parent in parents:
        parent.track_subclass(cls)
    return registry


def own_registry(cls: type) -> SchemaRegistry | None:
    return cls.__dict__.get(_REGISTRY_ATTRIBUTE)


def registry_of(cls: type) -> SchemaRegistry:
    registry = own_registry(cls)
    if registry is None:
        raise SchemaRegistryError(f"{cls.__name__} does not participate in the schema system.")
    return registry


def get_registry(cls: type) -> Mapping[str, KeyDefinition]:
    return registry_of(cls).keys()


def parent_model(cls: type) -> type | None:
    """Nearest participating ancestor, excluding the schema root classes."""
    for base in cls.__mro__[1:]:
        registry = own_registry(base)
        if registry is not None and not registry.root:
            return base
    return None


def is_embeddable(cls: type) -> bool:
    for base in cls.__mro__:
        registry = own_registry(base)
        if registry is not None and registry.persistable:
            return False
    return True
