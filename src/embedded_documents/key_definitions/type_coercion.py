"""Type coercion for declared key types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError


class CoercionError(ValueError):
    """Raised when a raw value cannot be converted to the declared key type."""


class UnsupportedKeyTypeError(TypeError):
    """Raised when a key type is neither a native type nor a document class."""


class TypeCoercer(Protocol):
    """Converts raw input into typed values for one declared type.

    Implementations must be pure, deterministic and idempotent on ``set``,
    and must map ``None`` to ``None``.
    """

    def set(self, value: Any) -> Any: ...

    def get(self, value: Any) -> Any: ...


class _Coercer:
    type_name = "object"

    def set(self, value: Any) -> Any:
        if value is None:
            return None
        return self._coerce(value)

    def get(self, value: Any) -> Any:
        return value

    def _coerce(self, value: Any) -> Any:
        return value

    def _fail(self, value: Any) -> CoercionError:
        return CoercionError(f"Cannot coerce {value!r} to {self.type_name}.")


class StringCoercer(_Coercer):
    type_name = "str"

    def _coerce(self, value: Any) -> str:
        return value if isinstance(value, str) else str(value)


class ScalarCoercer(_Coercer):
    """Lax pydantic validation of one scalar type; blank strings read as absent."""

    def __init__(self, key_type: type) -> None:
        self.type_name = key_type.__name__
        self._adapter: TypeAdapter[Any] = TypeAdapter(key_type)

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            return self._adapter.validate_python(value)
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            raise CoercionError(f"Cannot coerce {value!r} to {self.type_name}: {reason}") from exc


class ListCoercer(_Coercer):
    type_name = "list"

    def _coerce(self, value: Any) -> list[Any]:
        if isinstance(value, list):
            return value
        if isinstance(value, str | bytes | Mapping):
            return [value]
        if isinstance(value, Iterable):
            return list(value)
        return [value]


class MappingCoercer(_Coercer):
    type_name = "dict"

    def _coerce(self, value: Any) -> dict[str, Any]:
        if isinstance(value, dict):
            return value
        if isinstance(value, Mapping):
            return dict(value)
        raise self._fail(value)


class EmbeddedValueCoercer(_Coercer):
    """Coerces mappings into instances of an embedded document class."""

    def __init__(self, target_type: type) -> None:
        self.target_type = target_type
        self.type_name = target_type.__name__

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, self.target_type):
            return value
        if isinstance(value, Mapping):
            return self.target_type(dict(value))
        raise self._fail(value)


_NATIVE_COERCERS: dict[Any, TypeCoercer] = {
    str: StringCoercer(),
    int: ScalarCoercer(int),
    float: ScalarCoercer(float),
    Decimal: ScalarCoercer(Decimal),
    bool: ScalarCoercer(bool),
    date: ScalarCoercer(date),
    datetime: ScalarCoercer(datetime),
    list: ListCoercer(),
    dict: MappingCoercer(),
    object: _Coercer(),
}


def register_coercer(key_type: Any, coercer: TypeCoercer) -> None:
    """Register a native coercer for ``key_type``, replacing any existing one."""
    _NATIVE_COERCERS[key_type] = coercer


def is_native_type(key_type: Any) -> bool:
    return key_type in _NATIVE_COERCERS


def coercer_for(key_type: Any) -> TypeCoercer:
    """Resolve the coercer for a declared key type."""
    native = _NATIVE_COERCERS.get(key_type)
    if native is not None:
        return native
    if isinstance(key_type, type):
        return EmbeddedValueCoercer(key_type)
    raise UnsupportedKeyTypeError(f"Unsupported key type: {key_type!r}")
