"""Key accessor descriptor tests."""

from __future__ import annotations

from typing import Any

import pytest
from embedded_documents.attribute_store import (
    KeyAccessor,
    RawValueAccessor,
    ReservedKeyNameError,
    install_accessors,
)
from embedded_documents.key_definitions import KeyDefinition


class _Holder:
    def __init__(self) -> None:
        self.raw: dict[str, Any] = {}

    def read_attribute(self, name: str) -> Any:
        value = self.raw.get(name)
        return None if value is None else str(value).upper()

    def write_attribute(self, name: str, value: Any) -> None:
        self.raw[name] = value

    def read_attribute_before_typecast(self, name: str) -> Any:
        return self.raw.get(name)

    def label(self) -> str:
        return "holder"


def test_installed_accessors_route_through_the_instance() -> None:
    class Holder(_Holder):
        pass

    install_accessors(Holder, KeyDefinition("code", str))
    holder = Holder()
    holder.code = "abc"

    assert holder.code == "ABC"
    assert holder.code_before_typecast == "abc"
    assert isinstance(Holder.code, KeyAccessor)
    assert isinstance(Holder.code_before_typecast, RawValueAccessor)


def test_raw_value_accessor_is_read_only() -> None:
    class Holder(_Holder):
        pass

    install_accessors(Holder, KeyDefinition("code", str))

    with pytest.raises(AttributeError):
        Holder().code_before_typecast = "x"


def test_reinstalling_accessors_for_the_same_key_is_allowed() -> None:
    class Holder(_Holder):
        pass

    class SubHolder(Holder):
        pass

    install_accessors(Holder, KeyDefinition("code", str))
    install_accessors(Holder, KeyDefinition("code", int))
    install_accessors(SubHolder, KeyDefinition("code", str))

    assert "code" in SubHolder.__dict__


def test_key_name_colliding_with_a_method_is_rejected() -> None:
    class Holder(_Holder):
        pass

    with pytest.raises(ReservedKeyNameError, match="label"):
        install_accessors(Holder, KeyDefinition("label", str))
