"""Key definition entity tests."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from embedded_documents.document_model import EmbeddedDocument
from embedded_documents.key_definitions import KeyDefinition, UnsupportedKeyTypeError


class _Address(EmbeddedDocument):
    pass


def test_native_key_for_scalar_types() -> None:
    assert KeyDefinition("name", str).native is True
    assert KeyDefinition("age", int, {"numeric": True}).native is True


def test_document_typed_key_is_not_native() -> None:
    key = KeyDefinition("home", _Address)

    assert key.native is False
    assert key.type_name == "_Address"


def test_options_are_copied_and_read_only() -> None:
    options = {"required": True}
    key = KeyDefinition("name", str, options)
    options["required"] = False

    assert key.options["required"] is True
    with pytest.raises(TypeError):
        key.options["unique"] = True  # type: ignore[index]


def test_key_definition_is_immutable() -> None:
    key = KeyDefinition("name", str)

    with pytest.raises(FrozenInstanceError):
        key.name = "other"  # type: ignore[misc]


def test_rejects_empty_name_and_unsupported_type() -> None:
    with pytest.raises(ValueError):
        KeyDefinition("", str)
    with pytest.raises(UnsupportedKeyTypeError):
        KeyDefinition("name", "String")


def test_set_and_get_delegate_to_the_type_coercer() -> None:
    key = KeyDefinition("age", int)

    assert key.set("17") == 17
    assert key.get(17) == 17
    assert key.set(None) is None
