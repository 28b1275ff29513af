"""Model definitions loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from embedded_documents.configuration.loader import (
    ConfigurationError,
    load_attribute_file,
    load_model_definitions,
    parse_model_definitions,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_definitions_with_shorthand_and_options(tmp_path: Path) -> None:
    definitions_path = _write_file(
        tmp_path / "models.yaml",
        """
models:
  Address:
    keys:
      city: String
  Person:
    document: true
    keys:
      name:
        type: String
        required: true
        length: [2, 30]
      code:
        type: String
        length: {min: 3}
        format: "^[A-Z]+$"
    associations:
      addresses:
        many: Address
""",
    )

    definitions = load_model_definitions(definitions_path)

    assert definitions.path == definitions_path
    assert [model.name for model in definitions.models] == ["Address", "Person"]
    address = definitions.model("Address")
    assert address is not None
    assert address.document is False
    assert address.keys[0].type_name == "String"
    assert dict(address.keys[0].options) == {}

    person = definitions.model("Person")
    assert person is not None
    assert person.document is True
    name, code = person.keys
    assert dict(name.options) == {"required": True, "length": range(2, 31)}
    assert dict(code.options) == {"length": {"min": 3}, "format": "^[A-Z]+$"}
    assert person.associations[0].cardinality == "many"
    assert person.associations[0].target == "Address"
    assert definitions.model("Missing") is None


def test_loads_json_definitions(tmp_path: Path) -> None:
    definitions_path = _write_file(
        tmp_path / "models.json",
        '{"models": {"Note": {"keys": {"body": {"type": "String", "length": 140}}}}}',
    )

    definitions = load_model_definitions(definitions_path)

    assert dict(definitions.models[0].keys[0].options) == {"length": 140}


def test_missing_definitions_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_model_definitions(tmp_path / "missing.yaml")


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    definitions_path = _write_file(tmp_path / "models.yaml", "models: [unclosed")

    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_model_definitions(definitions_path)


@pytest.mark.parametrize(
    ("parsed", "message"),
    [
        (None, "models"),
        ({"models": {}}, "at least one model"),
        ({"models": {"1Bad": {}}}, "Invalid model name"),
        ({"models": {"A": {"document": "yes"}}}, "must be a boolean"),
        ({"models": {"A": {"parent": "B", "document": True}}}, "cannot set both"),
        ({"models": {"A": {"keys": {"x": {"required": True}}}}}, "type must be a string"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "sorted": True}}}}}, "unknown option"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "required": "y"}}}}}, "boolean"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "format": "("}}}}}, "valid pattern"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "length": -1}}}}}, "negative"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "length": [5, 2]}}}}}, "exceed"),
        ({"models": {"A": {"keys": {"x": {"type": "String", "length": {"avg": 2}}}}}}, "bound"),
        ({"models": {"A": {"associations": {"x": {"many": "B", "one": "C"}}}}}, "exactly one"),
        ({"models": {"A": {"associations": {"x": {}}}}}, "exactly one"),
    ],
)
def test_invalid_definitions_are_rejected(parsed: object, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        parse_model_definitions(parsed)


def test_model_without_body_is_allowed() -> None:
    definitions = parse_model_definitions({"models": {"Marker": None}})

    assert definitions.models[0].keys == ()
    assert definitions.models[0].associations == ()
    assert definitions.path is None


def test_loads_attribute_file(tmp_path: Path) -> None:
    attributes_path = _write_file(tmp_path / "person.yaml", "name: Ada\nage: '36'\n")

    assert load_attribute_file(attributes_path) == {"name": "Ada", "age": "36"}
    assert load_attribute_file(_write_file(tmp_path / "empty.yaml", "")) == {}
    with pytest.raises(ConfigurationError, match="mapping"):
        load_attribute_file(_write_file(tmp_path / "list.yaml", "- Ada\n"))
