"""Definitions scaffold tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from embedded_documents.configuration import (
    DEFAULT_DEFINITIONS_FILENAME,
    build_placeholder_definitions,
    load_model_definitions,
    write_placeholder_definitions,
)


def test_placeholder_definitions_document_key_types_and_options() -> None:
    scaffold = build_placeholder_definitions()

    assert scaffold.startswith("# Model definitions")
    assert "Key types: String, Integer" in scaffold
    assert "length: [2, 30]" in scaffold
    assert "parent: Person" in scaffold


def test_written_placeholder_definitions_load_cleanly(tmp_path: Path) -> None:
    output_path = tmp_path / DEFAULT_DEFINITIONS_FILENAME

    written = write_placeholder_definitions(output_path)
    definitions = load_model_definitions(written)

    assert written == output_path.resolve()
    assert [model.name for model in definitions.models] == ["Address", "Person", "Employee"]


def test_existing_definitions_file_is_not_overwritten(tmp_path: Path) -> None:
    output_path = tmp_path / "models.yaml"
    output_path.write_text("models: {}\n", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_definitions(output_path)
    assert output_path.read_text(encoding="utf-8") == "models: {}\n"
