"""Definitions scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_DEFINITIONS_FILENAME = "models.yaml"

_DEFINITIONS_SCAFFOLD_TEMPLATE = """# Model definitions for embedded-documents.
# Every entry under `models` becomes one document class.
# Key types: String, Integer, Float, Decimal, Boolean, Date, Time, Array, Hash,
# Object, or the name of another model (stored as an embedded document).

models:
  Address:
    keys:
      street: String
      city:
        type: String
        required: true
      zip:
        type: String
        format: "^[0-9]{4,5}$"

  Person:
    # Top-level persistable document; omit for embeddable models.
    document: true
    keys:
      name:
        type: String
        required: true
        # Exact count, [min, max] pair, or {min: .., max: ..}.
        length: [2, 30]
      age:
        type: Integer
        numeric: true
      email:
        type: String
        unique: true
        index: true
      home:
        type: Address
    associations:
      addresses:
        many: Address

  Employee:
    # Inherits every key of Person, now and later.
    parent: Person
    keys:
      employee_number:
        type: Integer
        required: true
"""


def build_placeholder_definitions() -> str:
    """Build an example definitions file with inline guidance."""
    return _DEFINITIONS_SCAFFOLD_TEMPLATE


def write_placeholder_definitions(output_path: Path | str) -> Path:
    """Write the example definitions file to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Definitions file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_definitions(), encoding="utf-8")
    return destination.resolve()
