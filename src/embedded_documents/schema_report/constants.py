"""Shared schema report constants."""

from __future__ import annotations

KEYS_SHEET_NAME = "Keys"
ASSOCIATIONS_SHEET_NAME = "Associations"

MODEL_COLUMNS: tuple[str, ...] = ("Model", "Embeddable")
KEY_COLUMNS: tuple[str, ...] = ("Key", "Type", "Native", "Options")
RULE_COLUMNS: tuple[str, ...] = ("Validations", "Indexed")

ASSOCIATION_COLUMNS: tuple[str, ...] = (
    "Model",
    "Association",
    "Cardinality",
    "Target",
    "Embeddable Target",
)
