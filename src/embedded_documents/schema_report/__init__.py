"""Schema report exports."""

from .constants import (
    ASSOCIATION_COLUMNS,
    ASSOCIATIONS_SHEET_NAME,
    KEY_COLUMNS,
    KEYS_SHEET_NAME,
    MODEL_COLUMNS,
    RULE_COLUMNS,
)
from .schema_workbook_builder import format_option_value, generate_schema_workbook

__all__ = [
    "KEYS_SHEET_NAME",
    "ASSOCIATIONS_SHEET_NAME",
    "MODEL_COLUMNS",
    "KEY_COLUMNS",
    "RULE_COLUMNS",
    "ASSOCIATION_COLUMNS",
    "format_option_value",
    "generate_schema_workbook",
]
