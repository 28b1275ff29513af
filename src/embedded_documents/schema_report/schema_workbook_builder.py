"""Excel schema report service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from embedded_documents.document_model.embedded_document import EmbeddedDocument
from embedded_documents.key_definitions.key_models import KeyDefinition
from embedded_documents.schema_registry.registry_models import ValidationRequest

from .constants import (
    ASSOCIATION_COLUMNS,
    ASSOCIATIONS_SHEET_NAME,
    KEY_COLUMNS,
    KEYS_SHEET_NAME,
    MODEL_COLUMNS,
    RULE_COLUMNS,
)


def generate_schema_workbook(
    models: Mapping[str, type[EmbeddedDocument]],
    output_path: Path | str,
) -> None:
    """Create a workbook describing every model's keys, rules and associations."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = KEYS_SHEET_NAME

    all_columns = list(MODEL_COLUMNS + KEY_COLUMNS + RULE_COLUMNS)
    _write_group_headers(sheet, len(MODEL_COLUMNS), len(KEY_COLUMNS), len(RULE_COLUMNS))
    _write_header_row(sheet, all_columns)

    row_index = 3
    for model_name, model in models.items():
        validations = _validations_by_attribute(model.validation_requests())
        indexed = {
            field_name
            for request in model.index_requests()
            for field_name, _direction in request.fields
        }
        for key in model.keys().values():
            values = (
                model_name,
                model.embeddable(),
                key.name,
                key.type_name,
                key.native,
                _format_options(key) or None,
                ", ".join(validations.get(key.name, ())) or None,
                key.name in indexed,
            )
            for column_index, value in enumerate(values, start=1):
                sheet.cell(row=row_index, column=column_index, value=value)
            row_index += 1

    _write_associations_sheet(workbook, models)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)


def _write_group_headers(sheet, model_count: int, key_count: int, rule_count: int) -> None:
    groups = [
        ("Model", 1, model_count),
        ("Key", model_count + 1, key_count),
        ("Rules", model_count + key_count + 1, rule_count),
    ]
    for label, start_column, count in groups:
        if count <= 0:
            continue
        end_column = start_column + count - 1
        start_letter = get_column_letter(start_column)
        end_letter = get_column_letter(end_column)
        sheet.merge_cells(f"{start_letter}1:{end_letter}1")
        sheet[f"{start_letter}1"].value = label
        sheet[f"{start_letter}1"].style = "Headline 1"


def _write_header_row(sheet, columns: list[str], row: int = 2) -> None:
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=row, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_associations_sheet(
    workbook: Workbook, models: Mapping[str, type[EmbeddedDocument]]
) -> None:
    sheet = workbook.create_sheet(ASSOCIATIONS_SHEET_NAME)
    _write_header_row(sheet, list(ASSOCIATION_COLUMNS), row=1)
    row_index = 2
    for model_name, model in models.items():
        for association in model.associations().values():
            values = (
                model_name,
                association.name,
                association.cardinality.value,
                association.target_type.__name__,
                association.target_type.embeddable(),
            )
            for column_index, value in enumerate(values, start=1):
                sheet.cell(row=row_index, column=column_index, value=value)
            row_index += 1


def _validations_by_attribute(
    requests: tuple[ValidationRequest, ...],
) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for request in requests:
        grouped.setdefault(request.attribute, []).append(_format_rule(request))
    return grouped


def _format_rule(request: ValidationRequest) -> str:
    if not request.params:
        return request.rule.value
    params = ", ".join(
        f"{name}={format_option_value(value)}" for name, value in request.params.items()
    )
    return f"{request.rule.value}({params})"


def _format_options(key: KeyDefinition) -> str:
    return ", ".join(
        f"{name}={format_option_value(value)}" for name, value in key.options.items()
    )


def format_option_value(value: Any) -> str:
    """Render an option or rule parameter the way definitions files spell it."""
    if isinstance(value, range):
        return f"{value.start}..{value.stop - 1}"
    pattern = getattr(value, "pattern", None)
    if isinstance(pattern, str):
        return pattern
    return str(value)
