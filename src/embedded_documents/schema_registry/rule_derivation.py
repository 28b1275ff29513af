"""Derivation of validation and index requests from key options."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from embedded_documents.key_definitions.key_models import KeyDefinition

from .registry_models import ASCENDING, DESCENDING, IndexRequest, ValidationRequest, ValidationRule


class InvalidLengthSpecError(ValueError):
    """Raised when a ``length`` option is not a count, a range or a bound mapping."""


class InvalidIndexSpecError(ValueError):
    """Raised when an index specification cannot be normalized."""


def derive_validation_requests(key: KeyDefinition) -> list[ValidationRequest]:
    """Return the validation requests implied by ``key.options``."""
    options = key.options
    attribute = key.name
    requests: list[ValidationRequest] = []

    if options.get("required"):
        requests.append(ValidationRequest(attribute, ValidationRule.PRESENCE))
    if options.get("unique"):
        requests.append(ValidationRequest(attribute, ValidationRule.UNIQUENESS))
    if options.get("numeric"):
        requests.append(
            ValidationRequest(
                attribute,
                ValidationRule.NUMERICALITY,
                {"only_integers": key.type is int},
            )
        )
    if options.get("format"):
        requests.append(
            ValidationRequest(attribute, ValidationRule.FORMAT, {"pattern": options["format"]})
        )
    if options.get("length") is not None:
        requests.append(
            ValidationRequest(attribute, ValidationRule.LENGTH, _length_params(options["length"]))
        )
    return requests


def _length_params(length: Any) -> dict[str, Any]:
    if isinstance(length, bool):
        raise InvalidLengthSpecError(f"Invalid length option: {length!r}")
    if isinstance(length, int):
        if length < 0:
            raise InvalidLengthSpecError(f"Length must not be negative: {length}")
        return {"min": 0, "max": length}
    if isinstance(length, range):
        return {"within": length}
    if isinstance(length, Mapping):
        return dict(length)
    raise InvalidLengthSpecError(f"Invalid length option: {length!r}")


def derive_index_requests(key: KeyDefinition) -> list[IndexRequest]:
    if not key.options.get("index"):
        return []
    return [IndexRequest(fields=((key.name, ASCENDING),))]


def normalize_index_request(
    name_or_pairs: str | Sequence[tuple[str, int]], *, unique: bool = False
) -> IndexRequest:
    """Build an index request from a field name or ``(field, direction)`` pairs."""
    if isinstance(name_or_pairs, str):
        if not name_or_pairs:
            raise InvalidIndexSpecError("Index field name must not be empty.")
        return IndexRequest(fields=((name_or_pairs, ASCENDING),), unique=unique)

    fields: list[tuple[str, int]] = []
    for pair in name_or_pairs:
        if isinstance(pair, str) or len(pair) != 2:
            raise InvalidIndexSpecError(f"Index entries must be (field, direction) pairs: {pair!r}")
        field_name, direction = pair[0], pair[1]
        if direction not in (ASCENDING, DESCENDING):
            raise InvalidIndexSpecError(
                f"Invalid index direction for '{field_name}': {direction!r}"
            )
        fields.append((field_name, direction))
    if not fields:
        raise InvalidIndexSpecError("Compound index requires at least one field.")
    return IndexRequest(fields=tuple(fields), unique=unique)
