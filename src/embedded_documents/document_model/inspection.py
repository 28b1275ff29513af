"""Value equality and debug rendering for documents."""

from __future__ import annotations

from typing import Any

from embedded_documents.schema_registry.schema_registry import get_registry


def equals(document: Any, other: Any) -> bool:
    """True when ``other`` is an instance of ``document``'s class with equal attributes."""
    return isinstance(other, type(document)) and document.attributes == other.attributes


def describe(document: Any) -> str:
    """Render ``<ClassName key: value, ...>`` over the class's keys in declaration order."""
    class_name = type(document).__name__
    rendered = ", ".join(
        f"{name}: {document.read_attribute(name)}" for name in get_registry(type(document))
    )
    if not rendered:
        return f"<{class_name}>"
    return f"<{class_name} {rendered}>"
