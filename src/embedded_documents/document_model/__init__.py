"""Document model exports."""

from .embedded_document import Document, EmbeddedDocument
from .inspection import describe, equals

__all__ = [
    "Document",
    "EmbeddedDocument",
    "describe",
    "equals",
]
