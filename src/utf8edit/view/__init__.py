"""Character-indexed editing over UTF-8 encoded bytearrays."""

from .string_view import StringView, byte_span
from .validation import IndexValidationError, ensure_index

__all__ = [
    "IndexValidationError",
    "StringView",
    "byte_span",
    "ensure_index",
]
