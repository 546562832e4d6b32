"""Formatting utilities for generated tagdoc artifacts."""

from .text import normalize_eol, same_content, wrap_words

__all__ = [
    "normalize_eol",
    "same_content",
    "wrap_words",
]
