"""Text helpers for generated artifacts."""

import os
import re
import textwrap

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def normalize_eol(text: str, eol: str = "lf") -> str:
    """Rewrite line endings.

    Args:
        text: Input text
        eol: 'lf', 'crlf' or 'native'

    Returns:
        Text with every line ending in the requested style
    """
    result = text.replace('\r\n', '\n').replace('\r', '\n')
    if eol == 'crlf' or (eol == 'native' and os.name == 'nt'):
        result = result.replace('\n', '\r\n')
    return result


def wrap_words(text: str, width: int = 80) -> str:
    """Word-wrap text at ``width`` columns without ever splitting a word.

    Whitespace inside a paragraph collapses to single spaces; blank lines
    separate paragraphs and are kept as one empty line. A word longer than
    ``width`` stays on a line of its own.
    """
    if width <= 0:
        raise ValueError(f"Wrap width must be positive, got {width}")
    paragraphs = _BLANK_LINE_RE.split(normalize_eol(text).strip())
    wrapped = []
    for paragraph in paragraphs:
        words = paragraph.split()
        if not words:
            continue
        wrapped.append(
            textwrap.fill(
                " ".join(words),
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return "\n\n".join(wrapped)


def same_content(left: str, right: str) -> bool:
    """Compare two documents ignoring line-ending style and surrounding whitespace."""
    return normalize_eol(left).strip() == normalize_eol(right).strip()
