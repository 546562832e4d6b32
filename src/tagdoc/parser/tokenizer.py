"""Split a comment range into syntax tokens.

Comment framing (``/**``, ``*/`` and the ``*`` gutter of continuation lines)
is removed here, so tokens only ever cover comment content. Every token is a
TextRange over the caller's buffer.
"""

import re
from dataclasses import dataclass
from enum import Enum

from ..core.log import MessageId, ParserLog
from ..core.text_range import TextRange

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_TAG_RE = re.compile(r"@[A-Za-z][A-Za-z0-9]*")
_SPACING = " \t"
_TEXT_STOP = " \t`{}"


class TokenKind(Enum):
    TEXT = "text"
    SPACING = "spacing"
    NEWLINE = "newline"
    TAG = "tag"
    LEFT_BRACE = "left_brace"
    RIGHT_BRACE = "right_brace"
    CODE_SPAN = "code_span"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    range: TextRange

    @property
    def text(self) -> str:
        return str(self.range)


def _skip_gutter(buffer: str, start: int, end: int) -> int:
    # "   * text" -> "text"
    i = start
    while i < end and buffer[i] in _SPACING:
        i += 1
    if i < end and buffer[i] == "*":
        i += 1
        if i < end and buffer[i] == " ":
            i += 1
        return i
    return start


def _tokenize_line(buffer: str, start: int, end: int, tokens: list[Token]) -> None:
    i = start
    while i < end:
        ch = buffer[i]
        if ch in _SPACING:
            j = i + 1
            while j < end and buffer[j] in _SPACING:
                j += 1
            tokens.append(Token(TokenKind.SPACING, TextRange(buffer, i, j)))
            i = j
        elif ch == "`":
            close = buffer.find("`", i + 1, end)
            if close == -1:
                tokens.append(Token(TokenKind.TEXT, TextRange(buffer, i, i + 1)))
                i += 1
            else:
                tokens.append(Token(TokenKind.CODE_SPAN, TextRange(buffer, i, close + 1)))
                i = close + 1
        elif ch == "{":
            tokens.append(Token(TokenKind.LEFT_BRACE, TextRange(buffer, i, i + 1)))
            i += 1
        elif ch == "}":
            tokens.append(Token(TokenKind.RIGHT_BRACE, TextRange(buffer, i, i + 1)))
            i += 1
        else:
            # "@" reaches here at line start, after spacing, a brace or a
            # backtick. Inside a word it is swallowed by the text run below;
            # glued to a backtick it is text as well.
            at_word_start = i == start or buffer[i - 1] != "`"
            m = _TAG_RE.match(buffer, i, end) if ch == "@" and at_word_start else None
            if m:
                tokens.append(Token(TokenKind.TAG, TextRange(buffer, i, m.end())))
                i = m.end()
                continue
            j = i + 1
            while j < end and buffer[j] not in _TEXT_STOP:
                j += 1
            tokens.append(Token(TokenKind.TEXT, TextRange(buffer, i, j)))
            i = j


def tokenize(text_range: TextRange, log: ParserLog) -> list[Token]:
    buffer = text_range.buffer
    pos, end = text_range.pos, text_range.end

    framed = buffer.startswith("/**", pos, end)
    if framed:
        pos += 3
        if end - pos >= 2 and buffer.startswith("*/", end - 2, end):
            end -= 2
        else:
            log.add_message(
                MessageId.MISSING_CLOSING_DELIMITER,
                'The doc comment is missing its closing "*/" delimiter',
                TextRange(buffer, end, end),
            )

    tokens: list[Token] = []
    line_start = pos
    first_line = True
    while True:
        m = _NEWLINE_RE.search(buffer, line_start, end)
        line_end = m.start() if m else end
        content_start = line_start
        if framed and not first_line:
            content_start = _skip_gutter(buffer, line_start, line_end)
        _tokenize_line(buffer, content_start, line_end, tokens)
        if m is None:
            break
        tokens.append(Token(TokenKind.NEWLINE, TextRange(buffer, m.start(), m.end())))
        line_start = m.end()
        first_line = False
    return tokens
