"""Diagnostics recorded while parsing a single comment."""

from dataclasses import dataclass, field
from enum import Enum

from .text_range import TextRange


class MessageId(Enum):
    UNSUPPORTED_TAG = "tagdoc-unsupported-tag"
    TAG_NOT_SUPPORTED = "tagdoc-tag-not-supported"
    DUPLICATE_INLINE_TAG = "tagdoc-duplicate-inline-tag"
    DUPLICATE_BLOCK_TAG = "tagdoc-duplicate-block-tag"
    MALFORMED_INLINE_TAG = "tagdoc-malformed-inline-tag"
    PARAM_MISSING_NAME = "tagdoc-param-missing-name"
    MISSING_CLOSING_DELIMITER = "tagdoc-missing-closing-delimiter"


@dataclass(frozen=True)
class ParserMessage:
    message_id: MessageId
    message: str
    text_range: TextRange

    def __str__(self) -> str:
        return self.message


@dataclass
class ParserLog:
    messages: list[ParserMessage] = field(default_factory=list)

    def add_message(
        self, message_id: MessageId, message: str, text_range: TextRange
    ) -> ParserMessage:
        entry = ParserMessage(message_id, message, text_range)
        self.messages.append(entry)
        return entry

    def of_kind(self, message_id: MessageId) -> list[ParserMessage]:
        return [m for m in self.messages if m.message_id is message_id]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)
