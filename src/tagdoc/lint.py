from dataclasses import dataclass
from typing import Protocol

from .core.log import MessageId
from .core.text_range import TextRange
from .parser.parser import ParserContext

_TAG_SUPPORT_IDS = (MessageId.UNSUPPORTED_TAG, MessageId.TAG_NOT_SUPPORTED)


@dataclass
class Finding:
    severity: str  # "info" | "warn" | "error"
    message: str
    range: TextRange | None = None
    message_id: MessageId | None = None


class LintRule(Protocol):
    id: str

    def check(self, context: ParserContext) -> list[Finding]:
        pass


class UnsupportedTagsRule:
    """Unknown or unsupported tags are errors only once strictness is opted into."""

    id = "unsupported-tags"

    def check(self, context: ParserContext) -> list[Finding]:
        strict = context.configuration.validation.report_unsupported_tags
        severity = "error" if strict else "warn"
        return [
            Finding(severity, m.message, m.text_range, m.message_id)
            for m in context.log
            if m.message_id in _TAG_SUPPORT_IDS
        ]


class GrammarRule:
    id = "grammar"

    def check(self, context: ParserContext) -> list[Finding]:
        return [
            Finding("warn", m.message, m.text_range, m.message_id)
            for m in context.log
            if m.message_id not in _TAG_SUPPORT_IDS
        ]


class ConfigurationWarningsRule:
    id = "configuration"

    def check(self, context: ParserContext) -> list[Finding]:
        return [Finding("info", w.message) for w in context.configuration.warnings]


DEFAULT_RULES: tuple[LintRule, ...] = (
    ConfigurationWarningsRule(),
    UnsupportedTagsRule(),
    GrammarRule(),
)


def lint(context: ParserContext, rules: tuple[LintRule, ...] = DEFAULT_RULES) -> list[Finding]:
    out: list[Finding] = []
    for rule in rules:
        out.extend(rule.check(context))
    return out
