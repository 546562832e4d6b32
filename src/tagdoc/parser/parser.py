"""Turn a comment TextRange into a DocComment tree plus a ParserLog."""

import logging
from dataclasses import dataclass, field
from typing import Iterator

from ..core.configuration import ParserConfiguration
from ..core.errors import RangeError
from ..core.log import MessageId, ParserLog
from ..core.nodes import (
    Block,
    BlockTag,
    CodeSpan,
    DocComment,
    Excerpt,
    ExcerptKind,
    InlineTag,
    ModifierTag,
    Paragraph,
    ParamBlock,
    PlainText,
    Section,
    SoftBreak,
)
from ..core.ports import CommentLocator
from ..core.tags import TagDefinition, TagSyntaxKind
from ..core.text_range import TextRange
from .tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

# Standard block tags that own a fixed slot on DocComment
_SINGLE_SECTIONS = {
    "@REMARKS": "remarks_block",
    "@PRIVATEREMARKS": "private_remarks",
    "@DEPRECATED": "deprecated_block",
    "@RETURNS": "returns_block",
}
_PARAM_SECTIONS = {
    "@PARAM": "params",
    "@TYPEPARAM": "type_params",
}
_SEE = "@SEE"


@dataclass
class ParserContext:
    """Everything produced by one parse call; owned by the caller afterwards."""
    configuration: ParserConfiguration
    source_range: TextRange
    tokens: list[Token] = field(default_factory=list)
    doc_comment: DocComment = field(default_factory=DocComment)
    log: ParserLog = field(default_factory=ParserLog)


class _CommentBuilder:
    """Single forward pass over the token list with one current-section cursor."""

    def __init__(self, context: ParserContext):
        self.context = context
        self.config = context.configuration
        self.log = context.log
        self.doc = context.doc_comment
        self.tokens = context.tokens
        self.i = 0

        self.section: Section = self.doc.summary_section
        self.paragraph: Paragraph | None = None
        self.pending_breaks: list[Token] = []
        self.pending_spacing: Token | None = None
        self.line_has_content = False
        self.line_has_tag = False
        self.run: tuple[int, int] | None = None
        self.seen_inline: set[str] = set()

    # Content accumulation

    def _begin_content(self) -> None:
        if self.paragraph is None:
            self.paragraph = Paragraph()
            self.section.nodes.append(self.paragraph)
            self.pending_breaks = []
        for brk in self.pending_breaks:
            self.paragraph.nodes.append(
                SoftBreak(Excerpt(ExcerptKind.SOFT_BREAK, brk.range))
            )
        self.pending_breaks = []

    def _close_run(self) -> None:
        if self.run is None:
            return
        start, end = self.run
        buffer = self.context.source_range.buffer
        self.paragraph.nodes.append(
            PlainText(Excerpt(ExcerptKind.PLAIN_TEXT, TextRange(buffer, start, end)))
        )
        self.run = None

    def _add_text(self, token: Token) -> None:
        if self.run is not None:
            self.run = (self.run[0], token.range.end)
        else:
            self._begin_content()
            start = token.range.pos
            if self.pending_spacing is not None:
                start = self.pending_spacing.range.pos
            self.run = (start, token.range.end)
        self.pending_spacing = None
        self.line_has_content = True

    def _add_node(self, node) -> None:
        # spacing between earlier content and this node stays in the text
        if self.pending_spacing is not None:
            self._add_text(self.pending_spacing)
        self._close_run()
        self._begin_content()
        self.paragraph.nodes.append(node)
        self.line_has_content = True

    def _on_spacing(self, token: Token) -> None:
        if not self.line_has_content:
            return
        if self.run is not None:
            self.pending_spacing = token
        elif self.pending_spacing is None:
            self.pending_spacing = token

    def _on_newline(self, token: Token) -> None:
        self._close_run()
        self.pending_spacing = None
        tag_only = self.line_has_tag and not self.line_has_content
        self.line_has_content = False
        self.line_has_tag = False
        if self.paragraph is None or tag_only:
            # a line holding only modifier tags is not a blank line
            return
        self.pending_breaks.append(token)
        if len(self.pending_breaks) >= 2:
            # blank line ends the paragraph
            self.paragraph = None
            self.pending_breaks = []

    def _reset_section(self, section: Section) -> None:
        self._close_run()
        self.section = section
        self.paragraph = None
        self.pending_breaks = []
        self.pending_spacing = None
        self.line_has_content = False
        self.line_has_tag = False

    # Tags

    def _check_support(self, definition: TagDefinition, token: Token) -> None:
        if (
            self.config.validation.report_unsupported_tags
            and not self.config.is_tag_supported(definition)
        ):
            self.log.add_message(
                MessageId.TAG_NOT_SUPPORTED,
                f"The tag {token.text} is not supported by this configuration",
                token.range,
            )

    def _on_tag(self, token: Token) -> None:
        definition = self.config.try_get_tag_definition(token.text)
        if definition is None:
            self.log.add_message(
                MessageId.UNSUPPORTED_TAG,
                f"The tag {token.text} is not defined in this configuration",
                token.range,
            )
            self._add_text(token)
            return
        self._check_support(definition, token)
        kind = definition.syntax_kind
        if kind is TagSyntaxKind.BLOCK_TAG:
            self._start_block(definition, token)
        elif kind is TagSyntaxKind.MODIFIER_TAG:
            self._close_run()
            self.pending_spacing = None
            self.line_has_tag = True
            node = ModifierTag(definition, Excerpt(ExcerptKind.MODIFIER_TAG, token.range))
            self.doc.modifier_tag_set.add_tag(node)
        else:
            self.log.add_message(
                MessageId.MALFORMED_INLINE_TAG,
                f'The inline tag {token.text} must be enclosed in "{{" and "}}" braces',
                token.range,
            )
            excerpts = [Excerpt(ExcerptKind.INLINE_TAG_NAME, token.range)]
            self._add_inline(InlineTag(definition, excerpts), token)

    def _add_inline(self, node: InlineTag, name_token: Token) -> None:
        key = node.definition.tag_name_with_upper_case
        if key in self.seen_inline and not node.definition.allow_multiple:
            self.log.add_message(
                MessageId.DUPLICATE_INLINE_TAG,
                f"The inline tag {name_token.text} may only be used once per comment",
                name_token.range,
            )
        self.seen_inline.add(key)
        self._add_node(node)

    def _on_left_brace(self, token: Token) -> None:
        nxt = self._peek(1)
        if nxt is None or nxt.kind is not TokenKind.TAG:
            self._add_text(token)
            return
        definition = self.config.try_get_tag_definition(nxt.text)
        close_index = self._find_closing_brace(self.i + 2)
        if close_index is None:
            self.log.add_message(
                MessageId.MALFORMED_INLINE_TAG,
                f'The inline tag {nxt.text} is missing its closing "}}" on the same line',
                TextRange(token.range.buffer, token.range.pos, nxt.range.end),
            )
            if definition is None:
                self.log.add_message(
                    MessageId.UNSUPPORTED_TAG,
                    f"The tag {nxt.text} is not defined in this configuration",
                    nxt.range,
                )
            self._add_text(token)
            self._add_text(nxt)
            self.i += 1
            return
        if definition is None:
            self.log.add_message(
                MessageId.UNSUPPORTED_TAG,
                f"The tag {nxt.text} is not defined in this configuration",
                nxt.range,
            )
            self._add_text(token)
            self._add_text(nxt)
            self.i += 1
            return
        if definition.syntax_kind is not TagSyntaxKind.INLINE_TAG:
            self.log.add_message(
                MessageId.MALFORMED_INLINE_TAG,
                f"The tag {nxt.text} is a {definition.syntax_kind.value} tag and cannot be used inline",
                nxt.range,
            )
            self._add_text(token)
            self._add_text(nxt)
            self.i += 1
            return
        self._check_support(definition, nxt)
        closing = self.tokens[close_index]
        buffer = token.range.buffer
        excerpts = [
            Excerpt(ExcerptKind.INLINE_TAG_OPENING, token.range),
            Excerpt(ExcerptKind.INLINE_TAG_NAME, nxt.range),
        ]
        inner_start, inner_end = nxt.range.end, closing.range.pos
        inner = buffer[inner_start:inner_end]
        content_start = inner_start + (len(inner) - len(inner.lstrip(" \t")))
        content_end = inner_end - (len(inner) - len(inner.rstrip(" \t")))
        if content_start >= content_end:
            if inner_start < inner_end:
                excerpts.append(
                    Excerpt(ExcerptKind.SPACING, TextRange(buffer, inner_start, inner_end))
                )
        else:
            if inner_start < content_start:
                excerpts.append(
                    Excerpt(ExcerptKind.SPACING, TextRange(buffer, inner_start, content_start))
                )
            excerpts.append(
                Excerpt(
                    ExcerptKind.INLINE_TAG_CONTENT,
                    TextRange(buffer, content_start, content_end),
                )
            )
            if content_end < inner_end:
                excerpts.append(
                    Excerpt(ExcerptKind.SPACING, TextRange(buffer, content_end, inner_end))
                )
        excerpts.append(Excerpt(ExcerptKind.INLINE_TAG_CLOSING, closing.range))
        self._add_inline(InlineTag(definition, excerpts), nxt)
        self.i = close_index

    def _find_closing_brace(self, start: int) -> int | None:
        depth = 1
        for index in range(start, len(self.tokens)):
            kind = self.tokens[index].kind
            if kind is TokenKind.NEWLINE:
                return None
            if kind is TokenKind.LEFT_BRACE:
                depth += 1
            elif kind is TokenKind.RIGHT_BRACE:
                depth -= 1
                if depth == 0:
                    return index
        return None

    def _start_block(self, definition: TagDefinition, token: Token) -> None:
        block_tag = BlockTag(definition, Excerpt(ExcerptKind.BLOCK_TAG, token.range))
        key = definition.tag_name_with_upper_case

        if key in _SINGLE_SECTIONS:
            attr = _SINGLE_SECTIONS[key]
            existing = getattr(self.doc, attr)
            if existing is not None:
                self._duplicate_block(existing, token)
                return
            block = Block(block_tag)
            setattr(self.doc, attr, block)
        elif key in _PARAM_SECTIONS:
            block = ParamBlock(block_tag, name_excerpts=self._parse_param_name(token))
            getattr(self.doc, _PARAM_SECTIONS[key]).append(block)
        else:
            target = self.doc.see_blocks if key == _SEE else self.doc.custom_blocks
            if not definition.allow_multiple:
                for existing in target:
                    if existing.definition == definition:
                        self._duplicate_block(existing, token)
                        return
            block = Block(block_tag)
            target.append(block)
        self._reset_section(block.content)

    def _duplicate_block(self, existing: Block, token: Token) -> None:
        self.log.add_message(
            MessageId.DUPLICATE_BLOCK_TAG,
            f"The block tag {token.text} may only be used once per comment",
            token.range,
        )
        self._reset_section(existing.content)

    def _parse_param_name(self, token: Token) -> list[Excerpt]:
        index = self.i + 1
        while index < len(self.tokens) and self.tokens[index].kind is TokenKind.SPACING:
            index += 1
        if index >= len(self.tokens) or self.tokens[index].kind is not TokenKind.TEXT:
            self.log.add_message(
                MessageId.PARAM_MISSING_NAME,
                f"The {token.text} block should be followed by a parameter name",
                token.range,
            )
            return []
        excerpts = [Excerpt(ExcerptKind.PARAMETER_NAME, self.tokens[index].range)]
        self.i = index
        # optional "name - description"
        after = index + 1
        while after < len(self.tokens) and self.tokens[after].kind is TokenKind.SPACING:
            after += 1
        if (
            after < len(self.tokens)
            and self.tokens[after].kind is TokenKind.TEXT
            and self.tokens[after].text == "-"
        ):
            excerpts.append(Excerpt(ExcerptKind.HYPHEN, self.tokens[after].range))
            self.i = after
        return excerpts

    def _peek(self, offset: int) -> Token | None:
        index = self.i + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def build(self) -> None:
        while self.i < len(self.tokens):
            token = self.tokens[self.i]
            kind = token.kind
            if kind is TokenKind.SPACING:
                self._on_spacing(token)
            elif kind is TokenKind.NEWLINE:
                self._on_newline(token)
            elif kind is TokenKind.TAG:
                self._on_tag(token)
            elif kind is TokenKind.LEFT_BRACE:
                self._on_left_brace(token)
            elif kind is TokenKind.CODE_SPAN:
                self._add_node(CodeSpan(Excerpt(ExcerptKind.CODE_SPAN, token.range)))
            else:
                self._add_text(token)
            self.i += 1
        self._close_run()


class DocParser:
    """
    Parses doc comments against one ParserConfiguration.

    The configuration is frozen on construction, so a single parser (and its
    configuration) can be shared by any number of parse calls.
    """

    def __init__(self, configuration: ParserConfiguration | None = None):
        self.configuration = configuration or ParserConfiguration()
        self.configuration.freeze()

    def parse_range(self, text_range: TextRange) -> ParserContext:
        if not isinstance(text_range, TextRange):
            raise RangeError(f"Expected a TextRange, got {type(text_range).__name__}")
        context = ParserContext(self.configuration, text_range)
        context.tokens = tokenize(text_range, context.log)
        _CommentBuilder(context).build()
        logger.debug(
            "Parsed range (%d, %d): %d tokens, %d messages",
            text_range.pos,
            text_range.end,
            len(context.tokens),
            len(context.log),
        )
        return context

    def parse_string(self, text: str) -> ParserContext:
        return self.parse_range(TextRange.from_string(text))

    def parse_all(self, buffer: str, locator: CommentLocator) -> Iterator[ParserContext]:
        """Parse every comment range the locator finds, in the order it yields them."""
        for text_range in locator.find_comments(buffer):
            yield self.parse_range(text_range)


def parse(
    text_range: TextRange, configuration: ParserConfiguration | None = None
) -> ParserContext:
    return DocParser(configuration).parse_range(text_range)
