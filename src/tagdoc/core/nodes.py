"""The DocNode tree produced for one parsed comment."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Iterator

from .tags import TagDefinition
from .text_range import TextRange


class DocNodeKind(Enum):
    COMMENT = "Comment"
    SECTION = "Section"
    PARAGRAPH = "Paragraph"
    BLOCK = "Block"
    PARAM_BLOCK = "ParamBlock"
    BLOCK_TAG = "BlockTag"
    INLINE_TAG = "InlineTag"
    MODIFIER_TAG = "ModifierTag"
    PLAIN_TEXT = "PlainText"
    SOFT_BREAK = "SoftBreak"
    CODE_SPAN = "CodeSpan"
    EXCERPT = "Excerpt"


class ExcerptKind(Enum):
    BLOCK_TAG = "BlockTag"
    MODIFIER_TAG = "ModifierTag"
    INLINE_TAG_OPENING = "InlineTag_OpeningDelimiter"
    INLINE_TAG_NAME = "InlineTag_TagName"
    INLINE_TAG_CONTENT = "InlineTag_TagContent"
    INLINE_TAG_CLOSING = "InlineTag_ClosingDelimiter"
    SPACING = "Spacing"
    PLAIN_TEXT = "PlainText"
    SOFT_BREAK = "SoftBreak"
    CODE_SPAN = "CodeSpan"
    PARAMETER_NAME = "ParamBlock_ParameterName"
    HYPHEN = "ParamBlock_Hyphen"


class DocNode:
    kind: ClassVar[DocNodeKind]

    def child_nodes(self) -> list["DocNode"]:
        return []


@dataclass
class Excerpt(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.EXCERPT
    excerpt_kind: ExcerptKind
    content: TextRange


@dataclass
class PlainText(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.PLAIN_TEXT
    excerpt: Excerpt

    @property
    def text(self) -> str:
        return str(self.excerpt.content)

    def child_nodes(self) -> list[DocNode]:
        return [self.excerpt]


@dataclass
class SoftBreak(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.SOFT_BREAK
    excerpt: Excerpt

    def child_nodes(self) -> list[DocNode]:
        return [self.excerpt]


@dataclass
class CodeSpan(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.CODE_SPAN
    excerpt: Excerpt  # includes the backticks

    @property
    def code(self) -> str:
        return str(self.excerpt.content)[1:-1]

    def child_nodes(self) -> list[DocNode]:
        return [self.excerpt]


@dataclass
class BlockTag(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.BLOCK_TAG
    definition: TagDefinition
    excerpt: Excerpt

    @property
    def tag_name(self) -> str:
        return str(self.excerpt.content)

    def child_nodes(self) -> list[DocNode]:
        return [self.excerpt]


@dataclass
class ModifierTag(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.MODIFIER_TAG
    definition: TagDefinition
    excerpt: Excerpt

    @property
    def tag_name(self) -> str:
        return str(self.excerpt.content)

    def child_nodes(self) -> list[DocNode]:
        return [self.excerpt]


@dataclass
class InlineTag(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.INLINE_TAG
    definition: TagDefinition
    excerpts: list[Excerpt]  # delimiters, name, spacing and content in source order

    def _first(self, excerpt_kind: ExcerptKind) -> Excerpt | None:
        for excerpt in self.excerpts:
            if excerpt.excerpt_kind is excerpt_kind:
                return excerpt
        return None

    @property
    def tag_name(self) -> str:
        name = self._first(ExcerptKind.INLINE_TAG_NAME)
        return str(name.content) if name else self.definition.tag_name

    @property
    def parameter(self) -> str | None:
        content = self._first(ExcerptKind.INLINE_TAG_CONTENT)
        return str(content.content) if content else None

    def child_nodes(self) -> list[DocNode]:
        return list(self.excerpts)


@dataclass
class Paragraph(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.PARAGRAPH
    nodes: list[DocNode] = field(default_factory=list)

    def child_nodes(self) -> list[DocNode]:
        return list(self.nodes)


@dataclass
class Section(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.SECTION
    nodes: list[Paragraph] = field(default_factory=list)

    def child_nodes(self) -> list[DocNode]:
        return list(self.nodes)


@dataclass
class Block(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.BLOCK
    block_tag: BlockTag
    content: Section = field(default_factory=Section)

    @property
    def tag_name(self) -> str:
        return self.block_tag.tag_name

    @property
    def definition(self) -> TagDefinition:
        return self.block_tag.definition

    def child_nodes(self) -> list[DocNode]:
        return [self.block_tag, self.content]


@dataclass
class ParamBlock(Block):
    kind: ClassVar[DocNodeKind] = DocNodeKind.PARAM_BLOCK
    name_excerpts: list[Excerpt] = field(default_factory=list)

    @property
    def parameter_name(self) -> str:
        for excerpt in self.name_excerpts:
            if excerpt.excerpt_kind is ExcerptKind.PARAMETER_NAME:
                return str(excerpt.content)
        return ""

    def child_nodes(self) -> list[DocNode]:
        return [self.block_tag, *self.name_excerpts, self.content]


class ModifierTagSet:
    """Modifier tags found in a comment, unique per definition unless allow_multiple."""

    def __init__(self) -> None:
        self.nodes: list[ModifierTag] = []

    def has_tag(self, definition: TagDefinition) -> bool:
        return any(node.definition == definition for node in self.nodes)

    def has_tag_name(self, tag_name: str) -> bool:
        upper = tag_name.upper()
        return any(
            node.definition.tag_name_with_upper_case == upper for node in self.nodes
        )

    def add_tag(self, node: ModifierTag) -> bool:
        if not node.definition.allow_multiple and self.has_tag(node.definition):
            return False
        self.nodes.append(node)
        return True

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ModifierTag]:
        return iter(self.nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModifierTagSet):
            return NotImplemented
        return self.nodes == other.nodes

    # Shorthands for the standard modifiers

    def is_alpha(self) -> bool:
        return self.has_tag_name("@alpha")

    def is_beta(self) -> bool:
        return self.has_tag_name("@beta")

    def is_internal(self) -> bool:
        return self.has_tag_name("@internal")

    def is_public(self) -> bool:
        return self.has_tag_name("@public")


@dataclass
class DocComment(DocNode):
    kind: ClassVar[DocNodeKind] = DocNodeKind.COMMENT
    summary_section: Section = field(default_factory=Section)
    remarks_block: Block | None = None
    private_remarks: Block | None = None
    deprecated_block: Block | None = None
    params: list[ParamBlock] = field(default_factory=list)
    type_params: list[ParamBlock] = field(default_factory=list)
    returns_block: Block | None = None
    see_blocks: list[Block] = field(default_factory=list)
    custom_blocks: list[Block] = field(default_factory=list)
    modifier_tag_set: ModifierTagSet = field(default_factory=ModifierTagSet)

    def child_nodes(self) -> list[DocNode]:
        out: list[DocNode] = [self.summary_section]
        for block in (self.remarks_block, self.private_remarks, self.deprecated_block):
            if block is not None:
                out.append(block)
        out.extend(self.params)
        out.extend(self.type_params)
        if self.returns_block is not None:
            out.append(self.returns_block)
        out.extend(self.see_blocks)
        out.extend(self.custom_blocks)
        out.extend(self.modifier_tag_set.nodes)
        return out


# Traversal

Visitor = Callable[[DocNode, int], "bool | None"]


def walk(node: DocNode, visitor: Visitor) -> None:
    """
    Depth-first, document-order traversal with an explicit stack.

    ``visitor(node, depth)`` may return False to skip the node's children.
    """
    stack: list[tuple[DocNode, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        if visitor(current, depth) is False:
            continue
        children = current.child_nodes()
        for child in reversed(children):
            stack.append((child, depth + 1))


def iter_excerpts(node: DocNode) -> list[Excerpt]:
    found: list[Excerpt] = []

    def collect(current: DocNode, _depth: int) -> None:
        if isinstance(current, Excerpt):
            found.append(current)

    walk(node, collect)
    return found


def extract_excerpts(node: DocNode) -> str:
    """Concatenate the source text of every Excerpt leaf under ``node``."""
    return "".join(str(excerpt.content) for excerpt in iter_excerpts(node))


def dump_tree(node: DocNode) -> list[str]:
    """One line per node, indented by depth, excerpt content JSON-quoted."""
    lines: list[str] = []

    def emit(current: DocNode, depth: int) -> None:
        text = f"{'  ' * depth}- {current.kind.value}"
        if isinstance(current, Excerpt):
            text = f"{'  ' * depth}- {current.kind.value}_{current.excerpt_kind.value}"
            content = str(current.content)
            if content:
                text += ": " + json.dumps(content)
        lines.append(text)

    walk(node, emit)
    return lines
