"""Tag definitions and the built-in standard tag set."""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError

TAG_NAME_RE = re.compile(r"^@[A-Za-z][A-Za-z0-9]*$")


class TagSyntaxKind(Enum):
    BLOCK_TAG = "block"
    MODIFIER_TAG = "modifier"
    INLINE_TAG = "inline"

    @classmethod
    def from_label(cls, label: str) -> "TagSyntaxKind":
        for kind in cls:
            if kind.value == label:
                return kind
        raise ConfigurationError(
            f"Unknown syntax kind {label!r}: expected block, modifier or inline"
        )


@dataclass(frozen=True)
class TagDefinition:
    tag_name: str  # always starts with "@"
    syntax_kind: TagSyntaxKind
    allow_multiple: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.tag_name, str) or not TAG_NAME_RE.match(self.tag_name):
            raise ConfigurationError(
                f"Invalid tag name {self.tag_name!r}: expected '@' followed by letters and digits"
            )
        if not isinstance(self.syntax_kind, TagSyntaxKind):
            raise ConfigurationError(
                f"Invalid syntax kind for {self.tag_name}: {self.syntax_kind!r}"
            )

    @property
    def tag_name_with_upper_case(self) -> str:
        """Lookup key; tag names are matched case-insensitively."""
        return self.tag_name.upper()

    @property
    def symbol_name(self) -> str:
        return self.tag_name[1:]


def _block(name: str, allow_multiple: bool = False) -> TagDefinition:
    return TagDefinition(name, TagSyntaxKind.BLOCK_TAG, allow_multiple)


def _modifier(name: str) -> TagDefinition:
    return TagDefinition(name, TagSyntaxKind.MODIFIER_TAG)


def _inline(name: str, allow_multiple: bool = False) -> TagDefinition:
    return TagDefinition(name, TagSyntaxKind.INLINE_TAG, allow_multiple)


class StandardTags:
    """
    The built-in tag set every ParserConfiguration starts from.

    Declaration order here is the order of ``all_definitions`` and therefore
    the order of records in the generated configuration artifact.
    """

    alpha = _modifier("@alpha")
    beta = _modifier("@beta")
    decorator = _block("@decorator", allow_multiple=True)
    default_value = _block("@defaultValue")
    deprecated = _block("@deprecated")
    event_property = _modifier("@eventProperty")
    example = _block("@example", allow_multiple=True)
    experimental = _modifier("@experimental")
    inherit_doc = _inline("@inheritDoc")
    internal = _modifier("@internal")
    label = _inline("@label")
    link = _inline("@link", allow_multiple=True)
    override = _modifier("@override")
    package_documentation = _modifier("@packageDocumentation")
    param = _block("@param", allow_multiple=True)
    private_remarks = _block("@privateRemarks")
    public = _modifier("@public")
    readonly = _modifier("@readonly")
    remarks = _block("@remarks")
    returns = _block("@returns")
    sealed = _modifier("@sealed")
    see = _block("@see", allow_multiple=True)
    throws = _block("@throws", allow_multiple=True)
    type_param = _block("@typeParam", allow_multiple=True)
    virtual = _modifier("@virtual")

    all_definitions: tuple[TagDefinition, ...] = (
        alpha,
        beta,
        decorator,
        default_value,
        deprecated,
        event_property,
        example,
        experimental,
        inherit_doc,
        internal,
        label,
        link,
        override,
        package_documentation,
        param,
        private_remarks,
        public,
        readonly,
        remarks,
        returns,
        sealed,
        see,
        throws,
        type_param,
        virtual,
    )
