"""tagdoc - doc comment parser with an extensible tag grammar."""

__version__ = "0.3.0"

from .core.configuration import ConfigurationWarning, ParserConfiguration
from .core.errors import (
    ConfigurationError,
    DuplicateDefinitionError,
    GenerationError,
    MissingDocumentationError,
    RangeError,
    RoundTripError,
    TagDocError,
)
from .core.log import MessageId, ParserLog, ParserMessage
from .core.nodes import DocComment, DocNodeKind, dump_tree, extract_excerpts, walk
from .core.tags import StandardTags, TagDefinition, TagSyntaxKind
from .core.text_range import TextRange
from .generator import ConfigGenerator, SyncStatus, generate_config
from .parser.parser import DocParser, ParserContext, parse

__all__ = [
    "__version__",
    "ConfigGenerator",
    "ConfigurationError",
    "ConfigurationWarning",
    "DocComment",
    "DocNodeKind",
    "DocParser",
    "DuplicateDefinitionError",
    "GenerationError",
    "MessageId",
    "MissingDocumentationError",
    "ParserConfiguration",
    "ParserContext",
    "ParserLog",
    "ParserMessage",
    "RangeError",
    "RoundTripError",
    "StandardTags",
    "SyncStatus",
    "TagDefinition",
    "TagDocError",
    "TagSyntaxKind",
    "TextRange",
    "dump_tree",
    "extract_excerpts",
    "generate_config",
    "parse",
    "walk",
]
