"""Documentation model: symbol name -> parsed DocComment."""

import io
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml

from ..core.configuration import ParserConfiguration
from ..core.errors import ConfigurationError
from ..core.nodes import DocComment, Section, extract_excerpts
from ..parser.parser import DocParser

STANDARD_DOCS_PATH = Path(__file__).resolve().parent.parent / "data" / "standard_tags.yaml"


def section_text(section: Section) -> str:
    """Plain text of a section, paragraphs separated by a blank line."""
    paragraphs = [extract_excerpts(p).strip() for p in section.nodes]
    return "\n\n".join(p for p in paragraphs if p)


class ApiDocumentation(Mapping[str, DocComment]):
    """
    Read-only mapping of symbol names to their parsed doc comments.

    The source is a YAML mapping whose values are doc comment texts; each one
    is parsed with the caller's parser (standard tags by default).
    """

    def __init__(self, comments: dict[str, DocComment] | None = None):
        self._d = dict(comments or {})

    @classmethod
    def from_mapping(
        cls, data: dict[str, Any], parser: DocParser | None = None
    ) -> "ApiDocumentation":
        parser = parser or DocParser(ParserConfiguration())
        comments: dict[str, DocComment] = {}
        for symbol, text in data.items():
            if not isinstance(text, str):
                raise ConfigurationError(f"Documentation for {symbol!r} must be a string")
            comments[str(symbol)] = parser.parse_string(text).doc_comment
        return cls(comments)

    @classmethod
    def load_file(cls, path: Path, parser: DocParser | None = None) -> "ApiDocumentation":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(io.StringIO(f.read())) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a mapping of symbol names")
        return cls.from_mapping(data, parser)

    @classmethod
    def standard(cls) -> "ApiDocumentation":
        return cls.load_file(STANDARD_DOCS_PATH)

    def summary(self, symbol: str) -> str | None:
        comment = self._d.get(symbol)
        if comment is None:
            return None
        return section_text(comment.summary_section)

    def __getitem__(self, k: str) -> DocComment:
        return self._d[k]

    def __iter__(self) -> Iterator[str]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)
