from typing import Iterable, Protocol

from .configuration import ParserConfiguration
from .text_range import TextRange


class CommentLocator(Protocol):
    """
    Enumerate the doc-comment ranges of a source buffer. The host language
    decides what a comment is; the parser only needs the ranges.
    """

    def find_comments(self, buffer: str) -> Iterable[TextRange]:
        pass


class LoadedArtifact(Protocol):
    """Result of reading a configuration artifact back in."""

    errors: list[str]

    @property
    def has_errors(self) -> bool:
        pass

    def get_error_summary(self) -> str:
        pass

    def to_configuration(self) -> ParserConfiguration:
        pass


class ArtifactLoader(Protocol):
    """
    The loader consumers use for configuration artifacts. Content problems
    are reported through ``errors`` on the result, never raised.
    """

    def load_text(self, text: str) -> LoadedArtifact:
        pass
