import re
from typing import Iterator

from ..core.ports import CommentLocator
from ..core.text_range import TextRange

# "/**/" is an ordinary empty comment, not a doc comment
DOC_COMMENT_RE = re.compile(r"/\*\*(?!/)(?:.*?\*/|.*\Z)", re.DOTALL)


class BlockCommentLocator(CommentLocator):
    """
    Finds every ``/** ... */`` comment in a C-family source buffer.

    No attempt is made to skip string literals; an unterminated comment runs
    to the end of the buffer and the parser reports the missing delimiter.
    """

    def find_comments(self, buffer: str) -> Iterator[TextRange]:
        for m in DOC_COMMENT_RE.finditer(buffer):
            yield TextRange(buffer, m.start(), m.end())
