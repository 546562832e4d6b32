"""Non-owning views over an immutable source buffer."""

from .errors import RangeError


class TextRange:
    """
    A (pos, end) window into a shared source string.

    The buffer is never copied; ``str(range)`` slices it on demand. Two
    ranges compare equal only when they view the very same buffer object
    at the same offsets. Offsets are Python string indices.
    """

    __slots__ = ("buffer", "pos", "end")

    def __init__(self, buffer: str, pos: int, end: int):
        if buffer is None:
            raise RangeError("TextRange requires a buffer")
        if pos < 0:
            raise RangeError(f"Invalid pos {pos}: must not be negative")
        if pos > end:
            raise RangeError(f"Invalid range: pos {pos} is after end {end}")
        if end > len(buffer):
            raise RangeError(
                f"Invalid end {end}: buffer length is {len(buffer)}"
            )
        self.buffer = buffer
        self.pos = pos
        self.end = end

    @classmethod
    def from_string(cls, buffer: str) -> "TextRange":
        if buffer is None:
            raise RangeError("TextRange requires a buffer")
        return cls(buffer, 0, len(buffer))

    @classmethod
    def from_string_range(cls, buffer: str, pos: int, end: int) -> "TextRange":
        return cls(buffer, pos, end)

    @property
    def length(self) -> int:
        return self.end - self.pos

    def is_empty(self) -> bool:
        return self.pos == self.end

    def get_new_range(self, pos: int, end: int) -> "TextRange":
        """Return a sub-range of this range over the same buffer."""
        if pos < self.pos or end > self.end:
            raise RangeError(
                f"Sub-range ({pos}, {end}) lies outside ({self.pos}, {self.end})"
            )
        return TextRange(self.buffer, pos, end)

    def __str__(self) -> str:
        return self.buffer[self.pos : self.end]

    def __repr__(self) -> str:
        return f"TextRange({self.pos}, {self.end}, {str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextRange):
            return NotImplemented
        return (
            self.buffer is other.buffer
            and self.pos == other.pos
            and self.end == other.end
        )

    def __hash__(self) -> int:
        return hash((id(self.buffer), self.pos, self.end))
