"""iriview.path
Paths as sequences of segments.

Path is a view over a parsed buffer. PathBuf is an owned, mutable path that the builder and the
resolution algorithm write into; its symbolic_push applies "." and ".." as it goes, which is
remove_dot_segments from RFC 3986 section 5.2.4 done one segment at a time.
"""

from typing import Iterable, Iterator, Self

from . import grammar
from .components import DEFAULT_ENCODING, Component, Segment, to_buffer
from .errors import InvalidPathError

_SLASH: int = ord("/")


class Path(Component):
    """ipath: absolute iff it starts with "/".
    Writing "/" (when absolute) followed by every segment, each with a trailing "/" when open,
    gives back the exact path text.
    """

    __slots__ = ()

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        buffer: bytes = to_buffer(data)
        length: int = grammar.parse_path(buffer, 0)
        if length != len(buffer):
            raise InvalidPathError(buffer.decode(DEFAULT_ENCODING, "replace"))
        return cls(buffer, 0, length)

    def is_absolute(self: Self) -> bool:
        return self._length > 0 and self._buffer[self._offset] == _SLASH

    def is_relative(self: Self) -> bool:
        return not self.is_absolute()

    def segments(self: Self) -> Iterator[Segment]:
        end: int = self._offset + self._length
        i: int = self._offset
        if self.is_absolute():
            i += 1
        while i < end:
            slash: int = self._buffer.find(_SLASH, i, end)
            if slash == -1:
                yield Segment(self._buffer, i, end - i)
                return
            yield Segment(self._buffer, i, slash - i, open=True)
            i = slash + 1

    def last(self: Self) -> Segment | None:
        result: Segment | None = None
        for result in self.segments():
            pass
        return result

    def __iter__(self: Self) -> Iterator[Segment]:
        return self.segments()

    def _key(self: Self) -> tuple[bool, tuple[Segment, ...]]:
        return self.is_absolute(), tuple(self.segments())

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, (Path, PathBuf)):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self._key())


class PathBuf:
    """A mutable path.
    Every segment but the last is open; the last one is open when the path ends with "/".
    """

    def __init__(self: Self, absolute: bool = False, segments: Iterable[Segment] = ()) -> None:
        self._absolute: bool = absolute
        self._segments: list[Segment] = []
        for segment in segments:
            self.push(segment)

    @classmethod
    def from_path(cls, path: Path) -> Self:
        return cls(path.is_absolute(), path.segments())

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        return cls.from_path(Path.from_string(data))

    def is_absolute(self: Self) -> bool:
        return self._absolute

    def set_absolute(self: Self, absolute: bool) -> None:
        self._absolute = absolute

    def is_empty(self: Self) -> bool:
        return not self._absolute and len(self._segments) == 0

    def segments(self: Self) -> Iterator[Segment]:
        return iter(self._segments)

    def last(self: Self) -> Segment | None:
        return self._segments[-1] if self._segments else None

    def _open_last(self: Self) -> None:
        if self._segments:
            self._segments[-1] = self._segments[-1].with_open(True)

    def push(self: Self, segment: Segment) -> None:
        """Append a segment as is. The segment before it becomes a directory."""
        self._open_last()
        self._segments.append(segment)

    def pop(self: Self) -> Segment | None:
        """Remove the last segment. What remains ends with "/"."""
        if not self._segments:
            return None
        segment: Segment = self._segments.pop()
        self._open_last()
        return segment

    def symbolic_push(self: Self, segment: Segment) -> None:
        """Append a segment, interpreting "." and ".." the way remove_dot_segments does."""
        if segment.is_current():
            self._open_last()
        elif segment.is_parent():
            last: Segment | None = self.last()
            if last is not None and not last.is_parent():
                self.pop()
            elif not self._absolute:
                # Nothing left to climb out of in a relative path, so the ".." stays.
                self.push(segment)
        else:
            self.push(segment)

    def symbolic_append(self: Self, segments: Iterable[Segment]) -> None:
        for segment in segments:
            self.symbolic_push(segment)

    def __iter__(self: Self) -> Iterator[Segment]:
        return self.segments()

    def __len__(self: Self) -> int:
        return len(self._segments)

    def __str__(self: Self) -> str:
        return ("/" if self._absolute else "") + "".join(str(segment) for segment in self._segments)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def _key(self: Self) -> tuple[bool, tuple[Segment, ...]]:
        return self._absolute, tuple(self._segments)

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, str):
            try:
                other = Path.from_string(other)
            except ValueError:
                return False
        if isinstance(other, (Path, PathBuf)):
            return self._key() == other._key()
        return NotImplemented

    __hash__ = None  # mutable
