"""iriview.components
Views over single components of an IRI-reference.

A view keeps the buffer it was scanned from plus an offset and a length, and only turns the bytes
into a str when asked. Two views compare equal when their percent-decoded contents are equal,
so "%66oo" and "foo" are the same segment.
"""

import functools

from typing import Callable, Self

from . import grammar
from .errors import (
    InvalidAuthorityError,
    InvalidComponentError,
    InvalidFragmentError,
    InvalidQueryError,
    InvalidSchemeError,
    InvalidSegmentError,
)
from .pct import PctStr

DEFAULT_ENCODING: str = "utf-8"


def to_buffer(data: str | bytes | bytearray | memoryview) -> bytes:
    """The bytes the scanner works on. Lone surrogates survive encoding so the scanner can report them."""
    if isinstance(data, str):
        return data.encode(DEFAULT_ENCODING, "surrogatepass")
    return bytes(data)


def _parse_full(
    cls: type, data: str | bytes, production: Callable[[bytes, int], int], error: type[InvalidComponentError]
) -> "Component":
    buffer: bytes = to_buffer(data)
    length: int = production(buffer, 0)
    if length != len(buffer):
        raise error(buffer.decode(DEFAULT_ENCODING, "replace"))
    return cls(buffer, 0, length)


@functools.total_ordering
class Component:
    """A validated slice of a buffer. Subclasses are built from scanner output or from_string only."""

    __slots__ = ("_buffer", "_offset", "_length")

    def __init__(self: Self, buffer: bytes, offset: int, length: int) -> None:
        self._buffer: bytes = buffer
        self._offset: int = offset
        self._length: int = length

    def as_bytes(self: Self) -> memoryview:
        return memoryview(self._buffer)[self._offset : self._offset + self._length]

    def as_str(self: Self) -> str:
        # Already validated by the scanner, so this decode cannot fail.
        return self._buffer[self._offset : self._offset + self._length].decode(DEFAULT_ENCODING)

    def as_pct_str(self: Self) -> PctStr:
        return PctStr.new_unchecked(self.as_str())

    def is_empty(self: Self) -> bool:
        return self._length == 0

    def __len__(self: Self) -> int:
        return self._length

    def __str__(self: Self) -> str:
        return self.as_str()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, str):
            return self.as_pct_str() == other
        if type(other) is type(self):
            return self.as_pct_str() == other.as_pct_str()
        return NotImplemented

    def __lt__(self: Self, other: object) -> bool:
        if type(other) is type(self):
            return self.as_pct_str() < other.as_pct_str()
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self.as_pct_str())


class Scheme(Component):
    __slots__ = ()

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        buffer: bytes = to_buffer(data)
        if grammar.parse_scheme(buffer, 0) == 0:
            raise InvalidSchemeError(buffer.decode(DEFAULT_ENCODING, "replace"))
        return _parse_full(cls, buffer, grammar.parse_scheme, InvalidSchemeError)


class Query(Component):
    __slots__ = ()

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        return _parse_full(cls, data, grammar.parse_query, InvalidQueryError)


class Fragment(Component):
    __slots__ = ()

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        return _parse_full(cls, data, grammar.parse_fragment, InvalidFragmentError)


class Segment(Component):
    """One "/"-separated piece of a path, without the "/".
    A segment is open when a "/" follows it, i.e. it is a directory rather than the last name in the path.
    """

    __slots__ = ("_open",)

    def __init__(self: Self, buffer: bytes, offset: int, length: int, open: bool = False) -> None:
        super().__init__(buffer, offset, length)
        self._open: bool = open

    @classmethod
    def current(cls) -> Self:
        """The special dot segment "." indicating the current directory."""
        return cls(b".", 0, 1)

    @classmethod
    def parent(cls) -> Self:
        """The special dot segment ".." indicating the parent directory."""
        return cls(b"..", 0, 2)

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        """Parse one segment. A single trailing "/" is allowed and makes the segment open."""
        buffer: bytes = to_buffer(data)
        length: int = grammar.parse_path_segment(buffer, 0)
        if length == len(buffer):
            return cls(buffer, 0, length)
        if length == len(buffer) - 1 and buffer.endswith(b"/"):
            return cls(buffer, 0, length, open=True)
        raise InvalidSegmentError(buffer.decode(DEFAULT_ENCODING, "replace"))

    @property
    def open(self: Self) -> bool:
        return self._open

    def is_open(self: Self) -> bool:
        return self._open

    def with_open(self: Self, open: bool = True) -> Self:
        if open == self._open:
            return self
        return self.__class__(self._buffer, self._offset, self._length, open)

    def is_current(self: Self) -> bool:
        return self._buffer[self._offset : self._offset + self._length] == b"."

    def is_parent(self: Self) -> bool:
        return self._buffer[self._offset : self._offset + self._length] == b".."

    def __str__(self: Self) -> str:
        if self._open:
            return f"{self.as_str()}/"
        return self.as_str()

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, Segment):
            return self._open == other._open and self.as_pct_str() == other.as_pct_str()
        return super().__eq__(other)

    def __lt__(self: Self, other: object) -> bool:
        if isinstance(other, Segment):
            return (self.as_pct_str(), self._open) < (other.as_pct_str(), other._open)
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self.as_pct_str())


class Authority(Component):
    """iauthority = [ iuserinfo "@" ] ihost [ ":" port ]"""

    __slots__ = ("_parsed",)

    def __init__(self: Self, buffer: bytes, parsed: grammar.ParsedAuthority) -> None:
        super().__init__(buffer, parsed.span.offset, parsed.span.length)
        self._parsed: grammar.ParsedAuthority = parsed

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        buffer: bytes = to_buffer(data)
        parsed: grammar.ParsedAuthority = grammar.parse_authority(buffer, 0)
        if parsed.span.length != len(buffer):
            raise InvalidAuthorityError(buffer.decode(DEFAULT_ENCODING, "replace"))
        return cls(buffer, parsed)

    def _slice(self: Self, span: grammar.Span) -> str:
        return self._buffer[span.offset : span.end].decode(DEFAULT_ENCODING)

    @property
    def userinfo(self: Self) -> PctStr | None:
        if self._parsed.userinfo is None:
            return None
        return PctStr.new_unchecked(self._slice(self._parsed.userinfo))

    @property
    def host(self: Self) -> PctStr:
        return PctStr.new_unchecked(self._slice(self._parsed.host))

    @property
    def raw_port(self: Self) -> str | None:
        if self._parsed.port is None:
            return None
        return self._slice(self._parsed.port)

    @property
    def port(self: Self) -> int | str | None:
        """The port number, or the raw digits when they do not fit in 16 bits (or are empty)."""
        raw_port: str | None = self.raw_port
        if raw_port is None:
            return None
        # More than five digits never fits, and int() refuses very long digit strings.
        if 0 < len(raw_port) <= 5 and int(raw_port, base=10) <= 0xFFFF:
            return int(raw_port, base=10)
        return raw_port

    def _key(self: Self) -> tuple[PctStr | None, PctStr, str | None]:
        return self.userinfo, self.host, self.raw_port

    def __eq__(self: Self, other: object) -> bool:
        # Only another Authority; hash() is over the sub-components.
        if isinstance(other, Authority):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self._key())
