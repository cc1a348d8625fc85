"""iriview.reference
IRI-references over a caller's buffer.

The buffer is scanned once; after that every accessor is a slice of the original bytes,
so str(IriRef(s)) == s always holds. Equality is RFC 3986 section 6 equivalence restricted to
percent-decoding: "http://ex.org/%66oo" and "http://ex.org/foo" are equal, their strings are not.
"""

from typing import Self

from . import grammar
from .components import DEFAULT_ENCODING, Authority, Fragment, Query, Scheme, to_buffer
from .errors import InvalidIriError
from .path import Path
from .pct import PctStr


class IriRef:
    """IRI-reference = IRI / irelative-ref"""

    __slots__ = ("_buffer", "_parsed")

    def __init__(self: Self, data: "IriRef | str | bytes | bytearray | memoryview") -> None:
        if isinstance(data, IriRef):
            # Already scanned; share its buffer and offsets.
            self._buffer: bytes = data._buffer
            self._parsed: grammar.ParsedIriRef = data._parsed
        else:
            self._buffer = to_buffer(data)
            self._parsed = grammar.parse_iri_ref(self._buffer)

    @property
    def scheme(self: Self) -> Scheme | None:
        if self._parsed.scheme_len is None:
            return None
        return Scheme(self._buffer, 0, self._parsed.scheme_len)

    @property
    def authority(self: Self) -> Authority | None:
        if self._parsed.authority is None:
            return None
        return Authority(self._buffer, self._parsed.authority)

    @property
    def path(self: Self) -> Path:
        span: grammar.Span = self._parsed.path
        return Path(self._buffer, span.offset, span.length)

    @property
    def query(self: Self) -> Query | None:
        if self._parsed.query is None:
            return None
        return Query(self._buffer, self._parsed.query.offset, self._parsed.query.length)

    @property
    def fragment(self: Self) -> Fragment | None:
        if self._parsed.fragment is None:
            return None
        return Fragment(self._buffer, self._parsed.fragment.offset, self._parsed.fragment.length)

    def is_absolute(self: Self) -> bool:
        """True for an IRI (a reference with a scheme)."""
        return self._parsed.scheme_len is not None

    def as_bytes(self: Self) -> memoryview:
        return memoryview(self._buffer)[: self._parsed.length]

    def as_str(self: Self) -> str:
        return self._buffer[: self._parsed.length].decode(DEFAULT_ENCODING)

    def as_pct_str(self: Self) -> PctStr:
        return PctStr.new_unchecked(self.as_str())

    def resolve(self: Self, base: "Iri | IriRef | str", strict: bool = True) -> "Iri":
        """Resolve this reference against an absolute base IRI (RFC 3986 section 5.2)"""
        from .resolve import resolve

        if not isinstance(base, Iri):
            base = Iri(base)
        return resolve(self, base, strict=strict)

    def _key(self: Self) -> tuple:
        return self.scheme, self.authority, self.path, self.query, self.fragment

    def __len__(self: Self) -> int:
        return self._parsed.length

    def __str__(self: Self) -> str:
        return self.as_str()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.as_str()!r})"

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, IriRef):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self._key())


class Iri(IriRef):
    """IRI = scheme ":" ihier-part [ "?" iquery ] [ "#" ifragment ]"""

    __slots__ = ()

    def __init__(self: Self, data: IriRef | str | bytes | bytearray | memoryview) -> None:
        super().__init__(data)
        if self._parsed.scheme_len is None:
            raise InvalidIriError()

    @property
    def scheme(self: Self) -> Scheme:
        return Scheme(self._buffer, 0, self._parsed.scheme_len)

    def join(self: Self, reference: IriRef | str, strict: bool = True) -> "Iri":
        """Resolve a reference against this IRI (RFC 3986 section 5.2.2)"""
        if not isinstance(reference, IriRef):
            reference = IriRef(reference)
        return reference.resolve(self, strict=strict)


def parse_iri_reference(data: str | bytes) -> IriRef:
    """RFC 3987-compliant IRI-reference parser.
    Use this when you don't know whether the input is an IRI or a relative reference.
    """
    return IriRef(data)


def parse_iri(data: str | bytes) -> Iri:
    """RFC 3987-compliant IRI parser. Fails on relative references."""
    return Iri(data)
