"""iriview.grammar
Single-pass scanners for the productions of RFC 3987 (and the RFC 3986 rules it builds on).

Every parse_* function takes a UTF-8 buffer and a start offset and returns the length of the
longest prefix that matches its rule. Whether a short match is an error is up to the caller:
the component constructors require the whole string, the reference scanner uses the length
to find the next delimiter.
"""

import dataclasses
import re

from typing import Self

from . import utf8
from .errors import InvalidReferenceError

# Each of these ABNF rules is from RFC 3986, 3987, or 5234.
# ASCII rules are sets of byte values; the Unicode ranges are regular expressions over single characters.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: frozenset[int] = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")

# DIGIT = %x30-39
_DIGIT: frozenset[int] = frozenset(b"0123456789")

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: frozenset[int] = _DIGIT | frozenset(b"ABCDEFabcdef")

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF
#         / %x10000-1FFFD / %x20000-2FFFD / %x30000-3FFFD
#         / %x40000-4FFFD / %x50000-5FFFD / %x60000-6FFFD
#         / %x70000-7FFFD / %x80000-8FFFD / %x90000-9FFFD
#         / %xA0000-AFFFD / %xB0000-BFFFD / %xC0000-CFFFD
#         / %xD0000-DFFFD / %xE1000-EFFFD
_UCSCHAR: str = "[\xa0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD\U000D0000-\U000DFFFD\U000E1000-\U000EFFFD]"
_UCSCHAR_PAT: re.Pattern[str] = re.compile(_UCSCHAR)

# iprivate = %xE000-F8FF / %xF0000-FFFFD / %x100000-10FFFD
_IPRIVATE: str = "[\ue000-\uf8ff\U000F0000-\U000FFFFD\U00100000-\U0010FFFD]"
_IPRIVATE_PAT: re.Pattern[str] = re.compile(_IPRIVATE)

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: frozenset[int] = _ALPHA | _DIGIT | frozenset(b"-._~")

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: frozenset[int] = frozenset(b"!$&'()*+,;=")

# ipchar = iunreserved / pct-encoded / sub-delims / ":" / "@"
# (the ucschar part of iunreserved and pct-encoded are handled by _scan)
_IPCHAR: frozenset[int] = _UNRESERVED | _SUB_DELIMS | frozenset(b":@")

# iquery = *( ipchar / iprivate / "/" / "?" )
# ifragment = *( ipchar / "/" / "?" )
_IQUERY: frozenset[int] = _IPCHAR | frozenset(b"/?")
_IFRAGMENT: frozenset[int] = _IQUERY

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_TAIL: frozenset[int] = _ALPHA | _DIGIT | frozenset(b"+-.")

# iuserinfo = *( iunreserved / pct-encoded / sub-delims / ":" )
_IUSERINFO: frozenset[int] = _UNRESERVED | _SUB_DELIMS | frozenset(b":")

# ireg-name = *( iunreserved / pct-encoded / sub-delims )
# (IPv4address is a subset of ireg-name, so it needs no rule of its own when scanning)
_IREG_NAME: frozenset[int] = _UNRESERVED | _SUB_DELIMS

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = r"(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = r"(?:[0-9A-Fa-f]{1,4})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = r"[vV][0-9A-Fa-f]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+"

# IP-literal = "[" ( IPv6address / IPvFuture  ) "]"
# (IRIs don't support zone identifiers, so RFC 6874 IPv6addrz is left out)
_IP_LITERAL: str = rf"\[(?:{_IPV6ADDRESS}|{_IPVFUTURE})\]"
_IP_LITERAL_PAT: re.Pattern[bytes] = re.compile(_IP_LITERAL.encode("ascii"))

_PERCENT: int = ord("%")
_SLASH: int = ord("/")
_COLON: int = ord(":")
_AT: int = ord("@")
_QUESTION: int = ord("?")
_HASH: int = ord("#")
_LBRACKET: int = ord("[")
_RBRACKET: int = ord("]")


@dataclasses.dataclass(frozen=True)
class Span:
    """Position of a validated component inside the scanned buffer."""

    offset: int
    length: int

    @property
    def end(self: Self) -> int:
        return self.offset + self.length


@dataclasses.dataclass(frozen=True)
class ParsedAuthority:
    """Scanner output for iauthority = [ iuserinfo "@" ] ihost [ ":" port ]"""

    span: Span
    userinfo: Span | None
    host: Span
    port: Span | None


@dataclasses.dataclass(frozen=True)
class ParsedIriRef:
    """Scanner output for a whole IRI-reference.
    Components are laid out back to back: scheme ":" "//" authority path "?" query "#" fragment
    """

    scheme_len: int | None
    authority: ParsedAuthority | None
    path_len: int
    query: Span | None
    fragment: Span | None

    @property
    def path_offset(self: Self) -> int:
        if self.authority is not None:
            return self.authority.span.end
        if self.scheme_len is not None:
            return self.scheme_len + 1
        return 0

    @property
    def path(self: Self) -> Span:
        return Span(self.path_offset, self.path_len)

    @property
    def length(self: Self) -> int:
        if self.fragment is not None:
            return self.fragment.end
        if self.query is not None:
            return self.query.end
        return self.path.end


def _is_pct_encoded(buffer: bytes, i: int) -> bool:
    # pct-encoded = "%" HEXDIG HEXDIG
    return buffer[i] == _PERCENT and i + 2 < len(buffer) and buffer[i + 1] in _HEXDIG and buffer[i + 2] in _HEXDIG


def _scan(buffer: bytes, i: int, allowed: frozenset[int], pct: bool = True, ucschar: bool = True, iprivate: bool = False) -> int:
    """Longest run of characters starting at i that are in the given classes.
    Non-ASCII characters are decoded; a decode error propagates.
    """
    start: int = i
    end: int = len(buffer)
    while i < end:
        b: int = buffer[i]
        if b < 0x80:
            if b in allowed:
                i += 1
            elif pct and _is_pct_encoded(buffer, i):
                i += 3
            else:
                break
        else:
            c, size = utf8.get_char(buffer, i)
            if (ucschar and _UCSCHAR_PAT.match(c)) or (iprivate and _IPRIVATE_PAT.match(c)):
                i += size
            else:
                break
    return i - start


def parse_scheme(buffer: bytes, i: int) -> int:
    # scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
    if i >= len(buffer) or buffer[i] not in _ALPHA:
        return 0
    return 1 + _scan(buffer, i + 1, _SCHEME_TAIL, pct=False, ucschar=False)


def parse_path_segment(buffer: bytes, i: int) -> int:
    # isegment = *ipchar
    return _scan(buffer, i, _IPCHAR)


def parse_path(buffer: bytes, i: int) -> int:
    """Any of the ipath rules: isegments separated (and possibly led) by "/".
    Which ipath rule applies depends on the surrounding components, so the reference scanner checks that.
    """
    start: int = i
    if i < len(buffer) and buffer[i] == _SLASH:
        i += 1
    while True:
        i += parse_path_segment(buffer, i)
        if i < len(buffer) and buffer[i] == _SLASH:
            i += 1
        else:
            return i - start


def parse_query(buffer: bytes, i: int) -> int:
    # iquery = *( ipchar / iprivate / "/" / "?" )
    return _scan(buffer, i, _IQUERY, iprivate=True)


def parse_fragment(buffer: bytes, i: int) -> int:
    # ifragment = *( ipchar / "/" / "?" )
    return _scan(buffer, i, _IFRAGMENT)


def parse_userinfo(buffer: bytes, i: int) -> int:
    # iuserinfo = *( iunreserved / pct-encoded / sub-delims / ":" )
    return _scan(buffer, i, _IUSERINFO)


def parse_host(buffer: bytes, i: int) -> int:
    # ihost = IP-literal / IPv4address / ireg-name
    if i < len(buffer) and buffer[i] == _LBRACKET:
        close: int = buffer.find(_RBRACKET, i)
        if close == -1 or _IP_LITERAL_PAT.fullmatch(buffer, i, close + 1) is None:
            return 0
        return close + 1 - i
    return _scan(buffer, i, _IREG_NAME)


def parse_port(buffer: bytes, i: int) -> int:
    # port = *DIGIT
    return _scan(buffer, i, _DIGIT, pct=False, ucschar=False)


def parse_authority(buffer: bytes, i: int) -> ParsedAuthority:
    """iauthority = [ iuserinfo "@" ] ihost [ ":" port ]
    The userinfo is only known to be one once the "@" after it has been seen, so the host is scanned from
    the start again when there is no "@".
    """
    start: int = i

    userinfo: Span | None = None
    userinfo_len: int = parse_userinfo(buffer, i)
    if i + userinfo_len < len(buffer) and buffer[i + userinfo_len] == _AT:
        userinfo = Span(i, userinfo_len)
        i += userinfo_len + 1

    host: Span = Span(i, parse_host(buffer, i))
    i = host.end

    port: Span | None = None
    if i < len(buffer) and buffer[i] == _COLON:
        port = Span(i + 1, parse_port(buffer, i + 1))
        i = port.end

    return ParsedAuthority(span=Span(start, i - start), userinfo=userinfo, host=host, port=port)


def parse_iri_ref(buffer: bytes) -> ParsedIriRef:
    """IRI-reference = IRI / irelative-ref
    Raises InvalidReferenceError naming the component where scanning stopped.
    """
    end: int = len(buffer)
    i: int = 0

    # A scheme only counts as one when it is followed by ":"; otherwise this is a relative reference.
    scheme_len: int | None = None
    candidate: int = parse_scheme(buffer, 0)
    if 0 < candidate < end and buffer[candidate] == _COLON:
        scheme_len = candidate
        i = candidate + 1

    authority: ParsedAuthority | None = None
    if buffer.startswith(b"//", i):
        authority = parse_authority(buffer, i + 2)
        i = authority.span.end
        if i < end and buffer[i] not in (_SLASH, _QUESTION, _HASH):
            raise InvalidReferenceError("authority", i)

    path_offset: int = i
    path_len: int = parse_path(buffer, i)
    i += path_len

    # ipath-noscheme: without a scheme or an authority, a ":" in the first segment would read as a scheme.
    if scheme_len is None and authority is None:
        first_segment_end: int = buffer.find(_SLASH, path_offset, i)
        if first_segment_end == -1:
            first_segment_end = i
        colon: int = buffer.find(_COLON, path_offset, first_segment_end)
        if colon != -1:
            raise InvalidReferenceError("path", colon)

    component: str = "path"

    query: Span | None = None
    if i < end and buffer[i] == _QUESTION:
        query = Span(i + 1, parse_query(buffer, i + 1))
        i = query.end
        component = "query"

    fragment: Span | None = None
    if i < end and buffer[i] == _HASH:
        fragment = Span(i + 1, parse_fragment(buffer, i + 1))
        i = fragment.end
        component = "fragment"

    if i != end:
        raise InvalidReferenceError(component, i)

    return ParsedIriRef(
        scheme_len=scheme_len,
        authority=authority,
        path_len=path_len,
        query=query,
        fragment=fragment,
    )
