"""iriview.utf8
Decodes one UTF-8 sequence at a time, so the scanner can validate non-ASCII characters in place.
"""

from .errors import InvalidCodepointError, InvalidLeadByteError, TruncatedSequenceError


def get_byte(buffer: bytes, i: int) -> int | None:
    if 0 <= i < len(buffer):
        return buffer[i]
    return None


def _continuation(buffer: bytes, i: int, start: int) -> int:
    b: int | None = get_byte(buffer, i)
    if b is None or b & 0xC0 != 0x80:
        raise TruncatedSequenceError(start)
    return b & 0x3F


def get_codepoint(buffer: bytes, i: int) -> tuple[int, int] | None:
    """Return the codepoint starting at buffer[i] and the size of its UTF-8 encoding.
    Returns None past the end of the buffer.
    Overlong encodings are accepted.
    """
    a: int | None = get_byte(buffer, i)
    if a is None:
        return None

    if a & 0x80 == 0x00:
        return a, 1
    if a & 0xE0 == 0xC0:
        return (a & 0x1F) << 6 | _continuation(buffer, i + 1, i), 2
    if a & 0xF0 == 0xE0:
        b: int = _continuation(buffer, i + 1, i)
        c: int = _continuation(buffer, i + 2, i)
        return (a & 0x0F) << 12 | b << 6 | c, 3
    if a & 0xF8 == 0xF0:
        b = _continuation(buffer, i + 1, i)
        c = _continuation(buffer, i + 2, i)
        d: int = _continuation(buffer, i + 3, i)
        return (a & 0x07) << 18 | b << 12 | c << 6 | d, 4

    raise InvalidLeadByteError(i)


def get_char(buffer: bytes, i: int) -> tuple[str, int] | None:
    """Like get_codepoint, but only accepts Unicode scalar values (no surrogates, nothing past U+10FFFF)."""
    decoded: tuple[int, int] | None = get_codepoint(buffer, i)
    if decoded is None:
        return None
    codepoint, size = decoded
    if 0xD800 <= codepoint <= 0xDFFF or codepoint > 0x10FFFF:
        raise InvalidCodepointError(i, codepoint)
    return chr(codepoint), size
