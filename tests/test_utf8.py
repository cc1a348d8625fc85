import pytest

from iriview.errors import DecodeError, InvalidCodepointError, InvalidLeadByteError, TruncatedSequenceError
from iriview.utf8 import get_byte, get_char, get_codepoint


def test_get_byte():
    assert get_byte(b"ab", 1) == ord("b")
    assert get_byte(b"ab", 2) is None


@pytest.mark.parametrize(
    "char, size",
    (
        ("a", 1),
        ("é", 2),
        ("€", 3),
        ("\U0001F600", 4),
    ),
)
def test_get_codepoint(char, size):
    assert get_codepoint(char.encode("utf-8"), 0) == (ord(char), size)
    assert get_char(char.encode("utf-8"), 0) == (char, size)


def test_offset_into_buffer():
    assert get_char("xé".encode("utf-8"), 1) == ("é", 2)


def test_end_of_buffer_is_not_an_error():
    assert get_codepoint(b"a", 1) is None
    assert get_char(b"", 0) is None


@pytest.mark.parametrize("data", (b"\xe2\x82", b"\xc3", b"\xc3a", b"\xf0\x9f\x98"))
def test_truncated_sequence(data):
    with pytest.raises(TruncatedSequenceError) as exc_info:
        get_codepoint(data, 0)
    assert exc_info.value.offset == 0


@pytest.mark.parametrize("data", (b"\x80", b"\xbf", b"\xf8\x80\x80\x80\x80", b"\xff"))
def test_invalid_lead_byte(data):
    with pytest.raises(InvalidLeadByteError):
        get_codepoint(data, 0)


def test_surrogate_is_a_codepoint_but_not_a_char():
    data = "\ud800".encode("utf-8", "surrogatepass")
    assert get_codepoint(data, 0) == (0xD800, 3)
    with pytest.raises(InvalidCodepointError) as exc_info:
        get_char(data, 0)
    assert exc_info.value.codepoint == 0xD800


def test_codepoint_past_unicode_range():
    with pytest.raises(InvalidCodepointError):
        get_char(b"\xf4\x90\x80\x80", 0)


def test_overlong_encoding_is_accepted():
    assert get_codepoint(b"\xc0\xaf", 0) == (0x2F, 2)


def test_decode_errors_are_value_errors():
    for error in (InvalidLeadByteError, TruncatedSequenceError, InvalidCodepointError):
        assert issubclass(error, DecodeError)
        assert issubclass(error, ValueError)
