import pytest

from iriview import (
    Authority,
    Fragment,
    InvalidAuthorityError,
    InvalidCodepointError,
    InvalidFragmentError,
    InvalidLeadByteError,
    InvalidQueryError,
    InvalidSchemeError,
    InvalidSegmentError,
    IriRef,
    Query,
    Scheme,
    Segment,
)


def test_segment():
    segment = Segment.from_string("foo")
    assert segment.as_str() == "foo"
    assert bytes(segment.as_bytes()) == b"foo"
    assert not segment.is_open()
    assert len(segment) == 3
    assert str(segment) == "foo"


def test_segment_trailing_slash_makes_it_open():
    segment = Segment.from_string("foo/")
    assert segment.is_open()
    assert segment.as_str() == "foo"
    assert str(segment) == "foo/"


def test_segment_open_flag_is_part_of_equality():
    assert Segment.from_string("a") != Segment.from_string("a/")
    assert Segment.from_string("a").with_open() == Segment.from_string("a/")
    assert Segment.from_string("a/") == "a"


@pytest.mark.parametrize("text", ("a%2", "a%2g", "a/b", "foo//", "a b", "a?b", "a#b"))
def test_invalid_segment(text):
    with pytest.raises(InvalidSegmentError):
        Segment.from_string(text)


def test_segment_percent_decoded_equality():
    assert Segment.from_string("%66oo") == Segment.from_string("foo")
    assert hash(Segment.from_string("%66oo")) == hash(Segment.from_string("foo"))
    assert Segment.from_string("%66oo") == "foo"
    assert Segment.from_string("%2F") == Segment.from_string("%2f")


def test_segment_ordering():
    segments = [Segment.from_string(text) for text in ("c", "%61", "b")]
    assert [str(segment) for segment in sorted(segments)] == ["%61", "b", "c"]


def test_dot_segments():
    assert Segment.current() == "."
    assert Segment.parent() == ".."
    assert Segment.current().is_current()
    assert Segment.parent().is_parent()
    assert not Segment.current().is_open()
    assert Segment.from_string("../").is_parent()
    assert not Segment.from_string("%2E").is_current()


def test_unicode_segment():
    assert Segment.from_string("Ῥόδος").as_str() == "Ῥόδος"


def test_segment_decode_errors():
    with pytest.raises(InvalidLeadByteError):
        Segment.from_string(b"a\xff")
    with pytest.raises(InvalidCodepointError):
        Segment.from_string("a\ud800")


def test_fragment():
    assert Fragment.from_string("sec/1?x").as_str() == "sec/1?x"
    assert Fragment.from_string("%73ec") == Fragment.from_string("sec")
    assert Fragment.from_string("").is_empty()
    with pytest.raises(InvalidFragmentError):
        Fragment.from_string("a b")
    with pytest.raises(InvalidFragmentError):
        Fragment.from_string("a#b")
    with pytest.raises(InvalidFragmentError):
        Fragment.from_string("\ue000")


def test_query():
    assert Query.from_string("a=1&b=\ue000").as_str() == "a=1&b=\ue000"
    with pytest.raises(InvalidQueryError):
        Query.from_string("a#b")


def test_components_of_different_kinds_are_not_equal():
    assert Query.from_string("a") != Fragment.from_string("a")


def test_scheme():
    assert Scheme.from_string("git+ssh") == "git+ssh"
    for text in ("", "1x", "a:b", "é"):
        with pytest.raises(InvalidSchemeError):
            Scheme.from_string(text)


def test_authority():
    authority = Authority.from_string("user@[::1]:8080")
    assert authority.userinfo == "user"
    assert authority.host == "[::1]"
    assert authority.port == 8080
    assert str(authority) == "user@[::1]:8080"


def test_authority_port():
    assert Authority.from_string("example.org").port is None
    assert Authority.from_string("example.org:99999").port == "99999"
    assert Authority.from_string("example.org:").port == ""
    assert Authority.from_string("example.org:00080").port == 80


def test_authority_long_port_is_kept_as_digits():
    digits = "9" * 5000
    assert IriRef(f"http://h:{digits}/x").authority.port == digits
    assert Authority.from_string("h:123456").port == "123456"


def test_authority_equality():
    assert Authority.from_string("%65xample.org") == Authority.from_string("example.org")
    assert hash(Authority.from_string("%65xample.org")) == hash(Authority.from_string("example.org"))
    assert Authority.from_string("example.org:80") != Authority.from_string("example.org")
    assert Authority.from_string("example.org") != "example.org"
    assert len({Authority.from_string("%65xample.org"), Authority.from_string("example.org")}) == 1


def test_unicode_authority():
    authority = Authority.from_string("点心和烤鸭.w3.mag.keio.ac.jp")
    assert authority.host == "点心和烤鸭.w3.mag.keio.ac.jp"


@pytest.mark.parametrize("text", ("a/b", "a b", "[::1", "h:8o"))
def test_invalid_authority(text):
    with pytest.raises(InvalidAuthorityError):
        Authority.from_string(text)
