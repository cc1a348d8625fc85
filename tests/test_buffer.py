import pytest

from iriview import (
    Authority,
    Fragment,
    InvalidAuthorityError,
    InvalidFragmentError,
    InvalidQueryError,
    InvalidSchemeError,
    Iri,
    IriBuf,
    PctStr,
    Segment,
)


def test_build():
    buf = IriBuf.from_scheme("http")
    buf.set_authority("example.org")
    buf.path_mut().symbolic_append([Segment.from_string("a/"), Segment.parent(), Segment.from_string("b")])
    buf.set_query("x=1")
    buf.set_raw_fragment("top")
    assert str(buf) == "http://example.org/b?x=1#top"
    iri = buf.build()
    assert isinstance(iri, Iri)
    assert iri == Iri("http://example.org/b?x=1#top")


def test_scheme_only():
    assert str(IriBuf.from_scheme("urn")) == "urn:"


def test_set_path():
    buf = IriBuf.from_scheme("file")
    buf.set_authority(Authority.from_string(""))
    buf.set_path("/etc/hosts")
    assert str(buf) == "file:///etc/hosts"


def test_setters_accept_percent_strings():
    buf = IriBuf.from_scheme("s")
    buf.set_query(PctStr("a%20b"))
    assert str(buf.query) == "a%20b"
    buf.set_query(None)
    assert buf.query is None


def test_clear_fragment():
    buf = IriBuf.from_scheme("s")
    buf.set_fragment(Fragment.from_string("f"))
    assert str(buf) == "s:#f"
    buf.set_raw_fragment(None)
    assert str(buf) == "s:"


def test_setters_validate():
    with pytest.raises(InvalidSchemeError):
        IriBuf.from_scheme("1x")
    buf = IriBuf.from_scheme("http")
    with pytest.raises(InvalidAuthorityError):
        buf.set_authority("a/b")
    with pytest.raises(InvalidQueryError):
        buf.set_query("a#b")
    with pytest.raises(InvalidFragmentError):
        buf.set_raw_fragment("a b")


def test_relative_path_under_authority_gets_a_slash():
    buf = IriBuf.from_scheme("http")
    buf.set_authority("h")
    buf.set_path("a/b")
    assert str(buf) == "http://h/a/b"
