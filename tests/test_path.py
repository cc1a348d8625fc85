import pytest

from iriview import InvalidPathError, Path, PathBuf, Segment, remove_dot_segments


def _segments(path):
    return [(segment.as_str(), segment.is_open()) for segment in path.segments()]


def test_open_flags():
    assert _segments(Path.from_string("a/b/")) == [("a", True), ("b", True)]
    assert _segments(Path.from_string("a/b")) == [("a", True), ("b", False)]


def test_absolute_path():
    path = Path.from_string("/a/b")
    assert path.is_absolute()
    assert _segments(path) == [("a", True), ("b", False)]
    assert Path.from_string("/").is_absolute()
    assert _segments(Path.from_string("/")) == []
    assert Path.from_string("a").is_relative()
    assert Path.from_string("").is_empty()


@pytest.mark.parametrize("text", ("", "/", "a", "a/", "/a/b/", "a//b", "//", "/a/./../b", "%2Fx/y", "Ῥόδος/x"))
def test_segments_rebuild_the_path(text):
    path = Path.from_string(text)
    rebuilt = ("/" if path.is_absolute() else "") + "".join(str(segment) for segment in path.segments())
    assert rebuilt == text
    assert str(PathBuf.from_path(path)) == text


def test_last():
    assert Path.from_string("/a/b").last() == Segment.from_string("b")
    assert Path.from_string("/").last() is None


def test_invalid_path():
    with pytest.raises(InvalidPathError):
        Path.from_string("a?b")


def test_path_equality():
    assert Path.from_string("/%61/b") == Path.from_string("/a/b")
    assert hash(Path.from_string("/%61/b")) == hash(Path.from_string("/a/b"))
    assert Path.from_string("/a") != Path.from_string("a")
    assert Path.from_string("a/") != Path.from_string("a")
    assert Path.from_string("/a/b") == PathBuf.from_string("/a/b")


def test_path_buf_push_and_pop():
    path = PathBuf(absolute=True)
    path.push(Segment.from_string("a"))
    path.push(Segment.from_string("b"))
    assert str(path) == "/a/b"
    assert path.pop() == Segment.from_string("b")
    assert str(path) == "/a/"
    assert len(path) == 1
    path.pop()
    assert path.pop() is None
    assert str(path) == "/"


@pytest.mark.parametrize(
    "text, expected",
    (
        ("/a/b/../c/./d", "/a/c/d"),
        ("/../a", "/a"),
        ("/a/b/c/./../../g", "/a/g"),
        ("mid/content=5/../6", "mid/6"),
        ("/a/b/.", "/a/b/"),
        ("/a/b/..", "/a/"),
        ("/.", "/"),
        ("/..", "/"),
        ("/./g", "/g"),
        ("../a", "../a"),
        ("../../a", "../../a"),
        ("a/../../b", "../b"),
        ("a/b/..", "a/"),
        (".", ""),
        ("./", ""),
        ("", ""),
        ("/a//../b", "/a/b"),
    ),
)
def test_remove_dot_segments(text, expected):
    assert str(remove_dot_segments(Path.from_string(text))) == expected


def test_remove_dot_segments_keeps_absolute_flag():
    assert remove_dot_segments(Path.from_string("/a")).is_absolute()
    assert not remove_dot_segments(Path.from_string("a")).is_absolute()


def test_symbolic_append():
    path = PathBuf.from_string("/a/b/")
    path.symbolic_append([Segment.parent(), Segment.current(), Segment.from_string("c")])
    assert str(path) == "/a/c"
    assert path == "/a/c"
