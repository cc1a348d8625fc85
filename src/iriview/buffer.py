"""iriview.buffer
IriBuf, an owned IRI that is put together one component at a time.

Each setter runs the same scanner the parser uses, so a built IRI is exactly as valid as a parsed one.
"""

from typing import Self

from .components import Authority, Fragment, Query, Scheme
from .path import Path, PathBuf
from .pct import PctStr
from .reference import Iri


class IriBuf:
    """A mutable IRI. build() freezes it into an Iri."""

    def __init__(self: Self, scheme: Scheme) -> None:
        self._scheme: Scheme = scheme
        self._authority: Authority | None = None
        self._path: PathBuf = PathBuf()
        self._query: Query | None = None
        self._fragment: Fragment | None = None

    @classmethod
    def from_scheme(cls, scheme: Scheme | str) -> Self:
        if not isinstance(scheme, Scheme):
            scheme = Scheme.from_string(scheme)
        return cls(scheme)

    @property
    def scheme(self: Self) -> Scheme:
        return self._scheme

    @property
    def authority(self: Self) -> Authority | None:
        return self._authority

    @property
    def query(self: Self) -> Query | None:
        return self._query

    @property
    def fragment(self: Self) -> Fragment | None:
        return self._fragment

    def set_scheme(self: Self, scheme: Scheme | str) -> None:
        if not isinstance(scheme, Scheme):
            scheme = Scheme.from_string(scheme)
        self._scheme = scheme

    def set_authority(self: Self, authority: Authority | str | None) -> None:
        if authority is not None and not isinstance(authority, Authority):
            authority = Authority.from_string(authority)
        self._authority = authority

    def path_mut(self: Self) -> PathBuf:
        """The path, for editing in place (e.g. with symbolic_append)."""
        return self._path

    def set_path(self: Self, path: Path | PathBuf | str) -> None:
        if isinstance(path, PathBuf):
            self._path = path
        else:
            if not isinstance(path, Path):
                path = Path.from_string(path)
            self._path = PathBuf.from_path(path)

    def set_query(self: Self, query: Query | PctStr | str | None) -> None:
        if query is not None and not isinstance(query, Query):
            query = Query.from_string(str(query))
        self._query = query

    def set_fragment(self: Self, fragment: Fragment | None) -> None:
        self._fragment = fragment

    def set_raw_fragment(self: Self, fragment: str | None) -> None:
        self._fragment = Fragment.from_string(fragment) if fragment is not None else None

    def _serialize_path(self: Self) -> str:
        path: str = str(self._path)
        if self._authority is not None:
            # With an authority, the path must be empty or start with "/" (ipath-abempty).
            if path and not self._path.is_absolute():
                path = f"/{path}"
        elif path.startswith("//"):
            # Without one, a leading "//" would be read back as an authority.
            path = f"/.{path}"
        return path

    def serialize(self: Self) -> str:
        """RFC 3986 section 5.3"""
        result: str = f"{self._scheme}:"
        if self._authority is not None:
            result += f"//{self._authority}"
        result += self._serialize_path()
        if self._query is not None:
            result += f"?{self._query}"
        if self._fragment is not None:
            result += f"#{self._fragment}"
        return result

    def build(self: Self) -> Iri:
        return Iri(self.serialize())

    def __str__(self: Self) -> str:
        return self.serialize()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.serialize()!r})"
