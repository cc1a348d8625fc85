"""iriview.pct
Percent-encoded strings that compare by what they decode to.
"""

import functools
import re

from typing import Self

from urllib.parse import unquote_to_bytes

from .errors import InvalidPercentEncodingError

# A "%" that is not followed by two hex digits.
_BAD_PCT_PAT: re.Pattern[str] = re.compile(r"%(?![0-9A-Fa-f]{2})")


@functools.total_ordering
class PctStr:
    """A string that may contain percent-encoded octets.
    Equality, ordering and hashing use the decoded octets; str() gives back the encoded text unchanged.
    """

    __slots__ = ("_text",)

    def __init__(self: Self, text: str) -> None:
        if _BAD_PCT_PAT.search(text) is not None:
            raise InvalidPercentEncodingError(text)
        self._text: str = text

    @classmethod
    def new_unchecked(cls, text: str) -> Self:
        """Wrap text that is already known to be well-formed (e.g. it came out of the scanner)."""
        result: Self = cls.__new__(cls)
        result._text = text
        return result

    def as_str(self: Self) -> str:
        return self._text

    def decode(self: Self) -> bytes:
        return unquote_to_bytes(self._text)

    @property
    def decoded(self: Self) -> str:
        """The decoded text. Octets that are not UTF-8 come out as surrogate escapes."""
        return self.decode().decode("utf-8", "surrogateescape")

    def is_empty(self: Self) -> bool:
        return len(self._text) == 0

    def __len__(self: Self) -> int:
        return len(self._text)

    def __str__(self: Self) -> str:
        return self._text

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self._text!r})"

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, PctStr):
            return self.decode() == other.decode()
        if isinstance(other, str):
            return self.decoded == other
        return NotImplemented

    def __lt__(self: Self, other: object) -> bool:
        if isinstance(other, PctStr):
            return self.decode() < other.decode()
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self.decoded)
