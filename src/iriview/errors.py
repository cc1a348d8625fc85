"""iriview.errors
Exceptions raised while scanning and building IRI references.
Every error is a ValueError, so callers that only care about "parse failed" can catch that.
"""


class IriError(ValueError):
    """Base exception for iriview errors"""


# Decode errors: the input is not well-formed UTF-8.


class DecodeError(IriError):
    """Malformed UTF-8 sequence"""

    def __init__(self, offset: int, message: str = "invalid UTF-8 sequence") -> None:
        self.offset: int = offset
        super().__init__(f"{message} at offset {offset}")


class InvalidLeadByteError(DecodeError):
    """A byte that cannot start a UTF-8 sequence"""

    def __init__(self, offset: int) -> None:
        super().__init__(offset, "invalid UTF-8 lead byte")


class TruncatedSequenceError(DecodeError):
    """A UTF-8 sequence that is missing continuation bytes"""

    def __init__(self, offset: int) -> None:
        super().__init__(offset, "truncated UTF-8 sequence")


class InvalidCodepointError(DecodeError):
    """A structurally valid sequence that does not encode a Unicode scalar value"""

    def __init__(self, offset: int, codepoint: int) -> None:
        self.codepoint: int = codepoint
        super().__init__(offset, f"invalid codepoint U+{codepoint:04X}")


# Component errors: a string offered as one component has characters its grammar rule does not allow.


class InvalidComponentError(IriError):
    """A component string that does not fully match its grammar rule"""

    component: str = "component"

    def __init__(self, text: str) -> None:
        self.text: str = text
        super().__init__(f"invalid {self.component}: {text!r}")


class InvalidSchemeError(InvalidComponentError):
    component = "scheme"


class InvalidAuthorityError(InvalidComponentError):
    component = "authority"


class InvalidSegmentError(InvalidComponentError):
    component = "path segment"


class InvalidPathError(InvalidComponentError):
    component = "path"


class InvalidQueryError(InvalidComponentError):
    component = "query"


class InvalidFragmentError(InvalidComponentError):
    component = "fragment"


class InvalidPercentEncodingError(InvalidComponentError):
    component = "percent-encoded string"


# Reference errors: the whole string is not an IRI-reference.


class InvalidReferenceError(IriError):
    """The input is not an IRI-reference"""

    def __init__(self, component: str, offset: int) -> None:
        self.component: str = component
        self.offset: int = offset
        super().__init__(f"invalid IRI reference: unexpected character in {component} at offset {offset}")


class InvalidIriError(InvalidReferenceError):
    """An IRI-reference that is not an IRI (it has no scheme)"""

    def __init__(self) -> None:
        super().__init__("scheme", 0)
        self.args = ("invalid IRI: missing scheme",)
