"""
Exceptions raised while encoding or decoding TLV data.

Every fault is a ``ValueError`` so callers that only care about "bad input"
can catch that. A missing tag is not a fault: ``get_*`` returns ``None``.
"""
from __future__ import annotations


class TlvError(ValueError):
    """Base class for all TLV codec errors."""


class DecodeError(TlvError):
    """The input bytes are malformed."""


class DecodeTruncatedError(DecodeError):
    """A record header or payload runs past the end of the parse window."""


class DecodeWidthMismatchError(DecodeError):
    """A fixed-width payload is shorter than the requested type."""

    def __init__(self, type_name: str, expected: int, actual: int) -> None:
        super().__init__(f"{type_name} needs {expected} bytes, payload has {actual}")
        self.type_name = type_name
        self.expected = expected
        self.actual = actual


class InvalidUtf8Error(DecodeError):
    """A string payload is not valid UTF-8."""


class InvalidNestedStreamError(DecodeError):
    """A nested box payload is not a well-formed TLV stream."""


class EncodeRangeError(TlvError):
    """A tag, scalar or payload length does not fit its wire width."""


__all__ = [
    "DecodeError",
    "DecodeTruncatedError",
    "DecodeWidthMismatchError",
    "EncodeRangeError",
    "InvalidNestedStreamError",
    "InvalidUtf8Error",
    "TlvError",
]
