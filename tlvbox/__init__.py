from tlvbox.domain import TlvBox
from tlvbox.errors import (
    DecodeError,
    DecodeTruncatedError,
    DecodeWidthMismatchError,
    EncodeRangeError,
    InvalidNestedStreamError,
    InvalidUtf8Error,
    TlvError,
)
from tlvbox.parsing.tlv import TlvRecord, encode_records, iter_records
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "TlvBox",
    "TlvRecord",
    "encode_records",
    "iter_records",
    "TlvError",
    "DecodeError",
    "DecodeTruncatedError",
    "DecodeWidthMismatchError",
    "InvalidUtf8Error",
    "InvalidNestedStreamError",
    "EncodeRangeError",
]

try:
    __version__ = version("tlvbox")
except PackageNotFoundError:
    __version__ = "0.0.0"
