from __future__ import annotations

import struct
from typing import Union

from tlvbox.errors import DecodeWidthMismatchError, EncodeRangeError

Scalar = Union[int, float]

INT16_MIN, INT16_MAX = -(2**15), 2**15 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

# Record header: tag (int32) followed by payload length (int32), big-endian.
HEADER = struct.Struct(">ii")
HEADER_SIZE = HEADER.size

SCALAR_FORMATS: dict[str, struct.Struct] = {
    "int16": struct.Struct(">h"),
    "int32": struct.Struct(">i"),
    "int64": struct.Struct(">q"),
    "float32": struct.Struct(">f"),
    "float64": struct.Struct(">d"),
}

INT_RANGES: dict[str, tuple[int, int]] = {
    "int16": (INT16_MIN, INT16_MAX),
    "int32": (INT32_MIN, INT32_MAX),
    "int64": (INT64_MIN, INT64_MAX),
}


def scalar_width(type_name: str) -> int:
    return SCALAR_FORMATS[type_name].size


def check_int32(value: int, what: str = "tag") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    if value < INT32_MIN or value > INT32_MAX:
        raise EncodeRangeError(f"{what} {value} outside int32 range")
    return value


def encode_scalar(type_name: str, value: Scalar) -> bytes:
    """
    Pack a fixed-width number big-endian.

    Integers are range-checked against the target width; float32 values too
    large for single precision are rejected rather than saturated.
    """
    fmt = SCALAR_FORMATS[type_name]
    if isinstance(value, bool):
        raise TypeError(f"{type_name} value must be a number, got bool")
    if type_name in INT_RANGES:
        if not isinstance(value, int):
            raise TypeError(f"{type_name} value must be an int, got {type(value).__name__}")
        low, high = INT_RANGES[type_name]
        if value < low or value > high:
            raise EncodeRangeError(f"{value} outside {type_name} range")
        return fmt.pack(value)
    try:
        return fmt.pack(value)
    except OverflowError as exc:
        raise EncodeRangeError(f"{value} does not fit {type_name}") from exc
    except struct.error as exc:
        raise TypeError(f"{type_name} value must be a number, got {type(value).__name__}") from exc


def decode_scalar(type_name: str, payload: bytes) -> Scalar:
    fmt = SCALAR_FORMATS[type_name]
    if len(payload) < fmt.size:
        raise DecodeWidthMismatchError(type_name, fmt.size, len(payload))
    return fmt.unpack_from(payload, 0)[0]
