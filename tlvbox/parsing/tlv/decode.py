"""
Record-level codec for the TLV wire format.

Each record is a 4-byte big-endian signed tag, a 4-byte big-endian signed
payload length, then exactly that many payload bytes. Records are
concatenated with no header, footer, or padding.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from tlvbox.core.binary import HEADER, HEADER_SIZE, INT32_MAX, check_int32
from tlvbox.errors import DecodeTruncatedError, EncodeRangeError

BufferLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class TlvRecord:
    """
    One decoded record.

    Attributes:
        tag: The signed 32-bit record tag.
        offset: Position of the record header within the source buffer.
        payload: The record payload, copied out of the source buffer.
    """
    tag: int
    offset: int
    payload: bytes

    @property
    def size(self) -> int:
        return HEADER_SIZE + len(self.payload)

    def as_dict(self) -> dict:
        return {
            "tag": self.tag,
            "offset": self.offset,
            "length": len(self.payload),
            "payload": self.payload.hex(),
        }


def _window(buffer: BufferLike, offset: int, length: Optional[int]) -> tuple[memoryview, int]:
    view = memoryview(buffer).cast("B")
    if offset < 0 or offset > len(view):
        raise DecodeTruncatedError(f"offset {offset} outside buffer of {len(view)} bytes")
    if length is None:
        length = len(view) - offset
    if length < 0:
        raise DecodeTruncatedError(f"negative length {length}")
    return view, length


def iter_records(
    buffer: BufferLike,
    offset: int = 0,
    length: Optional[int] = None,
) -> Iterator[TlvRecord]:
    """
    Decode records from ``buffer[offset:offset + length]`` in stream order.

    Args:
        buffer: Any bytes-like object.
        offset: Where the first record header starts.
        length: Exact number of bytes to consume. Defaults to the rest of
            the buffer.

    Raises:
        DecodeTruncatedError: A header or payload does not fit in the
            window or the buffer, or a payload length is negative.
    """
    view, length = _window(buffer, offset, length)
    limit = min(offset + length, len(view))
    cursor = offset
    parsed = 0
    while parsed < length:
        if cursor + HEADER_SIZE > limit:
            raise DecodeTruncatedError(
                f"record header at offset {cursor} needs {HEADER_SIZE} bytes, "
                f"{limit - cursor} left"
            )
        tag, size = HEADER.unpack_from(view, cursor)
        if size < 0:
            raise DecodeTruncatedError(f"negative payload length {size} for tag {tag} at offset {cursor}")
        start = cursor + HEADER_SIZE
        if start + size > limit:
            raise DecodeTruncatedError(
                f"payload for tag {tag} at offset {cursor} needs {size} bytes, "
                f"{limit - start} left"
            )
        yield TlvRecord(tag=tag, offset=cursor, payload=view[start:start + size].tobytes())
        cursor = start + size
        parsed += HEADER_SIZE + size


def parse_records(
    buffer: BufferLike,
    offset: int = 0,
    length: Optional[int] = None,
) -> list[TlvRecord]:
    return list(iter_records(buffer, offset, length))


def encoded_size(pairs: Iterable[tuple[int, bytes]]) -> int:
    return sum(HEADER_SIZE + len(payload) for _, payload in pairs)


def encode_records(pairs: Iterable[tuple[int, bytes]], total: Optional[int] = None) -> bytes:
    """
    Encode ``(tag, payload)`` pairs into a TLV stream.

    The output buffer is allocated once at ``total`` bytes and filled in
    place. When ``total`` is not given it is computed from ``pairs``.

    Raises:
        EncodeRangeError: A tag or payload length does not fit in int32, or
            ``total`` disagrees with the records written.
    """
    pairs = list(pairs)
    if total is None:
        total = encoded_size(pairs)
    out = bytearray(total)
    cursor = 0
    for tag, payload in pairs:
        check_int32(tag)
        size = len(payload)
        if size > INT32_MAX:
            raise EncodeRangeError(f"payload for tag {tag} is {size} bytes, over the int32 limit")
        if cursor + HEADER_SIZE + size > total:
            raise EncodeRangeError(f"records exceed the declared total of {total} bytes")
        HEADER.pack_into(out, cursor, tag, size)
        cursor += HEADER_SIZE
        out[cursor:cursor + size] = payload
        cursor += size
    if cursor != total:
        raise EncodeRangeError(f"records fill {cursor} bytes, declared total is {total}")
    return bytes(out)


def describe_records(
    records: Iterable[TlvRecord],
    names: Optional[dict[int, str]] = None,
) -> list[dict]:
    """
    Render records as plain dicts for display or JSON output.

    Tags found in ``names`` get a ``name`` key; others are labelled with
    their hex value (e.g. ``"0x0000002a"``).
    """
    names = names or {}
    rows = []
    for record in records:
        row = record.as_dict()
        row["name"] = names.get(record.tag, f"0x{record.tag & 0xFFFFFFFF:08x}")
        rows.append(row)
    return rows
