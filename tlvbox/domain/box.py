"""
The TLV box: an in-memory table of tag -> payload with typed accessors.
"""
from __future__ import annotations

from typing import Iterator, Optional, Union

from tlvbox.core.binary import HEADER_SIZE, check_int32, decode_scalar, encode_scalar
from tlvbox.errors import DecodeError, InvalidNestedStreamError, InvalidUtf8Error
from tlvbox.parsing.tlv import encode_records, iter_records
from tlvbox.parsing.tlv.decode import BufferLike


class TlvBox:
    """
    A table of signed 32-bit tags mapped to immutable byte payloads.

    Values are stored already encoded, so a nested box is kept as its
    serialized bytes and ``get_*`` decodes on every call. Writing a tag that
    already exists replaces its payload.

    ``total_bytes`` is the exact serialized size: 8 header bytes plus the
    payload length, summed over all entries.

    Example:
        >>> box = TlvBox()
        >>> box.put_string(1, "hello, world")
        >>> box.get_string(1)
        'hello, world'
        >>> box.total_bytes
        20
    """

    def __init__(self) -> None:
        self._entries: dict[int, bytes] = {}
        self._total_bytes = 0

    @classmethod
    def parse(
        cls,
        buffer: BufferLike,
        offset: int = 0,
        length: Optional[int] = None,
    ) -> "TlvBox":
        """
        Build a box from ``length`` bytes of ``buffer`` starting at ``offset``.

        ``length`` defaults to everything after ``offset``. Duplicate tags in
        the stream keep the last payload.

        Raises:
            DecodeTruncatedError: The window does not hold a whole number of
                complete records.
        """
        box = cls()
        for record in iter_records(buffer, offset, length):
            box.put_bytes(record.tag, record.payload)
        return box

    # ---- mutation ----
    def put_bytes(self, tag: int, value: Union[bytes, bytearray, memoryview]) -> None:
        check_int32(tag)
        payload = bytes(value)
        previous = self._entries.get(tag)
        if previous is not None:
            self._total_bytes -= HEADER_SIZE + len(previous)
        self._entries[tag] = payload
        self._total_bytes += HEADER_SIZE + len(payload)

    def put_int16(self, tag: int, value: int) -> None:
        self.put_bytes(tag, encode_scalar("int16", value))

    def put_int32(self, tag: int, value: int) -> None:
        self.put_bytes(tag, encode_scalar("int32", value))

    def put_int64(self, tag: int, value: int) -> None:
        self.put_bytes(tag, encode_scalar("int64", value))

    def put_float32(self, tag: int, value: float) -> None:
        self.put_bytes(tag, encode_scalar("float32", value))

    def put_float64(self, tag: int, value: float) -> None:
        self.put_bytes(tag, encode_scalar("float64", value))

    def put_string(self, tag: int, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"string value must be a str, got {type(value).__name__}")
        self.put_bytes(tag, value.encode("utf-8"))

    def put_object(self, tag: int, value: "TlvBox") -> None:
        self.put_bytes(tag, value.serialize())

    def remove(self, tag: int) -> bool:
        previous = self._entries.pop(tag, None)
        if previous is None:
            return False
        self._total_bytes -= HEADER_SIZE + len(previous)
        return True

    # ---- reading ----
    def get_bytes(self, tag: int) -> Optional[bytes]:
        return self._entries.get(tag)

    def _get_scalar(self, type_name: str, tag: int):
        payload = self._entries.get(tag)
        if payload is None:
            return None
        return decode_scalar(type_name, payload)

    def get_int16(self, tag: int) -> Optional[int]:
        return self._get_scalar("int16", tag)

    def get_int32(self, tag: int) -> Optional[int]:
        return self._get_scalar("int32", tag)

    def get_int64(self, tag: int) -> Optional[int]:
        return self._get_scalar("int64", tag)

    def get_float32(self, tag: int) -> Optional[float]:
        return self._get_scalar("float32", tag)

    def get_float64(self, tag: int) -> Optional[float]:
        return self._get_scalar("float64", tag)

    def get_string(self, tag: int) -> Optional[str]:
        payload = self._entries.get(tag)
        if payload is None:
            return None
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8Error(f"payload for tag {tag} is not valid UTF-8: {exc}") from exc

    def get_object(self, tag: int) -> Optional["TlvBox"]:
        payload = self._entries.get(tag)
        if payload is None:
            return None
        try:
            return type(self).parse(payload)
        except DecodeError as exc:
            raise InvalidNestedStreamError(f"payload for tag {tag} is not a TLV stream: {exc}") from exc

    # ---- serialization ----
    def serialize(self) -> bytes:
        return encode_records(self._entries.items(), total=self._total_bytes)

    # ---- container protocol ----
    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    def items(self) -> Iterator[tuple[int, bytes]]:
        return iter(self._entries.items())

    def copy(self) -> "TlvBox":
        clone = type(self)()
        clone._entries = dict(self._entries)
        clone._total_bytes = self._total_bytes
        return clone

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TlvBox):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"TlvBox(entries={len(self._entries)}, total_bytes={self._total_bytes})"
