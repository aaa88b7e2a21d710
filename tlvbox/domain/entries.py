from __future__ import annotations

import base64
import binascii
import math
from typing import Any, Iterable, Mapping

from tlvbox.domain.box import TlvBox
from tlvbox.errors import DecodeError, InvalidNestedStreamError
from tlvbox.parsing.tlv import describe_records, iter_records

VALUE_TYPES: tuple[str, ...] = (
    "int16",
    "int32",
    "int64",
    "float32",
    "float64",
    "string",
    "bytes",
    "object",
)


def box_from_entries(entries: Iterable[Mapping[str, Any]]) -> TlvBox:
    """
    Build a box from ``{"tag", "type", "value"}`` descriptions.

    ``bytes`` values are base64 strings and ``object`` values are nested
    entry lists, so the whole description can round-trip through JSON.

    Raises:
        ValueError: An entry names an unknown type or carries bad base64.
        TlvError: A tag or value does not fit its wire width.
    """
    box = TlvBox()
    for entry in entries:
        try:
            tag = entry["tag"]
            type_name = entry["type"]
            value = entry["value"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"entry {entry!r} needs tag, type and value") from exc
        if type_name not in VALUE_TYPES:
            raise ValueError(f"unknown value type '{type_name}' for tag {tag}")
        if type_name == "bytes":
            try:
                value = base64.b64decode(value, validate=True)
            except (binascii.Error, TypeError) as exc:
                raise ValueError(f"bytes value for tag {tag} is not base64: {exc}") from exc
        elif type_name == "object":
            if not isinstance(value, list):
                raise ValueError(f"object value for tag {tag} must be a list of entries")
            value = box_from_entries(value)
        try:
            getattr(box, f"put_{type_name}")(tag, value)
        except TypeError as exc:
            raise ValueError(f"bad {type_name} value for tag {tag}: {exc}") from exc
    return box


def read_typed_value(box: TlvBox, tag: int, type_name: str) -> Any:
    """
    Decode ``tag`` as ``type_name`` into a JSON-friendly value.

    Bytes come back base64-encoded and nested boxes as their record list.
    Non-finite floats come back as the strings ``"NaN"``, ``"Infinity"`` and
    ``"-Infinity"``.
    Returns ``None`` when the tag is absent.
    """
    if type_name not in VALUE_TYPES:
        raise ValueError(f"unknown value type '{type_name}' for tag {tag}")
    if type_name == "bytes":
        payload = box.get_bytes(tag)
        return None if payload is None else base64.b64encode(payload).decode("ascii")
    if type_name == "object":
        payload = box.get_bytes(tag)
        if payload is None:
            return None
        try:
            return describe_records(iter_records(payload))
        except DecodeError as exc:
            raise InvalidNestedStreamError(f"payload for tag {tag} is not a TLV stream: {exc}") from exc
    value = getattr(box, f"get_{type_name}")(tag)
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return value


__all__ = ["VALUE_TYPES", "box_from_entries", "read_typed_value"]
