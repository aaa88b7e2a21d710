"""Tests for building boxes from typed entry descriptions."""
import base64

import pytest

from tlvbox.domain import TlvBox, box_from_entries, read_typed_value
from tlvbox.errors import EncodeRangeError, InvalidNestedStreamError


def test_box_from_entries_all_types():
    entries = [
        {"tag": 1, "type": "int16", "value": -3},
        {"tag": 2, "type": "int32", "value": 70000},
        {"tag": 3, "type": "int64", "value": 2**40},
        {"tag": 4, "type": "float32", "value": 0.25},
        {"tag": 5, "type": "float64", "value": 1.5},
        {"tag": 6, "type": "string", "value": "hi"},
        {"tag": 7, "type": "bytes", "value": base64.b64encode(b"\x00\xff").decode()},
        {"tag": 8, "type": "object", "value": [{"tag": 1, "type": "string", "value": "inner"}]},
    ]
    box = box_from_entries(entries)
    assert len(box) == 8
    assert box.get_int16(1) == -3
    assert box.get_int32(2) == 70000
    assert box.get_int64(3) == 2**40
    assert box.get_float32(4) == 0.25
    assert box.get_float64(5) == 1.5
    assert box.get_string(6) == "hi"
    assert box.get_bytes(7) == b"\x00\xff"
    assert box.get_object(8).get_string(1) == "inner"


def test_box_from_entries_unknown_type():
    with pytest.raises(ValueError, match="unknown value type"):
        box_from_entries([{"tag": 1, "type": "uint8", "value": 1}])


def test_box_from_entries_missing_field():
    with pytest.raises(ValueError, match="needs tag, type and value"):
        box_from_entries([{"tag": 1, "type": "int16"}])


def test_box_from_entries_bad_base64():
    with pytest.raises(ValueError, match="not base64"):
        box_from_entries([{"tag": 1, "type": "bytes", "value": "***"}])


def test_box_from_entries_bad_value_type():
    with pytest.raises(ValueError, match="bad int32 value"):
        box_from_entries([{"tag": 1, "type": "int32", "value": "seven"}])
    with pytest.raises(ValueError, match="must be a list"):
        box_from_entries([{"tag": 1, "type": "object", "value": 3}])


def test_box_from_entries_range_error():
    with pytest.raises(EncodeRangeError):
        box_from_entries([{"tag": 1, "type": "int16", "value": 40000}])


def test_read_typed_value():
    box = TlvBox()
    box.put_bytes(1, b"\x01\x02")
    child = TlvBox()
    child.put_int32(2, 7)
    box.put_object(3, child)
    box.put_float64(4, 2.5)

    assert read_typed_value(box, 1, "bytes") == "AQI="
    assert read_typed_value(box, 3, "object") == [
        {"tag": 2, "offset": 0, "length": 4, "payload": "00000007", "name": "0x00000002"}
    ]
    assert read_typed_value(box, 4, "float64") == 2.5
    assert read_typed_value(box, 99, "object") is None
    assert read_typed_value(box, 99, "bytes") is None


def test_read_typed_value_invalid_nested():
    box = TlvBox()
    box.put_bytes(1, b"\x00")
    with pytest.raises(InvalidNestedStreamError):
        read_typed_value(box, 1, "object")


@pytest.mark.parametrize(
    "type_name, value, expected",
    [
        ("float64", float("nan"), "NaN"),
        ("float64", float("inf"), "Infinity"),
        ("float64", float("-inf"), "-Infinity"),
        ("float32", float("inf"), "Infinity"),
        ("float32", float("-inf"), "-Infinity"),
    ],
)
def test_read_typed_value_non_finite_float(type_name, value, expected):
    box = TlvBox()
    getattr(box, f"put_{type_name}")(1, value)
    assert read_typed_value(box, 1, type_name) == expected


def test_read_typed_value_nested_reads_payload_once(monkeypatch):
    box = TlvBox()
    child = TlvBox()
    child.put_int16(2, 1)
    box.put_object(1, child)
    calls = []
    original = TlvBox.get_bytes

    def counting_get_bytes(self, tag):
        calls.append(tag)
        return original(self, tag)

    monkeypatch.setattr(TlvBox, "get_bytes", counting_get_bytes)
    monkeypatch.setattr(TlvBox, "parse", classmethod(lambda cls, *a, **kw: pytest.fail("nested box parsed")))
    records = read_typed_value(box, 1, "object")
    assert [r["tag"] for r in records] == [2]
    assert calls == [1]
