"""Tests for the TLV record stream codec (parse, encode, round-trip, edge cases)."""
import pytest

from tlvbox.errors import DecodeTruncatedError, EncodeRangeError
from tlvbox.parsing.tlv import (
    describe_records,
    encode_records,
    encoded_size,
    iter_records,
    parse_records,
    TlvRecord,
)


def test_parse_single_record():
    # tag 1, length 2, payload 0x2a2a
    data = bytes([0, 0, 0, 1, 0, 0, 0, 2, 0x2A, 0x2A])
    result = parse_records(data)
    assert result == [TlvRecord(tag=1, offset=0, payload=b"\x2a\x2a")]


def test_parse_mixed_widths():
    # Payloads of 0, 1 and 5 bytes; every record must be sliced by its own length.
    data = (
        bytes([0, 0, 0, 7, 0, 0, 0, 0])
        + bytes([0, 0, 0, 8, 0, 0, 0, 1, 0xFF])
        + bytes([0, 0, 0, 9, 0, 0, 0, 5]) + b"hello"
    )
    result = parse_records(data)
    assert [r.tag for r in result] == [7, 8, 9]
    assert [r.payload for r in result] == [b"", b"\xff", b"hello"]
    assert [r.offset for r in result] == [0, 8, 17]


def test_parse_empty():
    assert parse_records(b"") == []


def test_parse_negative_tag():
    data = bytes([0xFF, 0xFF, 0xFF, 0xF9, 0, 0, 0, 1, 0x01])
    assert parse_records(data)[0].tag == -7


def test_parse_window_inside_larger_buffer():
    stream = encode_records([(1, b"abc"), (2, b"de")])
    buf = b"\xaa\xbb" + stream + b"\xcc"
    result = parse_records(buf, offset=2, length=len(stream))
    assert [(r.tag, r.payload) for r in result] == [(1, b"abc"), (2, b"de")]
    assert result[0].offset == 2


def test_parse_accepts_memoryview():
    stream = encode_records([(3, b"xyz")])
    assert parse_records(memoryview(stream))[0].payload == b"xyz"


def test_parse_truncated_header():
    with pytest.raises(DecodeTruncatedError):
        parse_records(bytes([0, 0, 0, 1, 0, 0]))


def test_parse_truncated_payload():
    # tag 1, length 3 but only two payload bytes follow
    with pytest.raises(DecodeTruncatedError):
        parse_records(bytes([0, 0, 0, 1, 0, 0, 0, 3, 0xAA, 0xBB]))


def test_parse_length_one_short():
    stream = encode_records([(1, b"abcd"), (2, b"ef")])
    with pytest.raises(DecodeTruncatedError):
        parse_records(stream, 0, len(stream) - 1)


def test_parse_length_past_buffer_end():
    stream = encode_records([(1, b"abcd")])
    with pytest.raises(DecodeTruncatedError):
        parse_records(stream, 0, len(stream) + 8)


def test_parse_negative_payload_length():
    with pytest.raises(DecodeTruncatedError):
        parse_records(bytes([0, 0, 0, 1, 0xFF, 0xFF, 0xFF, 0xFF]))


def test_parse_bad_window():
    with pytest.raises(DecodeTruncatedError):
        parse_records(b"", offset=1)
    with pytest.raises(DecodeTruncatedError):
        parse_records(b"\x00" * 8, offset=0, length=-1)


def test_iter_records_is_lazy_until_fault():
    stream = encode_records([(1, b"ok")]) + bytes([0, 0, 0, 2, 0, 0, 0, 9])
    records = iter_records(stream)
    assert next(records).payload == b"ok"
    with pytest.raises(DecodeTruncatedError):
        next(records)


def test_encode_single_record():
    assert encode_records([(1, b"\x2a")]) == bytes([0, 0, 0, 1, 0, 0, 0, 1, 0x2A])


def test_encode_keeps_given_order():
    result = encode_records([(2, b"b"), (1, b"a")])
    assert result == bytes([0, 0, 0, 2, 0, 0, 0, 1]) + b"b" + bytes([0, 0, 0, 1, 0, 0, 0, 1]) + b"a"


def test_encode_large_stream_is_not_truncated():
    pairs = [(tag, bytes([tag]) * 100) for tag in range(5)]
    assert len(encode_records(pairs)) == encoded_size(pairs) == 5 * 108


def test_encode_total_mismatch():
    with pytest.raises(EncodeRangeError):
        encode_records([(1, b"abc")], total=10)
    with pytest.raises(EncodeRangeError):
        encode_records([(1, b"abc")], total=12)


def test_encode_tag_out_of_range():
    with pytest.raises(EncodeRangeError):
        encode_records([(2**31, b"")])


def test_roundtrip():
    pairs = [(1, b""), (-1, b"\x00" * 300), (2**31 - 1, "héllo".encode("utf-8"))]
    decoded = parse_records(encode_records(pairs))
    assert [(r.tag, r.payload) for r in decoded] == pairs


def test_record_size():
    assert TlvRecord(tag=1, offset=0, payload=b"abc").size == 11


def test_describe_records_names():
    records = parse_records(encode_records([(1, b"\x01"), (-7, b"")]))
    rows = describe_records(records, names={1: "flags"})
    assert rows[0] == {"tag": 1, "offset": 0, "length": 1, "payload": "01", "name": "flags"}
    assert rows[1]["name"] == "0xfffffff9"
    assert rows[1]["offset"] == 9
