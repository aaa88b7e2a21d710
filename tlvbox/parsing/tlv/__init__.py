"""
TLV (Tag-Length-Value) record stream codec.

This sub-package reads and writes the flat record stream a ``TlvBox``
serializes to. Each record carries a signed 32-bit tag and a signed 32-bit
payload length, both big-endian, followed by the payload bytes.
"""
from tlvbox.parsing.tlv.decode import (
    describe_records,
    encode_records,
    encoded_size,
    iter_records,
    parse_records,
    TlvRecord,
)

__all__ = [
    "describe_records",
    "encode_records",
    "encoded_size",
    "iter_records",
    "parse_records",
    "TlvRecord",
]
