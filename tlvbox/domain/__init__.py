"""
This package defines the domain model of the tlvbox library.

It exposes the `TlvBox` container and helpers that build boxes from, and
read boxes into, plain typed entry descriptions.
"""
from tlvbox.domain.box import TlvBox
from tlvbox.domain.entries import VALUE_TYPES, box_from_entries, read_typed_value

__all__ = ["TlvBox", "VALUE_TYPES", "box_from_entries", "read_typed_value"]
