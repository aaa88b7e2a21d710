"""
This package contains the wire-level codecs that sit under ``TlvBox``.

Sub-packages handle specific data formats:

- ``tlv``: TLV (Tag-Length-Value) record stream reader and writer.
"""
