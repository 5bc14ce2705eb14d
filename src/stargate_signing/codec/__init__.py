"""
Protobuf Binary Codec Module

Canonical protobuf encoding/decoding for transaction bodies, auth info,
sign docs and the final TxRaw envelope.

Key components:
- writer.py: ProtoWriter with varint/length-delimited field encoding
- reader.py: ProtoReader and field accessors
- hashes.py: SHA-256 helpers
"""

from .hashes import sha256_bytes, transaction_hash
from .reader import ProtoReader, read_fields
from .writer import ProtoWriter

__all__ = [
    "ProtoReader",
    "ProtoWriter",
    "read_fields",
    "sha256_bytes",
    "transaction_hash",
]
