"""
Protobuf Writer

Implements the subset of the protobuf wire format needed for canonical
transaction encoding: varints, length-delimited fields and embedded messages.

Canonical rules:
- callers write fields in ascending field-number order;
- proto3 scalar defaults (0, "", b"") are omitted;
- embedded messages are always written when present, even if empty.
"""

from typing import List, Optional

# Wire types
WIRE_VARINT = 0
WIRE_LEN = 2

MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


class ProtoWriter:
    """
    Append-only protobuf writer.

    Field helpers return self so messages can be written as a chain.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """Write raw bytes without length prefix."""
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Unsigned integer value to encode as varint

        Raises:
            ValueError: If the value does not fit in 64 bits
        """
        if v < 0 or v > MAX_UINT64:
            raise ValueError(f"uvarint out of range: {v}")
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """Write bytes with a uvarint length prefix."""
        self.uvarint(len(v))
        self.bytes(v)

    def tag(self, field: int, wire_type: int) -> None:
        """Write a field key."""
        if field < 1:
            raise ValueError(f"Field number must be positive: {field}")
        self.uvarint((field << 3) | wire_type)

    def uint64_field(self, field: int, v: int) -> "ProtoWriter":
        """Write a uint64 field, omitting the zero default."""
        if v:
            self.tag(field, WIRE_VARINT)
            self.uvarint(v)
        return self

    def int64_field(self, field: int, v: int) -> "ProtoWriter":
        """Write an int64 field (two's complement for negatives), omitting zero."""
        if v:
            self.tag(field, WIRE_VARINT)
            self.uvarint(v & MAX_UINT64)
        return self

    def enum_field(self, field: int, v: int) -> "ProtoWriter":
        return self.uint64_field(field, int(v))

    def bytes_field(self, field: int, v: bytes) -> "ProtoWriter":
        """Write a length-delimited bytes field, omitting empty values."""
        if v:
            self.tag(field, WIRE_LEN)
            self.len_prefixed_bytes(v)
        return self

    def string_field(self, field: int, v: Optional[str]) -> "ProtoWriter":
        """Write a UTF-8 string field, omitting empty values."""
        if v:
            self.bytes_field(field, v.encode("utf-8"))
        return self

    def message_field(self, field: int, encoded: Optional[bytes]) -> "ProtoWriter":
        """
        Write an embedded message.

        Unlike scalars, a present message is written even when its encoding
        is empty; None means absent.
        """
        if encoded is not None:
            self.tag(field, WIRE_LEN)
            self.len_prefixed_bytes(encoded)
        return self

    def repeated_bytes_field(self, field: int, values) -> "ProtoWriter":
        """Write every element, including empty ones, to keep positions."""
        for v in values:
            self.tag(field, WIRE_LEN)
            self.len_prefixed_bytes(v)
        return self

    def to_bytes(self) -> bytes:
        """Return accumulated bytes as immutable bytes object."""
        return bytes(self._bb)
