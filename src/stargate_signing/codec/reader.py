"""
Protobuf Reader

Decodes the wire format produced by ProtoWriter. Only varint and
length-delimited wire types are accepted; anything else is a decode error.
"""

import builtins
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple, Union

from ..runtime.errors import DecodeError
from .writer import WIRE_LEN, WIRE_VARINT

FieldValue = Union[int, builtins.bytes]


class ProtoReader:
    """
    Sequential protobuf reader.

    Raises DecodeError on truncated input or unsupported wire types.
    """

    def __init__(self, buf: builtins.bytes):
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True when the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    def u8(self) -> int:
        if self._off >= len(self._buf):
            raise DecodeError("Buffer overflow: attempting to read beyond end")
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value
        """
        x = 0
        s = 0
        while True:
            b = self.u8()
            if s >= 64:
                raise DecodeError("uvarint overflows 64 bits")
            if b < 0x80:
                x |= b << s
                break
            x |= (b & 0x7F) << s
            s += 7
        return x

    def bytes(self, n: int) -> builtins.bytes:
        """Read n bytes from buffer."""
        if self._off + n > len(self._buf):
            raise DecodeError(f"Buffer overflow: attempting to read {n} bytes beyond end")
        out = builtins.bytes(self._buf[self._off: self._off + n])
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        n = self.uvarint()
        return self.bytes(n)

    def fields(self) -> Iterator[Tuple[int, FieldValue]]:
        """Yield (field number, value) pairs in wire order."""
        while not self.eof:
            key = self.uvarint()
            field, wire_type = key >> 3, key & 0x07
            if field < 1:
                raise DecodeError(f"Invalid field number {field}")
            if wire_type == WIRE_VARINT:
                yield field, self.uvarint()
            elif wire_type == WIRE_LEN:
                yield field, self.len_prefixed_bytes()
            else:
                raise DecodeError(f"Unsupported wire type {wire_type} for field {field}")


def read_fields(buf: builtins.bytes) -> Dict[int, List[FieldValue]]:
    """
    Parse a message into a field-number -> values mapping.

    Repeated fields keep their wire order.
    """
    out: Dict[int, List[FieldValue]] = defaultdict(list)
    for field, value in ProtoReader(buf).fields():
        out[field].append(value)
    return out


def first_string(fields: Dict[int, List[FieldValue]], field: int) -> str:
    """Last-one-wins string accessor with the proto3 empty default."""
    values = fields.get(field)
    if not values:
        return ""
    value = values[-1]
    if not isinstance(value, builtins.bytes):
        raise DecodeError(f"Field {field} is not length-delimited")
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Field {field} is not valid UTF-8", cause=e)


def first_bytes(fields: Dict[int, List[FieldValue]], field: int) -> builtins.bytes:
    values = fields.get(field)
    if not values:
        return b""
    value = values[-1]
    if not isinstance(value, builtins.bytes):
        raise DecodeError(f"Field {field} is not length-delimited")
    return value


def first_uint(fields: Dict[int, List[FieldValue]], field: int) -> int:
    values = fields.get(field)
    if not values:
        return 0
    value = values[-1]
    if not isinstance(value, int):
        raise DecodeError(f"Field {field} is not a varint")
    return value


def first_int64(fields: Dict[int, List[FieldValue]], field: int) -> int:
    """Signed accessor for int64 fields written in two's complement."""
    value = first_uint(fields, field)
    if value >= 1 << 63:
        value -= 1 << 64
    return value
