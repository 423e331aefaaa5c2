"""Binary I/O utilities for the BSP and MD3 readers."""

import struct
from enum import Enum
from io import BytesIO
from typing import BinaryIO

# Path bytes are decoded byte-for-byte so distinct names stay distinct and
# every reader produces the same string for the same bytes.
TEXT_ENCODING = 'latin-1'


class ByteOrder(Enum):
    """Byte order enum for struct unpacking."""
    LITTLE_ENDIAN = "<"


class IoBuffer:
    """
    Binary reader with endian support.

    Reads past the end of the stream raise ValueError instead of returning
    short data, so a truncated file fails loudly in the caller.
    """

    def __init__(self, stream: BinaryIO, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN):
        self.stream = stream
        self.byte_order = byte_order

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> 'IoBuffer':
        """Create from bytes."""
        return cls(BytesIO(data), byte_order)

    @property
    def position(self) -> int:
        """Current position in stream."""
        return self.stream.tell()

    @position.setter
    def position(self, value: int):
        self.stream.seek(value)

    @property
    def size(self) -> int:
        """Total length of the underlying stream."""
        current = self.stream.tell()
        self.stream.seek(0, 2)
        end = self.stream.tell()
        self.stream.seek(current)
        return end

    def slice(self, offset: int, length: int) -> bytes:
        """Read length bytes at an absolute offset, restoring the position."""
        if offset < 0 or length < 0 or offset + length > self.size:
            raise ValueError(f"Range {offset}+{length} outside buffer of {self.size} bytes")
        current = self.position
        self.stream.seek(offset)
        data = self.stream.read(length)
        self.stream.seek(current)
        return data

    def read_bytes(self, count: int) -> bytes:
        """Read exactly count raw bytes."""
        data = self.stream.read(count)
        if len(data) != count:
            raise ValueError(
                f"Unexpected end of data at offset {self.position - len(data)}: "
                f"wanted {count} bytes, got {len(data)}"
            )
        return data

    def _unpack(self, code: str, width: int):
        fmt = f"{self.byte_order.value}{code}"
        return struct.unpack(fmt, self.read_bytes(width))[0]

    def read_int32(self) -> int:
        """Read signed 32-bit integer."""
        return self._unpack("i", 4)

    def read_cstring(self, length: int, trim_null: bool = True) -> str:
        """Read fixed-length string."""
        raw = self.read_bytes(length)
        if trim_null:
            null_idx = raw.find(b'\0')
            if null_idx != -1:
                raw = raw[:null_idx]
        return raw.decode(TEXT_ENCODING)
