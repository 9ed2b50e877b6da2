# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sequential byte cursors shared by every generated codec.

All integers and floats are big-endian. Enum ordinals are written as
signed 32-bit integers.
"""

from __future__ import annotations

import struct

from ffienum.runtime.errors import InternalError

# ###############
# Public Interface
# ###############


class ByteStream:
    """A read cursor over an immutable byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._offset

    def read(self, size: int) -> bytes:
        """Consume and return exactly *size* bytes.

        Raises:
            InternalError: If fewer than *size* bytes remain.
        """
        if size < 0:
            raise InternalError(f"Cannot read a negative number of bytes ({size})")
        end = self._offset + size
        if end > len(self._data):
            raise InternalError(f"Read past end of buffer: wanted {size} bytes, {self.remaining()} left")
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def read_i8(self) -> int:
        return self._unpack(_I8)

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_float(self) -> float:
        return self._unpack(_F32)

    def read_double(self) -> float:
        return self._unpack(_F64)

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self.read(fmt.size))[0]


class ByteBuilder:
    """An append-only write cursor."""

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def write(self, data: bytes) -> None:
        """Append raw bytes."""
        self._data += data

    def write_i8(self, value: int) -> None:
        self._data += _I8.pack(value)

    def write_u8(self, value: int) -> None:
        self._data += _U8.pack(value)

    def write_i16(self, value: int) -> None:
        self._data += _I16.pack(value)

    def write_u16(self, value: int) -> None:
        self._data += _U16.pack(value)

    def write_i32(self, value: int) -> None:
        self._data += _I32.pack(value)

    def write_u32(self, value: int) -> None:
        self._data += _U32.pack(value)

    def write_i64(self, value: int) -> None:
        self._data += _I64.pack(value)

    def write_u64(self, value: int) -> None:
        self._data += _U64.pack(value)

    def write_float(self, value: float) -> None:
        self._data += _F32.pack(value)

    def write_double(self, value: float) -> None:
        self._data += _F64.pack(value)

    def finalize(self) -> bytes:
        """Return everything written so far as an immutable byte string."""
        return bytes(self._data)


# ################
# Implementation
# ################

_I8 = struct.Struct(">b")
_U8 = struct.Struct(">B")
_I16 = struct.Struct(">h")
_U16 = struct.Struct(">H")
_I32 = struct.Struct(">i")
_U32 = struct.Struct(">I")
_I64 = struct.Struct(">q")
_U64 = struct.Struct(">Q")
_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")
