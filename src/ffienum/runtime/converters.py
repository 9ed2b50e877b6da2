# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field converters used by generated enum codecs.

Every converter exposes the same two operations, ``decode(buf)`` and
``encode(value, buf)``, so generated code can delegate field reads and
writes without knowing the concrete field type. Generated enum classes
follow the same protocol, which lets one enum be a field of another.
"""

from __future__ import annotations

from typing import Any, Protocol

from ffienum.runtime.buffer import ByteBuilder, ByteStream
from ffienum.runtime.errors import InternalError

# ###############
# Public Interface
# ###############


class FfiConverter(Protocol):
    """The read/write pair every field converter provides."""

    def decode(self, buf: ByteStream) -> Any: ...

    def encode(self, value: Any, buf: ByteBuilder) -> None: ...


class FfiConverterInt8:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_i8()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_i8(value)


class FfiConverterUInt8:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_u8()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_u8(value)


class FfiConverterInt16:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_i16()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_i16(value)


class FfiConverterUInt16:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_u16()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_u16(value)


class FfiConverterInt32:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_i32()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_i32(value)


class FfiConverterUInt32:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_u32()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_u32(value)


class FfiConverterInt64:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_i64()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_i64(value)


class FfiConverterUInt64:
    @staticmethod
    def decode(buf: ByteStream) -> int:
        return buf.read_u64()

    @staticmethod
    def encode(value: int, buf: ByteBuilder) -> None:
        buf.write_u64(value)


class FfiConverterFloat:
    @staticmethod
    def decode(buf: ByteStream) -> float:
        return buf.read_float()

    @staticmethod
    def encode(value: float, buf: ByteBuilder) -> None:
        buf.write_float(value)


class FfiConverterDouble:
    @staticmethod
    def decode(buf: ByteStream) -> float:
        return buf.read_double()

    @staticmethod
    def encode(value: float, buf: ByteBuilder) -> None:
        buf.write_double(value)


class FfiConverterBool:
    """Booleans travel as a single signed byte, 0 or 1."""

    @staticmethod
    def decode(buf: ByteStream) -> bool:
        raw = buf.read_i8()
        if raw not in (0, 1):
            raise InternalError(f"Unexpected byte for Boolean: {raw}")
        return raw == 1

    @staticmethod
    def encode(value: bool, buf: ByteBuilder) -> None:
        buf.write_i8(1 if value else 0)


class FfiConverterString:
    """Strings travel as an i32 byte length followed by UTF-8 bytes."""

    @staticmethod
    def decode(buf: ByteStream) -> str:
        size = _read_length(buf, "String")
        try:
            return buf.read(size).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InternalError(f"String is not valid UTF-8: {exc}") from exc

    @staticmethod
    def encode(value: str, buf: ByteBuilder) -> None:
        data = value.encode("utf-8")
        buf.write_i32(len(data))
        buf.write(data)


class FfiConverterBytes:
    @staticmethod
    def decode(buf: ByteStream) -> bytes:
        size = _read_length(buf, "Bytes")
        return buf.read(size)

    @staticmethod
    def encode(value: bytes, buf: ByteBuilder) -> None:
        buf.write_i32(len(value))
        buf.write(value)


class FfiConverterOptional:
    """An i8 presence tag (0 or 1), followed by the inner value when present."""

    def __init__(self, inner: FfiConverter) -> None:
        self._inner = inner

    def decode(self, buf: ByteStream) -> Any:
        tag = buf.read_i8()
        if tag == 0:
            return None
        if tag == 1:
            return self._inner.decode(buf)
        raise InternalError(f"Unexpected tag byte for Optional: {tag}")

    def encode(self, value: Any, buf: ByteBuilder) -> None:
        if value is None:
            buf.write_i8(0)
            return
        buf.write_i8(1)
        self._inner.encode(value, buf)


class FfiConverterSequence:
    """An i32 element count followed by each element."""

    def __init__(self, inner: FfiConverter) -> None:
        self._inner = inner

    def decode(self, buf: ByteStream) -> list[Any]:
        count = _read_length(buf, "Sequence")
        return [self._inner.decode(buf) for _ in range(count)]

    def encode(self, value: list[Any], buf: ByteBuilder) -> None:
        buf.write_i32(len(value))
        for item in value:
            self._inner.encode(item, buf)


class FfiConverterMap:
    """An i32 entry count followed by each key and value in turn."""

    def __init__(self, key: FfiConverter, value: FfiConverter) -> None:
        self._key = key
        self._value = value

    def decode(self, buf: ByteStream) -> dict[Any, Any]:
        count = _read_length(buf, "Map")
        result: dict[Any, Any] = {}
        for _ in range(count):
            key = self._key.decode(buf)
            result[key] = self._value.decode(buf)
        return result

    def encode(self, value: dict[Any, Any], buf: ByteBuilder) -> None:
        buf.write_i32(len(value))
        for key, item in value.items():
            self._key.encode(key, buf)
            self._value.encode(item, buf)


# ################
# Implementation
# ################


def _read_length(buf: ByteStream, what: str) -> int:
    size = buf.read_i32()
    if size < 0:
        raise InternalError(f"Unexpected negative length for {what}: {size}")
    return size
