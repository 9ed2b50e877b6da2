# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Base classes and helpers that generated enum modules build on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from ffienum.runtime.buffer import ByteBuilder, ByteStream
from ffienum.runtime.errors import InternalError

_T = TypeVar("_T", bound=type)

# ###############
# Public Interface
# ###############


class ViaFfiUsingByteBuffer:
    """Mixin for types that cross the native boundary as a serialized byte buffer.

    Subclasses provide ``decode(buf)`` and ``encode(value, buf)``; this mixin
    adds whole-buffer entry points on top of them.
    """

    @classmethod
    def lift(cls, data: bytes) -> Any:
        """Decode one value from *data*, which must contain nothing else.

        Raises:
            InternalError: If the bytes do not describe a valid value, or if
                bytes are left over after decoding.
        """
        stream = ByteStream(data)
        value = cls.decode(stream)  # type: ignore[attr-defined]
        if stream.remaining() != 0:
            raise InternalError(f"Junk data left in buffer after lifting {cls.__name__}: {stream.remaining()} bytes")
        return value

    def lower(self) -> bytes:
        """Encode this value into a fresh byte string."""
        builder = ByteBuilder()
        type(self).encode(self, builder)  # type: ignore[attr-defined]
        return builder.finalize()


def variant_of(enum_cls: type, name: str) -> Callable[[_T], _T]:
    """Class decorator attaching a concrete variant class to its enum supertype.

    After decoration the class is reachable as ``enum_cls.<name>`` and reports
    the qualified name ``"<Enum>.<name>"``. The class must already subclass
    *enum_cls*.
    """

    def decorate(cls: _T) -> _T:
        if not issubclass(cls, enum_cls):
            raise TypeError(f"{cls.__name__} must subclass {enum_cls.__name__}")
        cls.__name__ = name
        cls.__qualname__ = f"{enum_cls.__qualname__}.{name}"
        setattr(enum_cls, name, cls)
        return cls

    return decorate
