# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime support imported by generated enum modules."""

from ffienum.runtime.base import ViaFfiUsingByteBuffer, variant_of
from ffienum.runtime.buffer import ByteBuilder, ByteStream
from ffienum.runtime.converters import (
    FfiConverter,
    FfiConverterBool,
    FfiConverterBytes,
    FfiConverterDouble,
    FfiConverterFloat,
    FfiConverterInt8,
    FfiConverterInt16,
    FfiConverterInt32,
    FfiConverterInt64,
    FfiConverterMap,
    FfiConverterOptional,
    FfiConverterSequence,
    FfiConverterString,
    FfiConverterUInt8,
    FfiConverterUInt16,
    FfiConverterUInt32,
    FfiConverterUInt64,
)
from ffienum.runtime.errors import InternalError

__all__ = [
    # Buffers
    "ByteStream",
    "ByteBuilder",
    # Errors
    "InternalError",
    # Generated type support
    "ViaFfiUsingByteBuffer",
    "variant_of",
    # Field converters
    "FfiConverter",
    "FfiConverterInt8",
    "FfiConverterUInt8",
    "FfiConverterInt16",
    "FfiConverterUInt16",
    "FfiConverterInt32",
    "FfiConverterUInt32",
    "FfiConverterInt64",
    "FfiConverterUInt64",
    "FfiConverterFloat",
    "FfiConverterDouble",
    "FfiConverterBool",
    "FfiConverterString",
    "FfiConverterBytes",
    "FfiConverterOptional",
    "FfiConverterSequence",
    "FfiConverterMap",
]
