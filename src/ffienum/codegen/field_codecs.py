# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field codec dispatcher: maps a field's declared type to its read/write code."""

from __future__ import annotations

from collections.abc import Iterable

from ffienum.codegen.naming import NamingPolicy
from ffienum.model.types import (
    MapTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    SequenceTypeRef,
    TypeRef,
)

# ###############
# Public Interface
# ###############

# Name under which generated modules import the runtime package.
RUNTIME_ALIAS = "_rt"


class CodegenError(Exception):
    """Raised when code cannot be generated for a descriptor."""


class FieldCodecResolver:
    """Resolves field types to expressions over the runtime converter protocol.

    Args:
        known_types: Descriptor names of the enums generated alongside the
            fields being resolved; named field types must be one of them.
        naming: Naming policy used to spell generated class names.
    """

    def __init__(self, known_types: Iterable[str], naming: NamingPolicy) -> None:
        self._known_types = frozenset(known_types)
        self._naming = naming

    @property
    def naming(self) -> NamingPolicy:
        return self._naming

    def converter(self, type_ref: TypeRef) -> str:
        """Return a Python expression evaluating to the converter for *type_ref*.

        Raises:
            CodegenError: If *type_ref* names an unknown type.
        """
        if isinstance(type_ref, PrimitiveTypeRef):
            return f"{RUNTIME_ALIAS}.{_PRIMITIVE_CONVERTERS[type_ref.primitive]}"
        if isinstance(type_ref, OptionalTypeRef):
            return f"{RUNTIME_ALIAS}.FfiConverterOptional({self.converter(type_ref.inner_type)})"
        if isinstance(type_ref, SequenceTypeRef):
            return f"{RUNTIME_ALIAS}.FfiConverterSequence({self.converter(type_ref.element_type)})"
        if isinstance(type_ref, MapTypeRef):
            key = self.converter(type_ref.key_type)
            value = self.converter(type_ref.value_type)
            return f"{RUNTIME_ALIAS}.FfiConverterMap({key}, {value})"
        # NamedTypeRef is the only remaining variant.
        assert isinstance(type_ref, NamedTypeRef)
        if type_ref.name not in self._known_types:
            raise CodegenError(f"No codec known for named type '{type_ref.name}'")
        return self._naming.type_name(type_ref.name)

    def read_expr(self, type_ref: TypeRef, buf: str) -> str:
        """Return an expression reading one *type_ref* value from *buf*."""
        return f"{self.converter(type_ref)}.decode({buf})"

    def write_stmt(self, type_ref: TypeRef, value: str, buf: str) -> str:
        """Return a statement writing *value* of type *type_ref* to *buf*."""
        return f"{self.converter(type_ref)}.encode({value}, {buf})"


# ################
# Implementation
# ################

_PRIMITIVE_CONVERTERS: dict[PrimitiveType, str] = {
    PrimitiveType.I8: "FfiConverterInt8",
    PrimitiveType.U8: "FfiConverterUInt8",
    PrimitiveType.I16: "FfiConverterInt16",
    PrimitiveType.U16: "FfiConverterUInt16",
    PrimitiveType.I32: "FfiConverterInt32",
    PrimitiveType.U32: "FfiConverterUInt32",
    PrimitiveType.I64: "FfiConverterInt64",
    PrimitiveType.U64: "FfiConverterUInt64",
    PrimitiveType.F32: "FfiConverterFloat",
    PrimitiveType.F64: "FfiConverterDouble",
    PrimitiveType.BOOL: "FfiConverterBool",
    PrimitiveType.STRING: "FfiConverterString",
    PrimitiveType.BYTES: "FfiConverterBytes",
}
