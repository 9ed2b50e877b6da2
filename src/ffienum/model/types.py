# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field type references for the FFIEnum descriptor model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Primitive field types with a fixed wire encoding."""

    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"
    I64 = "i64"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"


class PrimitiveTypeRef(BaseModel):
    """Reference to a primitive type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class OptionalTypeRef(BaseModel):
    """Reference to a parameterized optional<T> type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["optional"] = "optional"
    inner_type: TypeRef


class SequenceTypeRef(BaseModel):
    """Reference to a parameterized sequence<T> type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sequence"] = "sequence"
    element_type: TypeRef


class MapTypeRef(BaseModel):
    """Reference to a parameterized map<K, V> type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    key_type: TypeRef
    value_type: TypeRef


class NamedTypeRef(BaseModel):
    """Reference to another named type, typically an enum in the same file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    name: str


# A field type reference: a primitive, a container, or a named type.
# The `kind` discriminator field enables fast, unambiguous deserialization.
TypeRef = Annotated[
    PrimitiveTypeRef | OptionalTypeRef | SequenceTypeRef | MapTypeRef | NamedTypeRef,
    _Field(discriminator="kind"),
]


class FieldDescriptor(BaseModel):
    """A named, typed field carried by an enum variant."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    description: str | None = None


# Resolve forward references for models that use TypeRef.
OptionalTypeRef.model_rebuild()
SequenceTypeRef.model_rebuild()
MapTypeRef.model_rebuild()
FieldDescriptor.model_rebuild()


def format_type_expr(type_ref: TypeRef) -> str:
    """Return the canonical type expression for *type_ref*, e.g. ``map<string, i32>``."""
    if isinstance(type_ref, PrimitiveTypeRef):
        return type_ref.primitive.value
    if isinstance(type_ref, OptionalTypeRef):
        return f"optional<{format_type_expr(type_ref.inner_type)}>"
    if isinstance(type_ref, SequenceTypeRef):
        return f"sequence<{format_type_expr(type_ref.element_type)}>"
    if isinstance(type_ref, MapTypeRef):
        return f"map<{format_type_expr(type_ref.key_type)}, {format_type_expr(type_ref.value_type)}>"
    # NamedTypeRef is the only remaining variant.
    assert isinstance(type_ref, NamedTypeRef)
    return type_ref.name
