# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor model for FFIEnum (enums, variants, fields, type references)."""

from ffienum.model.descriptors import DescriptorFile, EnumDescriptor, VariantDescriptor
from ffienum.model.types import (
    FieldDescriptor,
    MapTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    PrimitiveType,
    PrimitiveTypeRef,
    SequenceTypeRef,
    TypeRef,
    format_type_expr,
)

__all__ = [
    # Type system
    "PrimitiveType",
    "PrimitiveTypeRef",
    "OptionalTypeRef",
    "SequenceTypeRef",
    "MapTypeRef",
    "NamedTypeRef",
    "TypeRef",
    "FieldDescriptor",
    "format_type_expr",
    # Descriptors
    "VariantDescriptor",
    "EnumDescriptor",
    "DescriptorFile",
]
