# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Enum descriptors: the language-neutral description of one enum type.

Descriptors are produced once per enum definition and are read-only
afterwards. Variant order is significant: the variant at position *i*
(1-based) is encoded on the wire as ordinal *i*, so reordering variants
is a breaking change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from ffienum.model.types import FieldDescriptor

# ###############
# Public Interface
# ###############


class VariantDescriptor(BaseModel):
    """One named variant of an enum, with its ordered fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: tuple[FieldDescriptor, ...] = ()
    description: str | None = None

    def has_fields(self) -> bool:
        """Return True if the variant carries at least one field."""
        return len(self.fields) > 0


class EnumDescriptor(BaseModel):
    """A closed set of named variants, in declaration order."""

    model_config = ConfigDict(frozen=True)

    name: str
    variants: tuple[VariantDescriptor, ...] = _Field(min_length=1)
    description: str | None = None

    def is_flat(self) -> bool:
        """Return True if no variant carries fields."""
        return not any(v.has_fields() for v in self.variants)

    def ordinal_of(self, variant_name: str) -> int:
        """Return the 1-based ordinal of the variant called *variant_name*.

        Raises:
            KeyError: If the enum has no such variant.
        """
        for ordinal, variant in enumerate(self.variants, start=1):
            if variant.name == variant_name:
                return ordinal
        raise KeyError(variant_name)

    def variant_at(self, ordinal: int) -> VariantDescriptor | None:
        """Return the variant encoded as *ordinal*, or None if out of range."""
        if 1 <= ordinal <= len(self.variants):
            return self.variants[ordinal - 1]
        return None


class DescriptorFile(BaseModel):
    """All enum descriptors declared in a single source file."""

    model_config = ConfigDict(frozen=True)

    enums: tuple[EnumDescriptor, ...] = ()

    def find(self, name: str) -> EnumDescriptor | None:
        """Return the enum called *name*, if declared in this file."""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None
