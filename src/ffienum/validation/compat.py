# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Wire compatibility checks between two versions of a descriptor file.

A variant's ordinal is its 1-based position in declaration order and is
permanent once code has been generated from it: a decoder built from the
old descriptors and an encoder built from the new ones must still agree
byte-for-byte. These checks compare a previously generated snapshot with
the current descriptors and report what would break that agreement.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ffienum.model.types import format_type_expr
from ffienum.model.descriptors import DescriptorFile, EnumDescriptor, VariantDescriptor

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A compatible change that older peers may still trip over.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A change that breaks the wire layout of previously generated code.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running compatibility checks.

    Attributes:
        warnings: Compatible changes worth reporting.
        errors: Incompatible changes.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any incompatible changes were found."""
        return len(self.errors) > 0


def check_compatibility(previous: DescriptorFile, current: DescriptorFile) -> ValidationResult:
    """Compare *current* descriptors against the *previous* snapshot.

    Checks performed:

    1. **Removed enums** (error): an enum present in *previous* is missing.

    2. **Moved variants** (error): the variant at some ordinal has a
       different name, or was removed. Reordering variants changes which
       ordinal each one is encoded as.

    3. **Changed fields** (error): an existing variant's field names,
       types, or order differ. Field order defines the wire layout.

    4. **Appended variants** (warning): new variants added after the last
       existing one keep all old ordinals stable, but decoders generated
       from *previous* reject the new ordinals.

    Enums that are new in *current* are not reported.

    Returns:
        A :class:`ValidationResult`; an empty result means the two versions
        are wire-identical for every enum in *previous*.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    for old_enum in previous.enums:
        new_enum = current.find(old_enum.name)
        if new_enum is None:
            errors.append(ValidationError(f"Enum '{old_enum.name}' was removed"))
            continue
        _compare_enum(old_enum, new_enum, warnings, errors)

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _compare_enum(
    old: EnumDescriptor,
    new: EnumDescriptor,
    warnings: list[ValidationWarning],
    errors: list[ValidationError],
) -> None:
    for ordinal, old_variant in enumerate(old.variants, start=1):
        new_variant = new.variant_at(ordinal)
        if new_variant is None:
            errors.append(ValidationError(f"Variant '{old.name}.{old_variant.name}' (ordinal {ordinal}) was removed"))
            continue
        if new_variant.name != old_variant.name:
            errors.append(
                ValidationError(
                    f"Ordinal {ordinal} of enum '{old.name}' changed from "
                    f"'{old_variant.name}' to '{new_variant.name}'"
                )
            )
            continue
        old_layout = _field_layout(old_variant)
        new_layout = _field_layout(new_variant)
        if old_layout != new_layout:
            errors.append(
                ValidationError(
                    f"Fields of variant '{old.name}.{old_variant.name}' changed from "
                    f"({_render_layout(old_layout)}) to ({_render_layout(new_layout)})"
                )
            )

    added = new.variants[len(old.variants) :]
    if added:
        names = ", ".join(f"'{v.name}'" for v in added)
        warnings.append(
            ValidationWarning(
                f"Enum '{old.name}' gained variant(s) {names}; "
                f"decoders generated before this change reject ordinals above {len(old.variants)}"
            )
        )


def _field_layout(variant: VariantDescriptor) -> list[tuple[str, str]]:
    return [(f.name, format_type_expr(f.type)) for f in variant.fields]


def _render_layout(layout: list[tuple[str, str]]) -> str:
    return ", ".join(f"{name}: {type_expr}" for name, type_expr in layout)
