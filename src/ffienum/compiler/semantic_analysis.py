# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis for parsed enum descriptors.

Checks that a descriptor file can be rendered into a valid Python module:
identifier validity, duplicate names (both as declared and after the
naming policy is applied), names that would shadow generated members,
and unresolved named field types. Wire compatibility with previously
generated code is checked separately, see :mod:`ffienum.validation`.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Callable
from dataclasses import dataclass

from ffienum.codegen.naming import NamingPolicy
from ffienum.model.descriptors import DescriptorFile, EnumDescriptor, VariantDescriptor
from ffienum.model.types import MapTypeRef, NamedTypeRef, OptionalTypeRef, SequenceTypeRef, TypeRef

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SemanticError:
    """A structural error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


# Members every generated enum class defines; variants and fields may not reuse them.
RESERVED_MEMBER_NAMES = frozenset({"decode", "encode", "lift", "lower"})

# Attributes enum.Enum resolves itself; a flat member may not take them.
RESERVED_FLAT_MEMBER_NAMES = frozenset({"mro"})


def analyze(descriptor_file: DescriptorFile, naming: NamingPolicy | None = None) -> list[SemanticError]:
    """Perform semantic analysis on a DescriptorFile.

    Checks performed:
    - Enum, variant, and field names are valid identifiers.
    - Duplicate enum names, and enum names colliding after naming.
    - Duplicate variant names within each enum, as declared and after
      naming (e.g. ``Red`` and ``RED`` both become ``RED``).
    - Duplicate field names within each variant, as declared and after naming.
    - Enum and variant names that generate Python keywords.
    - Variant and field names that would shadow generated members
      (``decode``, ``encode``, ``lift``, ``lower``, private names, and the
      ``is_<variant>`` predicates of tagged unions).
    - Named field types must refer to an enum declared in the same file.

    Args:
        descriptor_file: The parsed descriptors to analyze.
        naming: Naming policy the module will be generated with.

    Returns:
        A list of :class:`SemanticError` objects. An empty list means the
        file is semantically valid.
    """
    naming = naming or NamingPolicy()
    errors: list[SemanticError] = []

    enum_names = {e.name for e in descriptor_file.enums}
    errors.extend(_check_duplicates([e.name for e in descriptor_file.enums], "enum", "file"))
    errors.extend(
        _check_naming_collisions([e.name for e in descriptor_file.enums], naming.type_name, "enum", "file")
    )

    for enum in descriptor_file.enums:
        errors.extend(_check_enum(enum, naming, enum_names))

    return errors


# ################
# Implementation
# ################

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str, what: str) -> list[SemanticError]:
    if _IDENTIFIER_RE.match(name) is None:
        return [SemanticError(f"Invalid {what} name '{name}': must be an identifier")]
    if name.startswith("_"):
        return [SemanticError(f"Invalid {what} name '{name}': must not start with an underscore")]
    return []


def _check_duplicates(names: list[str], what: str, scope: str) -> list[SemanticError]:
    seen: set[str] = set()
    errors: list[SemanticError] = []
    for name in names:
        if name in seen:
            errors.append(SemanticError(f"Duplicate {what} name '{name}' in {scope}"))
        seen.add(name)
    return errors


def _check_naming_collisions(
    names: list[str],
    rename: Callable[[str], str],
    what: str,
    scope: str,
) -> list[SemanticError]:
    """Report distinct declared names that map to the same generated identifier."""
    generated: dict[str, str] = {}
    errors: list[SemanticError] = []
    for name in names:
        py_name = rename(name)
        previous = generated.get(py_name)
        if previous is not None and previous != name:
            message = f"{what.capitalize()} names '{previous}' and '{name}' in {scope} both generate '{py_name}'"
            errors.append(SemanticError(message))
        generated.setdefault(py_name, name)
    return errors


def _check_enum(enum: EnumDescriptor, naming: NamingPolicy, enum_names: set[str]) -> list[SemanticError]:
    errors: list[SemanticError] = []
    scope = f"enum '{enum.name}'"
    errors.extend(_check_identifier(enum.name, "enum"))
    type_name = naming.type_name(enum.name)
    if keyword.iskeyword(type_name):
        errors.append(SemanticError(f"Enum name '{enum.name}' generates the Python keyword '{type_name}'"))

    variant_names = [v.name for v in enum.variants]
    errors.extend(_check_duplicates(variant_names, "variant", scope))

    flat = enum.is_flat()
    rename = naming.flat_variant_name if flat else naming.variant_class_name
    class_collisions = _check_naming_collisions(variant_names, rename, "variant", scope)
    errors.extend(class_collisions)
    if not flat and not class_collisions:
        errors.extend(_check_naming_collisions(variant_names, naming.predicate_name, "variant", scope))

    predicates = {naming.predicate_name(name) for name in variant_names} if not flat else set()
    for variant in enum.variants:
        errors.extend(_check_identifier(variant.name, "variant"))
        py_name = rename(variant.name)
        if keyword.iskeyword(py_name):
            message = f"Variant '{variant.name}' in {scope} generates the Python keyword '{py_name}'"
            errors.append(SemanticError(message))
        if py_name in RESERVED_MEMBER_NAMES:
            message = f"Variant '{variant.name}' in {scope} clashes with the generated member '{py_name}'"
            errors.append(SemanticError(message))
        if flat and py_name in RESERVED_FLAT_MEMBER_NAMES:
            message = f"Variant '{variant.name}' in {scope} clashes with the enum attribute '{py_name}'"
            errors.append(SemanticError(message))
        if not flat and py_name in predicates:
            message = f"Variant '{variant.name}' in {scope} generates '{py_name}', which is also a predicate name"
            errors.append(SemanticError(message))
        errors.extend(_check_variant(enum, variant, naming, enum_names, predicates))
    return errors


def _check_variant(
    enum: EnumDescriptor,
    variant: VariantDescriptor,
    naming: NamingPolicy,
    enum_names: set[str],
    predicates: set[str],
) -> list[SemanticError]:
    errors: list[SemanticError] = []
    scope = f"variant '{enum.name}.{variant.name}'"
    field_names = [f.name for f in variant.fields]
    errors.extend(_check_duplicates(field_names, "field", scope))
    errors.extend(_check_naming_collisions(field_names, naming.var_name, "field", scope))

    for field in variant.fields:
        errors.extend(_check_identifier(field.name, "field"))
        py_name = naming.var_name(field.name)
        if py_name in RESERVED_MEMBER_NAMES or py_name in predicates:
            message = f"Field '{field.name}' in {scope} clashes with the generated member '{py_name}'"
            errors.append(SemanticError(message))
        for ref in _named_refs(field.type):
            if ref.name not in enum_names:
                errors.append(SemanticError(f"Field '{field.name}' in {scope} references unknown type '{ref.name}'"))
    return errors


def _named_refs(type_ref: TypeRef) -> list[NamedTypeRef]:
    """Collect every NamedTypeRef nested within *type_ref*."""
    if isinstance(type_ref, NamedTypeRef):
        return [type_ref]
    if isinstance(type_ref, OptionalTypeRef):
        return _named_refs(type_ref.inner_type)
    if isinstance(type_ref, SequenceTypeRef):
        return _named_refs(type_ref.element_type)
    if isinstance(type_ref, MapTypeRef):
        return _named_refs(type_ref.key_type) + _named_refs(type_ref.value_type)
    return []
