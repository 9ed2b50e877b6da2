# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading enum descriptors from YAML or JSON source files.

A source file declares enums in declaration order::

    enums:
      - name: Color
        variants: [Red, Green, Blue]
      - name: Shape
        variants:
          - name: Circle
            fields:
              - {name: radius, type: f64}
          - name: Origin

Field types are written as type expressions: a primitive name (``i32``,
``f64``, ``string``, ...), ``optional<T>``, ``sequence<T>``,
``map<K, V>``, or the name of another enum in the same file.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

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
)

# ###############
# Public Interface
# ###############

SOURCE_SUFFIXES = (".enums.yaml", ".enums.yml", ".enums.json")


class DescriptorFormatError(Exception):
    """Raised when a descriptor source file is malformed."""


def is_source_file(path: Path) -> bool:
    """Return True if *path* has one of the recognised source suffixes."""
    return path.name.endswith(SOURCE_SUFFIXES)


def strip_source_suffix(name: str) -> str:
    """Remove the source suffix from a file name or relative path."""
    for suffix in SOURCE_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def load_source(path: Path) -> DescriptorFile:
    """Read and parse the descriptor source file at *path*.

    Raises:
        DescriptorFormatError: If the file cannot be read or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptorFormatError(f"Cannot read descriptor file '{path}': {exc}") from exc
    return parse_source(text, source_label=str(path), is_json=path.name.endswith(".json"))


def parse_source(text: str, source_label: str = "<string>", *, is_json: bool = False) -> DescriptorFile:
    """Parse descriptor source text into a :class:`DescriptorFile`.

    Args:
        text: Raw YAML (or JSON, when *is_json* is set) content.
        source_label: Human-readable label used in error messages.
        is_json: Parse *text* as JSON instead of YAML.

    Raises:
        DescriptorFormatError: If the text is not a valid descriptor document.
    """
    try:
        data = json.loads(text) if is_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DescriptorFormatError(f"Invalid {'JSON' if is_json else 'YAML'} in {source_label}: {exc}") from exc

    if data is None:
        return DescriptorFile()
    if not isinstance(data, dict):
        raise DescriptorFormatError(f"{source_label}: descriptor file must be a mapping")

    raw_enums = data.get("enums", [])
    if not isinstance(raw_enums, list):
        raise DescriptorFormatError(f"{source_label}: 'enums' must be a list")

    enums = [_parse_enum(entry, f"{source_label}: enums[{index}]") for index, entry in enumerate(raw_enums)]
    return DescriptorFile(enums=tuple(enums))


def parse_type_expr(text: str) -> TypeRef:
    """Parse a type expression such as ``map<string, sequence<i32>>``.

    Raises:
        DescriptorFormatError: If *text* is not a valid type expression.
    """
    tokens = _tokenize_type_expr(text)
    type_ref, pos = _parse_type(tokens, 0, text)
    if pos != len(tokens):
        raise DescriptorFormatError(f"Invalid type expression {text!r}: unexpected '{tokens[pos]}'")
    return type_ref


# ################
# Implementation
# ################

_TOKEN_RE = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|([<>,]))")

_PRIMITIVE_ALIASES: dict[str, PrimitiveType] = {
    **{p.value: p for p in PrimitiveType},
    "float": PrimitiveType.F32,
    "double": PrimitiveType.F64,
    "boolean": PrimitiveType.BOOL,
}

_CONTAINER_ARITY = {"optional": 1, "sequence": 1, "map": 2}


def _tokenize_type_expr(text: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        match = _TOKEN_RE.match(stripped, pos)
        if match is None:
            raise DescriptorFormatError(f"Invalid type expression {text!r}: unexpected character at {pos}")
        tokens.append(match.group(1) or match.group(2))
        pos = match.end()
    if not tokens:
        raise DescriptorFormatError("Empty type expression")
    return tokens


def _parse_type(tokens: list[str], pos: int, text: str) -> tuple[TypeRef, int]:
    if pos >= len(tokens):
        raise DescriptorFormatError(f"Invalid type expression {text!r}: unexpected end")
    name = tokens[pos]
    if not (name[0].isalpha() or name[0] == "_"):
        raise DescriptorFormatError(f"Invalid type expression {text!r}: expected a type name, got '{name}'")
    pos += 1

    if name not in _CONTAINER_ARITY:
        if pos < len(tokens) and tokens[pos] == "<":
            raise DescriptorFormatError(f"Invalid type expression {text!r}: '{name}' takes no type arguments")
        if name in _PRIMITIVE_ALIASES:
            return PrimitiveTypeRef(primitive=_PRIMITIVE_ALIASES[name]), pos
        return NamedTypeRef(name=name), pos

    if pos >= len(tokens) or tokens[pos] != "<":
        raise DescriptorFormatError(f"Invalid type expression {text!r}: '{name}' requires type arguments")
    pos += 1
    args: list[TypeRef] = []
    while True:
        arg, pos = _parse_type(tokens, pos, text)
        args.append(arg)
        if pos < len(tokens) and tokens[pos] == ",":
            pos += 1
            continue
        break
    if pos >= len(tokens) or tokens[pos] != ">":
        raise DescriptorFormatError(f"Invalid type expression {text!r}: missing '>'")
    pos += 1

    if len(args) != _CONTAINER_ARITY[name]:
        raise DescriptorFormatError(
            f"Invalid type expression {text!r}: '{name}' takes {_CONTAINER_ARITY[name]} type argument(s)"
        )
    if name == "optional":
        return OptionalTypeRef(inner_type=args[0]), pos
    if name == "sequence":
        return SequenceTypeRef(element_type=args[0]), pos
    return MapTypeRef(key_type=args[0], value_type=args[1]), pos


def _require_string(mapping: dict[str, Any], key: str, location: str) -> str:
    if key not in mapping:
        raise DescriptorFormatError(f"{location}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise DescriptorFormatError(f"{location}: '{key}' must be a string")
    return value


def _optional_string(mapping: dict[str, Any], key: str, location: str) -> str | None:
    value = mapping.get(key)
    if value is not None and not isinstance(value, str):
        raise DescriptorFormatError(f"{location}: '{key}' must be a string")
    return value


def _parse_enum(entry: object, location: str) -> EnumDescriptor:
    if not isinstance(entry, dict):
        raise DescriptorFormatError(f"{location} must be a mapping")
    name = _require_string(entry, "name", location)
    raw_variants = entry.get("variants")
    if not isinstance(raw_variants, list) or not raw_variants:
        raise DescriptorFormatError(f"{location} '{name}': 'variants' must be a non-empty list")
    variants = [
        _parse_variant(raw, f"{location} '{name}': variants[{index}]") for index, raw in enumerate(raw_variants)
    ]
    try:
        return EnumDescriptor(
            name=name,
            variants=tuple(variants),
            description=_optional_string(entry, "description", location),
        )
    except ValidationError as exc:
        raise DescriptorFormatError(f"{location} '{name}': {exc}") from exc


def _parse_variant(entry: object, location: str) -> VariantDescriptor:
    # A bare string is shorthand for a variant without fields.
    if isinstance(entry, str):
        return VariantDescriptor(name=entry)
    if not isinstance(entry, dict):
        raise DescriptorFormatError(f"{location} must be a string or a mapping")
    name = _require_string(entry, "name", location)
    raw_fields = entry.get("fields", [])
    if not isinstance(raw_fields, list):
        raise DescriptorFormatError(f"{location} '{name}': 'fields' must be a list")
    fields = [_parse_field(raw, f"{location} '{name}': fields[{index}]") for index, raw in enumerate(raw_fields)]
    return VariantDescriptor(
        name=name,
        fields=tuple(fields),
        description=_optional_string(entry, "description", location),
    )


def _parse_field(entry: object, location: str) -> FieldDescriptor:
    if not isinstance(entry, dict):
        raise DescriptorFormatError(f"{location} must be a mapping")
    name = _require_string(entry, "name", location)
    type_text = _require_string(entry, "type", location)
    try:
        type_ref = parse_type_expr(type_text)
    except DescriptorFormatError as exc:
        raise DescriptorFormatError(f"{location} '{name}': {exc}") from exc
    return FieldDescriptor(name=name, type=type_ref, description=_optional_string(entry, "description", location))
