# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of descriptor snapshots recorded at generation time.

Each generated module is accompanied by an artifact holding the exact
descriptors it was generated from. The next generation run compares
against it to detect wire-incompatible changes.

Artifacts are compact JSON. Field types are stored as canonical type
expressions (``map<string, i64>``), the same notation descriptor files use,
so an artifact stays readable in a diff. The top-level ``v`` key versions
the layout. An optional ``gen`` object records the settings the module
was generated with, so a change to them invalidates the generation cache.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ffienum.compiler.source import DescriptorFormatError, parse_type_expr
from ffienum.model.descriptors import DescriptorFile, EnumDescriptor, VariantDescriptor
from ffienum.model.types import FieldDescriptor, format_type_expr

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".ffienum.json"


def serialize(descriptor_file: DescriptorFile, generated_with: dict[str, str] | None = None) -> str:
    """Return the compact JSON text for *descriptor_file*.

    *generated_with* maps setting names to the values the module was
    rendered with and is stored under ``gen`` when given.
    """
    obj: dict[str, Any] = {"v": ARTIFACT_FORMAT_VERSION, "enums": [_dump_enum(e) for e in descriptor_file.enums]}
    if generated_with is not None:
        obj["gen"] = dict(generated_with)
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str) -> DescriptorFile:
    """Rebuild a DescriptorFile from text produced by :func:`serialize`.

    Raises:
        ValueError: If the text is not JSON, carries another format version,
            or holds an unparsable type expression.
        KeyError: If a required key is missing.
    """
    obj = json.loads(data)
    if not isinstance(obj, dict) or obj.get("v") != ARTIFACT_FORMAT_VERSION:
        found = obj.get("v") if isinstance(obj, dict) else None
        raise ValueError(f"Unsupported artifact format version: {found!r}")
    return DescriptorFile(enums=tuple(_load_enum(e) for e in obj["enums"]))


def write_artifact(
    descriptor_file: DescriptorFile,
    path: Path,
    generated_with: dict[str, str] | None = None,
) -> None:
    """Write the artifact for *descriptor_file* to *path*, creating directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(descriptor_file, generated_with), encoding="utf-8")


def read_artifact(path: Path) -> DescriptorFile:
    return deserialize(path.read_text(encoding="utf-8"))


def read_generated_with(path: Path) -> dict[str, str]:
    """Return the generation settings recorded in the artifact at *path*.

    Artifacts written without settings yield an empty dict.
    """
    obj = json.loads(path.read_text(encoding="utf-8"))
    gen = obj.get("gen") if isinstance(obj, dict) else None
    if not isinstance(gen, dict):
        return {}
    return {str(k): str(v) for k, v in gen.items()}


# ################
# Implementation
# ################


def _with_description(obj: dict[str, Any], description: str | None) -> dict[str, Any]:
    if description is not None:
        obj["description"] = description
    return obj


def _dump_enum(enum: EnumDescriptor) -> dict[str, Any]:
    variants = [_dump_variant(v) for v in enum.variants]
    return _with_description({"name": enum.name, "variants": variants}, enum.description)


def _dump_variant(variant: VariantDescriptor) -> dict[str, Any]:
    obj: dict[str, Any] = {"name": variant.name}
    if variant.fields:
        obj["fields"] = [
            _with_description({"name": f.name, "type": format_type_expr(f.type)}, f.description)
            for f in variant.fields
        ]
    return _with_description(obj, variant.description)


def _load_enum(obj: dict[str, Any]) -> EnumDescriptor:
    return EnumDescriptor(
        name=obj["name"],
        variants=tuple(_load_variant(v) for v in obj["variants"]),
        description=obj.get("description"),
    )


def _load_variant(obj: dict[str, Any]) -> VariantDescriptor:
    fields = tuple(_load_field(f) for f in obj.get("fields", ()))
    return VariantDescriptor(name=obj["name"], fields=fields, description=obj.get("description"))


def _load_field(obj: dict[str, Any]) -> FieldDescriptor:
    type_text = obj["type"]
    if not isinstance(type_text, str):
        raise ValueError(f"Artifact field '{obj['name']}' has a non-string type")
    try:
        type_ref = parse_type_expr(type_text)
    except DescriptorFormatError as exc:
        raise ValueError(f"Artifact field '{obj['name']}' has an invalid type: {exc}") from exc
    return FieldDescriptor(name=obj["name"], type=type_ref, description=obj.get("description"))
