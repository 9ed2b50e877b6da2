# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render Python source for enum descriptors.

Each enum is rendered by exactly one of two generators: a flat enum
(a stdlib :class:`enum.Enum` of singleton members) when no variant
carries fields, or a tagged union (a supertype plus one subclass per
variant) otherwise. Both share the same wire framing: a big-endian i32
ordinal, followed for tagged unions by the variant's fields in declared
order.
"""

from __future__ import annotations

import functools
from types import ModuleType
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, pass_context

from ffienum import __version__
from ffienum.codegen.field_codecs import RUNTIME_ALIAS, CodegenError, FieldCodecResolver
from ffienum.codegen.naming import NamingPolicy
from ffienum.model.descriptors import DescriptorFile, EnumDescriptor, VariantDescriptor
from ffienum.model.types import TypeRef

# ###############
# Public Interface
# ###############

DEFAULT_RUNTIME_MODULE = "ffienum.runtime"


def render_enum(descriptor: EnumDescriptor, resolver: FieldCodecResolver) -> str:
    """Render the Python class definitions for one enum.

    Args:
        descriptor: The enum to render.
        resolver: Field codec dispatcher; also supplies the naming policy.

    Returns:
        Source text defining the enum. It expects ``enum`` and the runtime
        package (as ``_rt``) to be importable names in the surrounding module.

    Raises:
        CodegenError: If a field type cannot be resolved or rendering fails.
    """
    template_name = "flat_enum.py.jinja" if descriptor.is_flat() else "tagged_union.py.jinja"
    return _render(template_name, resolver, e=descriptor).strip() + "\n"


def render_module(
    descriptor_file: DescriptorFile,
    naming: NamingPolicy | None = None,
    *,
    runtime_module: str = DEFAULT_RUNTIME_MODULE,
    source_label: str | None = None,
) -> str:
    """Render a complete, importable Python module for every enum in a file.

    Named field types may refer to any enum declared in the same file.
    """
    naming = naming or NamingPolicy()
    resolver = FieldCodecResolver((e.name for e in descriptor_file.enums), naming)
    bodies = [render_enum(e, resolver).rstrip("\n") for e in descriptor_file.enums]
    return _render(
        "module.py.jinja",
        resolver,
        enums=descriptor_file.enums,
        bodies=bodies,
        runtime_module=runtime_module,
        source_label=source_label,
        version=__version__,
    )


def load_module(source: str, module_name: str = "ffienum_generated") -> ModuleType:
    """Execute generated *source* in a fresh module object and return it.

    The module is not registered in :data:`sys.modules`.
    """
    module = ModuleType(module_name)
    code = compile(source, f"<{module_name}>", "exec")
    exec(code, module.__dict__)
    return module


# ################
# Implementation
# ################


def _render(template_name: str, resolver: FieldCodecResolver, **context: Any) -> str:
    env = _environment()
    try:
        template = env.get_template(template_name)
        return template.render(resolver=resolver, naming=resolver.naming, rt=RUNTIME_ALIAS, **context)
    except TemplateError as exc:
        raise CodegenError(f"Failed to render {template_name}: {exc}") from exc


@functools.cache
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("ffienum.codegen", "templates"),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["type_name"] = _type_name_filter
    env.filters["flat_variant"] = _flat_variant_filter
    env.filters["variant_class"] = _variant_class_filter
    env.filters["var_name"] = _var_name_filter
    env.filters["predicate"] = _predicate_filter
    env.filters["read_var"] = _read_var_filter
    env.filters["write_var"] = _write_var_filter
    env.filters["field_tuple"] = _field_tuple_filter
    env.filters["docstring"] = _docstring_filter
    return env


@pass_context
def _type_name_filter(ctx: Any, name: str) -> str:
    return ctx["naming"].type_name(name)


@pass_context
def _flat_variant_filter(ctx: Any, name: str) -> str:
    return ctx["naming"].flat_variant_name(name)


@pass_context
def _variant_class_filter(ctx: Any, name: str) -> str:
    return ctx["naming"].variant_class_name(name)


@pass_context
def _var_name_filter(ctx: Any, name: str) -> str:
    return ctx["naming"].var_name(name)


@pass_context
def _predicate_filter(ctx: Any, name: str) -> str:
    return ctx["naming"].predicate_name(name)


@pass_context
def _read_var_filter(ctx: Any, type_ref: TypeRef, buf: str) -> str:
    return ctx["resolver"].read_expr(type_ref, buf)


@pass_context
def _write_var_filter(ctx: Any, type_ref: TypeRef, value: str, buf: str) -> str:
    return ctx["resolver"].write_stmt(type_ref, value, buf)


@pass_context
def _field_tuple_filter(ctx: Any, variant: VariantDescriptor) -> str:
    return repr(tuple(ctx["naming"].var_name(f.name) for f in variant.fields))


def _docstring_filter(text: str) -> str:
    return " ".join(text.split()).replace("\\", "\\\\").replace('"', '\\"')
