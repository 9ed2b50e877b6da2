# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Python code generation for enum descriptors."""

from ffienum.codegen.field_codecs import CodegenError, FieldCodecResolver
from ffienum.codegen.generator import DEFAULT_RUNTIME_MODULE, load_module, render_enum, render_module
from ffienum.codegen.naming import NamingPolicy, VariantCase

__all__ = [
    "CodegenError",
    "DEFAULT_RUNTIME_MODULE",
    "FieldCodecResolver",
    "NamingPolicy",
    "VariantCase",
    "load_module",
    "render_enum",
    "render_module",
]
