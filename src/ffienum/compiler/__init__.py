# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation pipeline for descriptor files: loading, analysis, artifacts, and builds."""

from ffienum.compiler.artifact import (
    ARTIFACT_SUFFIX,
    deserialize,
    read_artifact,
    read_generated_with,
    serialize,
    write_artifact,
)
from ffienum.compiler.build import BuildResult, CompilerError, generate_files
from ffienum.compiler.semantic_analysis import SemanticError, analyze
from ffienum.compiler.source import (
    SOURCE_SUFFIXES,
    DescriptorFormatError,
    load_source,
    parse_source,
    parse_type_expr,
)
from ffienum.model.types import format_type_expr

__all__ = [
    "load_source",
    "parse_source",
    "parse_type_expr",
    "format_type_expr",
    "DescriptorFormatError",
    "SOURCE_SUFFIXES",
    "analyze",
    "SemanticError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "read_generated_with",
    "ARTIFACT_SUFFIX",
    "generate_files",
    "BuildResult",
    "CompilerError",
]
