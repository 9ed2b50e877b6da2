# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Incremental generation workflow for enum descriptor files.

Implements a CMake-style cache: a source file is skipped when both its
generated module and its descriptor artifact already exist and are
strictly newer than the source, and the artifact records the same naming
policy and runtime module as the current run. Otherwise the file is loaded, analyzed,
checked for wire compatibility against the previous artifact, rendered,
and both outputs are written.

Generated modules mirror the source layout under *output_dir*
(``shapes/geometry.enums.yaml`` becomes ``shapes/geometry.py``) and
artifacts mirror it under *build_dir*.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ffienum.codegen.field_codecs import CodegenError
from ffienum.codegen.generator import DEFAULT_RUNTIME_MODULE, render_module
from ffienum.codegen.naming import NamingPolicy
from ffienum.compiler.artifact import ARTIFACT_SUFFIX, read_artifact, read_generated_with, write_artifact
from ffienum.compiler.semantic_analysis import analyze
from ffienum.compiler.source import DescriptorFormatError, load_source, strip_source_suffix
from ffienum.model.descriptors import DescriptorFile
from ffienum.validation.compat import ValidationWarning, check_compatibility

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when generation encounters any unrecoverable error.

    Covers unreadable or malformed sources, semantic errors, wire
    incompatibilities, and rendering failures.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass
class BuildResult:
    """Outcome of a generation run.

    Attributes:
        descriptors: Canonical key (source path without suffix) to the
            descriptors generated or found up to date.
        written: Keys whose module was (re)generated during this run.
        warnings: Non-fatal compatibility findings.
    """

    descriptors: dict[str, DescriptorFile] = field(default_factory=dict)
    written: list[str] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)


def generate_files(
    files: list[Path],
    source_root: Path,
    build_dir: Path,
    output_dir: Path,
    naming: NamingPolicy | None = None,
    *,
    runtime_module: str = DEFAULT_RUNTIME_MODULE,
    allow_breaking: bool = False,
) -> BuildResult:
    """Generate Python modules for a list of descriptor source files.

    For each file, the generator:
    1. Skips it if the module and artifact are up to date and were generated
       with the same naming policy and runtime module (cache hit).
    2. Loads and parses the source file.
    3. Runs semantic analysis with *naming*.
    4. Compares against the previous artifact, if any. Incompatible changes
       abort generation unless *allow_breaking* is set.
    5. Renders the module into *output_dir* and the artifact into *build_dir*.

    Args:
        files: Absolute paths to descriptor source files under *source_root*.
        source_root: Root directory used to compute canonical keys.
        build_dir: Root directory for descriptor artifacts.
        output_dir: Root directory for generated Python modules.
        naming: Naming policy for generated identifiers.
        runtime_module: Import path of the runtime package in generated code.
        allow_breaking: Regenerate even when the wire layout changed
            incompatibly.

    Returns:
        A :class:`BuildResult` describing the run.

    Raises:
        CompilerError: On any generation failure.
    """
    naming = naming or NamingPolicy()
    result = BuildResult()
    for source_file in files:
        key = source_key(source_file, source_root)
        if key in result.descriptors:
            continue
        result.descriptors[key] = _generate_file(
            source_file,
            key,
            build_dir,
            output_dir,
            naming,
            runtime_module,
            allow_breaking,
            result,
        )
    return result


def artifact_path(key: str, build_dir: Path) -> Path:
    """Return the artifact path for a canonical key.

    The key segments (split on ``/``) map directly to subdirectory components
    under *build_dir* (e.g. ``"shapes/geometry"`` → ``build_dir/shapes/geometry.ffienum.json``).
    """
    return _keyed_path(key, build_dir, ARTIFACT_SUFFIX)


def module_path(key: str, output_dir: Path) -> Path:
    """Return the generated module path for a canonical key."""
    return _keyed_path(key, output_dir, ".py")


def source_key(source_file: Path, source_root: Path) -> str:
    """Return the canonical key for a source file (relative path without suffix).

    Raises:
        CompilerError: If the file is not under *source_root*.
    """
    try:
        rel = source_file.relative_to(source_root)
    except ValueError:
        raise CompilerError(f"Source file '{source_file}' is not under '{source_root}'") from None
    return strip_source_suffix(str(rel).replace("\\", "/"))


# ################
# Implementation
# ################


def _keyed_path(key: str, root: Path, suffix: str) -> Path:
    parts = key.split("/")
    target_dir = root
    for part in parts[:-1]:
        target_dir = target_dir / part
    return target_dir / (parts[-1] + suffix)


def _is_up_to_date(source_file: Path, *outputs: Path) -> bool:
    """Return True if every output exists and is strictly newer than *source_file*."""
    source_mtime = source_file.stat().st_mtime
    return all(out.exists() and out.stat().st_mtime > source_mtime for out in outputs)


def _generation_settings(naming: NamingPolicy, runtime_module: str) -> dict[str, str]:
    return {
        "flat-variant-case": naming.flat_variant_case.value,
        "tagged-variant-case": naming.tagged_variant_case.value,
        "runtime-module": runtime_module,
    }


def _generate_file(
    source_file: Path,
    key: str,
    build_dir: Path,
    output_dir: Path,
    naming: NamingPolicy,
    runtime_module: str,
    allow_breaking: bool,
    result: BuildResult,
) -> DescriptorFile:
    artifact = artifact_path(key, build_dir)
    module = module_path(key, output_dir)
    settings = _generation_settings(naming, runtime_module)

    if _is_up_to_date(source_file, artifact, module):
        try:
            if read_generated_with(artifact) == settings:
                return read_artifact(artifact)
        except (OSError, KeyError, ValueError):
            # A corrupt artifact is treated like a missing one.
            pass

    try:
        descriptor_file = load_source(source_file)
    except DescriptorFormatError as exc:
        raise CompilerError(f"Invalid descriptor file '{source_file}': {exc}") from exc

    errors = analyze(descriptor_file, naming)
    if errors:
        error_lines = "\n".join(f"  {e.message}" for e in errors)
        raise CompilerError(f"Semantic errors in '{source_file}':\n{error_lines}")

    previous = _read_previous_artifact(artifact)
    if previous is not None:
        compat = check_compatibility(previous, descriptor_file)
        if compat.has_errors and not allow_breaking:
            error_lines = "\n".join(f"  {e.message}" for e in compat.errors)
            raise CompilerError(f"Wire-incompatible changes in '{source_file}':\n{error_lines}")
        result.warnings.extend(compat.warnings)

    try:
        source_text = render_module(
            descriptor_file,
            naming,
            runtime_module=runtime_module,
            source_label=key,
        )
    except CodegenError as exc:
        raise CompilerError(f"Code generation failed for '{source_file}': {exc}") from exc

    try:
        module.parent.mkdir(parents=True, exist_ok=True)
        module.write_text(source_text, encoding="utf-8")
        write_artifact(descriptor_file, artifact, settings)
    except OSError as exc:
        raise CompilerError(f"Cannot write output for '{source_file}': {exc}") from exc

    result.written.append(key)
    return descriptor_file


def _read_previous_artifact(artifact: Path) -> DescriptorFile | None:
    if not artifact.exists():
        return None
    try:
        return read_artifact(artifact)
    except (OSError, KeyError, ValueError):
        return None
