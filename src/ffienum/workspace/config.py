# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the FFIEnum workspace configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ffienum.codegen.generator import DEFAULT_RUNTIME_MODULE
from ffienum.codegen.naming import NamingPolicy, VariantCase

# ###############
# Public Interface
# ###############

WORKSPACE_FILE_NAME = ".ffienum.yaml"


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for an FFIEnum workspace.

    Attributes:
        build_directory: Relative path (from the workspace root) for descriptor artifacts.
        output_directory: Relative path (from the workspace root) for generated modules.
        runtime_module: Import path of the runtime package used by generated modules.
        naming: Naming policy for generated identifiers.
    """

    build_directory: str
    output_directory: str
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    naming: NamingPolicy = field(default_factory=NamingPolicy)


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse an FFIEnum workspace configuration file.

    Args:
        path: Path to the `.ffienum.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return _parse_workspace_config(text, source_label=str(path))


def default_workspace_config_text() -> str:
    """Return the content written by ``ffienum init``."""
    return (
        "# FFIEnum Workspace Configuration\n"
        "# This file marks the root of an FFIEnum workspace.\n"
        "\n"
        "build-directory: .ffienum-build\n"
        "output-directory: generated\n"
        f"runtime-module: {DEFAULT_RUNTIME_MODULE}\n"
        "naming:\n"
        f"  flat-variant-case: {VariantCase.SHOUTY.value}\n"
        f"  tagged-variant-case: {VariantCase.CAMEL.value}\n"
    )


# ################
# Implementation
# ################


def _parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A WorkspaceConfig instance.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    build_directory = _require_string(data, "build-directory", source_label)
    output_directory = _require_string(data, "output-directory", source_label)

    runtime_module = DEFAULT_RUNTIME_MODULE
    if "runtime-module" in data:
        runtime_module = _require_string(data, "runtime-module", source_label)

    naming = NamingPolicy()
    if "naming" in data:
        naming = _parse_naming(data["naming"], f"{source_label}: naming")

    return WorkspaceConfig(
        build_directory=build_directory,
        output_directory=output_directory,
        runtime_module=runtime_module,
        naming=naming,
    )


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising WorkspaceConfigError if missing."""
    if key not in mapping:
        raise WorkspaceConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _parse_naming(entry: object, location: str) -> NamingPolicy:
    """Parse the optional naming section."""
    if not isinstance(entry, dict):
        raise WorkspaceConfigError(f"{location} must be a YAML mapping")

    defaults = NamingPolicy()
    flat_case = defaults.flat_variant_case
    tagged_case = defaults.tagged_variant_case
    if "flat-variant-case" in entry:
        flat_case = _parse_case(entry, "flat-variant-case", location)
    if "tagged-variant-case" in entry:
        tagged_case = _parse_case(entry, "tagged-variant-case", location)
    return NamingPolicy(flat_variant_case=flat_case, tagged_variant_case=tagged_case)


def _parse_case(entry: dict[str, object], key: str, location: str) -> VariantCase:
    value = _require_string(entry, key, location)
    try:
        return VariantCase(value)
    except ValueError:
        allowed = ", ".join(c.value for c in VariantCase)
        raise WorkspaceConfigError(f"{location}: '{key}' must be one of {allowed}, got '{value}'") from None
