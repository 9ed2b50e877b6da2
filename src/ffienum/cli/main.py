# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the FFIEnum command-line interface."""

import argparse
import sys
from pathlib import Path

from ffienum.compiler.build import CompilerError, artifact_path, generate_files, source_key
from ffienum.compiler.semantic_analysis import analyze
from ffienum.compiler.source import DescriptorFormatError, is_source_file, load_source
from ffienum.workspace.config import (
    WORKSPACE_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_workspace_config_text,
    load_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the FFIEnum CLI."""
    parser = argparse.ArgumentParser(
        prog="ffienum",
        description="FFIEnum: enum bindings and byte-buffer codecs from enum descriptors",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new FFIEnum workspace",
        description=f"Create a default {WORKSPACE_FILE_NAME} in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check descriptor files for errors and wire-incompatible changes",
        description="Validate every descriptor file in the workspace without generating code.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the FFIEnum workspace (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Python modules for every descriptor file",
        description="Generate Python enum modules, skipping files that are already up to date.",
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the FFIEnum workspace (default: current directory)",
    )
    generate_parser.add_argument(
        "--allow-breaking",
        action="store_true",
        help="Regenerate even when variants or fields changed incompatibly",
    )

    # render subcommand
    render_parser = subparsers.add_parser(
        "render",
        help="Print the generated module for a single descriptor file",
        description=(
            "Render one descriptor file and print it to stdout. The naming policy and runtime module come from "
            "the nearest enclosing workspace, or the defaults when the file is outside any workspace."
        ),
    )
    render_parser.add_argument("file", help="Descriptor file (.enums.yaml, .enums.yml, or .enums.json)")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "render":
        return _cmd_render(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    workspace_file = directory / WORKSPACE_FILE_NAME

    if workspace_file.exists():
        print(
            f"Error: workspace already exists at '{workspace_file}'.",
            file=sys.stderr,
        )
        return 1

    workspace_file.write_text(default_workspace_config_text(), encoding="utf-8")
    print(f"Initialized FFIEnum workspace at '{workspace_file}'.")
    return 0


def _load_workspace(directory: Path) -> WorkspaceConfig | None:
    """Load the workspace config in *directory*, printing an error on failure."""
    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return None

    workspace_file = directory / WORKSPACE_FILE_NAME
    if not workspace_file.exists():
        print(
            f"Error: no FFIEnum workspace found at '{directory}'. Run 'ffienum init' to initialize a workspace.",
            file=sys.stderr,
        )
        return None

    try:
        return load_workspace_config(workspace_file)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _find_sources(directory: Path, config: WorkspaceConfig) -> list[Path]:
    build_dir = (directory / config.build_directory).resolve()
    output_dir = (directory / config.output_directory).resolve()
    return sorted(
        f
        for f in directory.rglob("*")
        if f.is_file() and is_source_file(f) and build_dir not in f.parents and output_dir not in f.parents
    )


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    from ffienum.compiler.artifact import read_artifact
    from ffienum.validation.compat import check_compatibility

    directory = Path(args.directory).resolve()
    config = _load_workspace(directory)
    if config is None:
        return 1

    sources = _find_sources(directory, config)
    if not sources:
        print("No descriptor files found in the workspace.")
        return 0

    print(f"Checking {len(sources)} descriptor file(s)...")
    build_dir = directory / config.build_directory
    has_errors = False
    for source in sources:
        try:
            descriptor_file = load_source(source)
        except DescriptorFormatError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            has_errors = True
            continue

        for error in analyze(descriptor_file, config.naming):
            print(f"Error: {source.name}: {error.message}", file=sys.stderr)
            has_errors = True

        artifact = artifact_path(source_key(source, directory), build_dir)
        if not artifact.exists():
            continue
        try:
            previous = read_artifact(artifact)
        except (OSError, KeyError, ValueError) as exc:
            print(f"Warning: ignoring unreadable artifact '{artifact}': {exc}")
            continue
        result = check_compatibility(previous, descriptor_file)
        for warning in result.warnings:
            print(f"Warning: {source.name}: {warning.message}")
        for error in result.errors:
            print(f"Error: {source.name}: {error.message}", file=sys.stderr)
            has_errors = True

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    directory = Path(args.directory).resolve()
    config = _load_workspace(directory)
    if config is None:
        return 1

    sources = _find_sources(directory, config)
    if not sources:
        print("No descriptor files found in the workspace.")
        return 0

    print(f"Generating {len(sources)} descriptor file(s)...")
    try:
        result = generate_files(
            sources,
            directory,
            directory / config.build_directory,
            directory / config.output_directory,
            config.naming,
            runtime_module=config.runtime_module,
            allow_breaking=args.allow_breaking,
        )
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for key in result.written:
        print(f"  {key}: generated")
    up_to_date = len(result.descriptors) - len(result.written)
    print(f"Done: {len(result.written)} generated, {up_to_date} up to date.")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    """Handle the render subcommand."""
    from ffienum.codegen.field_codecs import CodegenError
    from ffienum.codegen.generator import DEFAULT_RUNTIME_MODULE, render_module
    from ffienum.codegen.naming import NamingPolicy

    source = Path(args.file)
    try:
        config = _find_enclosing_workspace(source.resolve().parent)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    naming = config.naming if config else NamingPolicy()
    runtime_module = config.runtime_module if config else DEFAULT_RUNTIME_MODULE

    try:
        descriptor_file = load_source(source)
    except DescriptorFormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    errors = analyze(descriptor_file, naming)
    for error in errors:
        print(f"Error: {error.message}", file=sys.stderr)
    if errors:
        return 1

    try:
        text = render_module(
            descriptor_file,
            naming,
            runtime_module=runtime_module,
            source_label=source.name,
        )
        print(text, end="")
    except CodegenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _find_enclosing_workspace(directory: Path) -> WorkspaceConfig | None:
    """Load the workspace config of *directory* or its nearest ancestor that has one."""
    for candidate in (directory, *directory.parents):
        workspace_file = candidate / WORKSPACE_FILE_NAME
        if workspace_file.exists():
            return load_workspace_config(workspace_file)
    return None
