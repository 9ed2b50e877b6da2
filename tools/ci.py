#!/usr/bin/env python3
# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI pipeline locally: format, lint, type check, tests, codegen smoke test, and build."""

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """One named CI command, run from the repository root."""

    key: str
    title: str
    command: tuple[str, ...]


STEPS: tuple[Step, ...] = (
    Step("format", "Format check", ("uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/")),
    Step("lint", "Lint", ("uv", "run", "ruff", "check", "src/", "tests/", "tools/")),
    Step("types", "Type check", ("uv", "run", "ty", "check", "src/")),
    Step("tests", "Tests", ("uv", "run", "pytest", "--cov=ffienum", "--cov-report=term-missing")),
    Step("build", "Build", ("uv", "build")),
)


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run FFIEnum CI checks locally.")
    parser.add_argument(
        "--only",
        action="append",
        choices=[*(s.key for s in STEPS), "render"],
        help="Run only this step (repeatable)",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        choices=[*(s.key for s in STEPS), "render"],
        help="Skip this step (repeatable)",
    )
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    args = parser.parse_args()

    root = _repo_root()
    steps = [*STEPS[:-1], *_render_steps(root), STEPS[-1]]
    selected = [s for s in steps if _is_selected(s, args.only, args.skip)]

    results: list[tuple[Step, bool, float]] = []
    for step in selected:
        _print_banner(step.title)
        start = time.monotonic()
        proc = subprocess.run(step.command, cwd=root)
        passed = proc.returncode == 0
        results.append((step, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _print_banner("Summary")
    for step, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {step.title} ({elapsed:.1f}s)"))
    skipped = len(selected) - len(results)
    if skipped:
        print(chalk.yellow(f"  SKIP  {skipped} step(s) after the first failure"))
    print()
    return 0 if all(passed for _, passed, _ in results) and not skipped else 1


# ################
# Implementation
# ################


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _render_steps(root: Path) -> list[Step]:
    """One ``ffienum render`` smoke test per descriptor file in the test data."""
    data_dir = root / "tests" / "data"
    return [
        Step("render", f"Render {path.name}", ("uv", "run", "ffienum", "render", str(path.relative_to(root))))
        for path in sorted(data_dir.glob("*.enums.*"))
    ]


def _is_selected(step: Step, only: list[str] | None, skip: list[str]) -> bool:
    if step.key in skip:
        return False
    return only is None or step.key in only


def _print_banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(f"  {title}"))
    print(sep)


if __name__ == "__main__":
    sys.exit(main())
