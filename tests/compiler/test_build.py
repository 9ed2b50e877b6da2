# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the FFIEnum incremental generation workflow."""

from __future__ import annotations

import importlib.util
import os
import shutil
import time
from pathlib import Path
from types import ModuleType

import pytest

from ffienum.codegen import NamingPolicy, VariantCase
from ffienum.compiler.artifact import read_artifact, read_generated_with
from ffienum.compiler.build import CompilerError, artifact_path, generate_files, module_path, source_key

DATA_DIR = Path(__file__).parent.parent / "data"

COLOR_V1 = "enums: [{name: Color, variants: [Red, Green, Blue]}]\n"

# ###############
# Helpers
# ###############


def _write(path: Path, content: str, *, mtime_offset: float = -2.0) -> None:
    """Write *content* to *path*, creating parent directories as needed.

    Sets the file's mtime to *mtime_offset* seconds relative to now (default:
    2 seconds in the past) so that subsequently written outputs are reliably
    newer regardless of filesystem timestamp resolution.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    t = time.time() + mtime_offset
    os.utime(path, (t, t))


def _generate(tmp_path: Path, files: list[Path], **kwargs):
    return generate_files(files, tmp_path / "src", tmp_path / "build", tmp_path / "out", **kwargs)


def _import_file(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(path.stem, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# ###############
# Paths and keys
# ###############


class TestPaths:
    def test_source_key_strips_suffix(self, tmp_path: Path) -> None:
        assert source_key(tmp_path / "net" / "events.enums.json", tmp_path) == "net/events"

    def test_source_key_outside_root(self, tmp_path: Path) -> None:
        with pytest.raises(CompilerError, match="is not under"):
            source_key(Path("/elsewhere/a.enums.yaml"), tmp_path)

    def test_artifact_and_module_paths_mirror_the_key(self, tmp_path: Path) -> None:
        assert artifact_path("net/events", tmp_path) == tmp_path / "net" / "events.ffienum.json"
        assert module_path("net/events", tmp_path) == tmp_path / "net" / "events.py"


# ###############
# Single-file generation
# ###############


class TestSingleFile:
    def test_generates_module_and_artifact(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        result = _generate(tmp_path, [source])
        assert result.written == ["colors"]
        assert result.descriptors["colors"].enums[0].name == "Color"
        assert (tmp_path / "out" / "colors.py").exists()
        assert read_artifact(tmp_path / "build" / "colors.ffienum.json") == result.descriptors["colors"]

    def test_generated_module_is_importable(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "shapes.enums.yaml"
        source.parent.mkdir(parents=True)
        shutil.copy(DATA_DIR / "shapes.enums.yaml", source)
        os.utime(source, (time.time() - 2, time.time() - 2))
        _generate(tmp_path, [source])

        module = _import_file(tmp_path / "out" / "shapes.py")
        circle = module.Shape.Circle(radius=2.0)
        assert module.Shape.lift(circle.lower()) == circle
        assert module.Color.lift(b"\x00\x00\x00\x02") is module.Color.GREEN

    def test_module_header_names_the_source_key(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "net" / "events.enums.json"
        _write(source, (DATA_DIR / "events.enums.json").read_text(encoding="utf-8"))
        _generate(tmp_path, [source])
        text = (tmp_path / "out" / "net" / "events.py").read_text(encoding="utf-8")
        assert "# Source: net/events" in text

    def test_runtime_module_and_naming_are_applied(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        naming = NamingPolicy(flat_variant_case=VariantCase.PRESERVE)
        _generate(tmp_path, [source], naming=naming, runtime_module="vendor.ffirt")
        text = (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")
        assert "import vendor.ffirt as _rt" in text
        assert "    Green = 2" in text

    def test_same_file_listed_twice_is_generated_once(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        result = _generate(tmp_path, [source, source])
        assert result.written == ["colors"]

    def test_no_files(self, tmp_path: Path) -> None:
        result = _generate(tmp_path, [])
        assert result.descriptors == {}
        assert result.written == []


# ###############
# Cache behaviour
# ###############


class TestCache:
    def test_cache_hit_skips_regeneration(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])
        module = tmp_path / "out" / "colors.py"
        mtime_first = module.stat().st_mtime

        result = _generate(tmp_path, [source])
        assert result.written == []
        assert result.descriptors["colors"].enums[0].name == "Color"
        assert module.stat().st_mtime == mtime_first

    def test_newer_source_triggers_regeneration(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        _write(source, "enums: [{name: Color, variants: [Red, Green, Blue, Cyan]}]\n", mtime_offset=2.0)
        result = _generate(tmp_path, [source])
        assert result.written == ["colors"]
        assert "    CYAN = 4" in (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")

    def test_missing_module_triggers_regeneration(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])
        (tmp_path / "out" / "colors.py").unlink()

        result = _generate(tmp_path, [source])
        assert result.written == ["colors"]
        assert (tmp_path / "out" / "colors.py").exists()

    def test_corrupt_artifact_is_regenerated(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])
        _write(tmp_path / "build" / "colors.ffienum.json", "not json", mtime_offset=2.0)

        result = _generate(tmp_path, [source])
        assert result.written == ["colors"]
        assert read_artifact(tmp_path / "build" / "colors.ffienum.json").enums[0].name == "Color"


    def test_changed_naming_policy_triggers_regeneration(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        result = _generate(tmp_path, [source], naming=NamingPolicy(flat_variant_case=VariantCase.PRESERVE))
        assert result.written == ["colors"]
        text = (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")
        assert "    Red = 1" in text
        assert "RED" not in text

    def test_changed_runtime_module_triggers_regeneration(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        result = _generate(tmp_path, [source], runtime_module="vendored.ffi_runtime")
        assert result.written == ["colors"]
        assert "vendored.ffi_runtime" in (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")

    def test_artifact_records_generation_settings(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source], naming=NamingPolicy(tagged_variant_case=VariantCase.PRESERVE))

        assert read_generated_with(tmp_path / "build" / "colors.ffienum.json") == {
            "flat-variant-case": "shouty",
            "tagged-variant-case": "preserve",
            "runtime-module": "ffienum.runtime",
        }

# ###############
# Wire compatibility
# ###############


class TestCompatibility:
    def test_reordering_variants_blocks_generation(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        _write(source, "enums: [{name: Color, variants: [Green, Red, Blue]}]\n", mtime_offset=2.0)
        with pytest.raises(CompilerError, match="Wire-incompatible changes") as exc_info:
            _generate(tmp_path, [source])
        assert "Ordinal 1 of enum 'Color' changed from 'Red' to 'Green'" in str(exc_info.value)
        assert "    RED = 1" in (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")

    def test_allow_breaking_regenerates(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        _write(source, "enums: [{name: Color, variants: [Green, Red, Blue]}]\n", mtime_offset=2.0)
        result = _generate(tmp_path, [source], allow_breaking=True)
        assert result.written == ["colors"]
        assert "    GREEN = 1" in (tmp_path / "out" / "colors.py").read_text(encoding="utf-8")

    def test_appended_variant_is_a_warning(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "colors.enums.yaml"
        _write(source, COLOR_V1)
        _generate(tmp_path, [source])

        _write(source, "enums: [{name: Color, variants: [Red, Green, Blue, Cyan]}]\n", mtime_offset=2.0)
        result = _generate(tmp_path, [source])
        assert [w.message for w in result.warnings] == [
            "Enum 'Color' gained variant(s) 'Cyan'; decoders generated before this change reject ordinals above 3"
        ]


# ###############
# Error cases
# ###############


class TestErrorCases:
    def test_malformed_source(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "bad.enums.yaml"
        _write(source, "enums: Color\n")
        with pytest.raises(CompilerError, match="Invalid descriptor file"):
            _generate(tmp_path, [source])

    def test_semantic_errors_are_listed(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "bad.enums.yaml"
        _write(source, "enums: [{name: E, variants: [A, A, {name: V, fields: [{name: f, type: Ghost}]}]}]\n")
        with pytest.raises(CompilerError) as exc_info:
            _generate(tmp_path, [source])
        message = str(exc_info.value)
        assert message.startswith(f"Semantic errors in '{source}'")
        assert "Duplicate variant name 'A'" in message
        assert "references unknown type 'Ghost'" in message

    def test_nothing_is_written_on_error(self, tmp_path: Path) -> None:
        source = tmp_path / "src" / "bad.enums.yaml"
        _write(source, "enums: [{name: E, variants: [A, A]}]\n")
        with pytest.raises(CompilerError):
            _generate(tmp_path, [source])
        assert not (tmp_path / "out").exists()
        assert not (tmp_path / "build").exists()
