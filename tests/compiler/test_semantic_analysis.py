# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the FFIEnum semantic analysis module."""

from ffienum.codegen import NamingPolicy, VariantCase
from ffienum.compiler.semantic_analysis import SemanticError, analyze
from ffienum.compiler.source import parse_source
from ffienum.model import DescriptorFile, EnumDescriptor, FieldDescriptor, NamedTypeRef, VariantDescriptor

# ###############
# Test Helpers
# ###############


def _analyze(source: str, naming: NamingPolicy | None = None) -> list[SemanticError]:
    """Parse source and run semantic analysis."""
    return analyze(parse_source(source), naming)


def _messages(errors: list[SemanticError]) -> list[str]:
    """Extract error messages from a list of SemanticError instances."""
    return [e.message for e in errors]


def _assert_clean(source: str, naming: NamingPolicy | None = None) -> None:
    """Assert that a source string produces no semantic errors."""
    errors = _analyze(source, naming)
    assert errors == [], f"Expected no errors but got: {_messages(errors)}"


def _assert_error(source: str, expected_fragment: str, naming: NamingPolicy | None = None) -> None:
    """Assert that at least one semantic error containing expected_fragment is produced."""
    messages = _messages(_analyze(source, naming))
    assert any(expected_fragment in m for m in messages), (
        f"Expected error containing {expected_fragment!r} but got: {messages}"
    )


def _tagged(variant_names: list[str]) -> str:
    variants = ", ".join(f"{{name: {name}, fields: [{{name: x, type: i32}}]}}" for name in variant_names)
    return f"enums: [{{name: E, variants: [{variants}]}}]"


# ###############
# Clean Files
# ###############


class TestCleanFile:
    def test_empty_file_has_no_errors(self) -> None:
        _assert_clean("")

    def test_flat_enum(self) -> None:
        _assert_clean("enums: [{name: Color, variants: [Red, Green, Blue]}]")

    def test_tagged_union_with_nested_enum(self) -> None:
        _assert_clean(
            """
enums:
  - name: Color
    variants: [Red]
  - name: Shape
    variants:
      - name: Circle
        fields: [{name: radius, type: f64}, {name: fill, type: optional<Color>}]
      - name: Group
        fields: [{name: members, type: sequence<Shape>}]
"""
        )

    def test_same_field_name_in_different_variants(self) -> None:
        _assert_clean(_tagged(["A", "B"]))

    def test_same_variant_name_in_different_enums(self) -> None:
        _assert_clean("enums: [{name: A, variants: [X]}, {name: B, variants: [X]}]")

    def test_soft_keyword_field_name(self) -> None:
        _assert_clean("enums: [{name: E, variants: [{name: V, fields: [{name: match, type: u8}]}]}]")

    def test_keyword_field_name_is_renamed(self) -> None:
        _assert_clean("enums: [{name: E, variants: [{name: V, fields: [{name: class, type: u8}]}]}]")


# ###############
# Identifiers
# ###############


class TestIdentifiers:
    def test_enum_name_must_be_identifier(self) -> None:
        _assert_error("enums: [{name: 'Bad Name', variants: [A]}]", "Invalid enum name 'Bad Name'")

    def test_variant_name_must_be_identifier(self) -> None:
        _assert_error("enums: [{name: E, variants: ['1st']}]", "Invalid variant name '1st'")

    def test_field_name_must_be_identifier(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: 'a-b', type: u8}]}]}]",
            "Invalid field name 'a-b'",
        )

    def test_leading_underscore_is_rejected(self) -> None:
        _assert_error("enums: [{name: E, variants: [_Hidden]}]", "must not start with an underscore")


# ###############
# Duplicates and naming collisions
# ###############


class TestDuplicates:
    def test_duplicate_enum(self) -> None:
        _assert_error(
            "enums: [{name: A, variants: [X]}, {name: A, variants: [Y]}]",
            "Duplicate enum name 'A' in file",
        )

    def test_duplicate_variant(self) -> None:
        _assert_error("enums: [{name: E, variants: [A, B, A]}]", "Duplicate variant name 'A' in enum 'E'")

    def test_duplicate_field(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: a, type: u8}, {name: a, type: i8}]}]}]",
            "Duplicate field name 'a' in variant 'E.V'",
        )

    def test_each_duplicate_reported_once(self) -> None:
        errors = _analyze("enums: [{name: E, variants: [A, B, A]}]")
        assert len(errors) == 1


class TestNamingCollisions:
    def test_flat_variants_colliding_after_shouty_case(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [redLight, red_light]}]",
            "Variant names 'redLight' and 'red_light' in enum 'E' both generate 'RED_LIGHT'",
        )

    def test_flat_variants_distinct_when_preserved(self) -> None:
        naming = NamingPolicy(flat_variant_case=VariantCase.PRESERVE)
        _assert_clean("enums: [{name: E, variants: [redLight, red_light]}]", naming)

    def test_tagged_variants_colliding_after_camel_case(self) -> None:
        _assert_error(_tagged(["open_file", "OpenFile"]), "both generate 'OpenFile'")

    def test_tagged_predicates_colliding_when_preserved(self) -> None:
        naming = NamingPolicy(tagged_variant_case=VariantCase.PRESERVE)
        _assert_error(_tagged(["open_file", "OpenFile"]), "both generate 'is_open_file'", naming)

    def test_enum_names_colliding(self) -> None:
        _assert_error(
            "enums: [{name: http_status, variants: [A]}, {name: HttpStatus, variants: [B]}]",
            "both generate 'HttpStatus'",
        )

    def test_field_names_colliding(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: peerId, type: u8}, {name: peer_id, type: u8}]}]}]",
            "both generate 'peer_id'",
        )


# ###############
# Generated names
# ###############


class TestGeneratedNames:
    def test_enum_generating_keyword(self) -> None:
        _assert_error("enums: [{name: none, variants: [A]}]", "generates the Python keyword 'None'")

    def test_tagged_variant_generating_keyword(self) -> None:
        _assert_error(_tagged(["none"]), "Variant 'none' in enum 'E' generates the Python keyword 'None'")

    def test_flat_variant_generating_keyword_when_preserved(self) -> None:
        naming = NamingPolicy(flat_variant_case=VariantCase.PRESERVE)
        _assert_error("enums: [{name: E, variants: [None]}]", "generates the Python keyword 'None'", naming)

    def test_variant_clashing_with_codec_member(self) -> None:
        naming = NamingPolicy(flat_variant_case=VariantCase.PRESERVE)
        _assert_error(
            "enums: [{name: E, variants: [decode]}]",
            "Variant 'decode' in enum 'E' clashes with the generated member 'decode'",
            naming,
        )

    def test_tagged_variant_class_shadowing_predicate_when_preserved(self) -> None:
        naming = NamingPolicy(tagged_variant_case=VariantCase.PRESERVE)
        _assert_error(
            "enums: [{name: Shape, variants: [{name: circle, fields: [{name: r, type: f64}]}, is_circle]}]",
            "Variant 'is_circle' in enum 'Shape' generates 'is_circle', which is also a predicate name",
            naming,
        )

    def test_tagged_variant_class_distinct_from_predicates_by_default(self) -> None:
        _assert_clean("enums: [{name: Shape, variants: [{name: circle, fields: [{name: r, type: f64}]}, is_circle]}]")

    def test_flat_variant_clashing_with_enum_attribute(self) -> None:
        naming = NamingPolicy(flat_variant_case=VariantCase.PRESERVE)
        _assert_error(
            "enums: [{name: E, variants: [mro]}]",
            "Variant 'mro' in enum 'E' clashes with the enum attribute 'mro'",
            naming,
        )

    def test_field_clashing_with_codec_member(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: lower, type: u8}]}]}]",
            "Field 'lower' in variant 'E.V' clashes with the generated member 'lower'",
        )

    def test_field_clashing_with_predicate(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: Open, fields: [{name: is_open, type: bool}]}]}]",
            "clashes with the generated member 'is_open'",
        )


# ###############
# Type references
# ###############


class TestTypeReferences:
    def test_unknown_named_type(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: c, type: Colour}]}]}]",
            "Field 'c' in variant 'E.V' references unknown type 'Colour'",
        )

    def test_unknown_type_nested_in_containers(self) -> None:
        _assert_error(
            "enums: [{name: E, variants: [{name: V, fields: [{name: c, type: 'map<string, sequence<Ghost>>'}]}]}]",
            "references unknown type 'Ghost'",
        )

    def test_both_map_arguments_are_checked(self) -> None:
        errors = _analyze("enums: [{name: E, variants: [{name: V, fields: [{name: c, type: 'map<K, V>'}]}]}]")
        assert len(errors) == 2

    def test_model_built_directly(self) -> None:
        descriptors = DescriptorFile(
            enums=(
                EnumDescriptor(
                    name="E",
                    variants=(
                        VariantDescriptor(name="V", fields=(FieldDescriptor(name="f", type=NamedTypeRef(name="E")),)),
                    ),
                ),
            )
        )
        assert analyze(descriptors) == []
