# Copyright 2026 FFIEnum Contributors
# SPDX-License-Identifier: Apache-2.0

"""Naming policy mapping descriptor identifiers to Python identifiers."""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass
from enum import Enum

# ###############
# Public Interface
# ###############


class VariantCase(Enum):
    """How variant names are spelled in generated code."""

    PRESERVE = "preserve"
    SHOUTY = "shouty"
    CAMEL = "camel"


@dataclass(frozen=True)
class NamingPolicy:
    """Casing rules for generated type, variant, and field identifiers.

    Attributes:
        flat_variant_case: Spelling of flat enum members (``RED`` by default).
        tagged_variant_case: Spelling of tagged-union variant classes
            (``Circle`` by default).
    """

    flat_variant_case: VariantCase = VariantCase.SHOUTY
    tagged_variant_case: VariantCase = VariantCase.CAMEL

    def type_name(self, name: str) -> str:
        """Return the Python class name for an enum."""
        return upper_camel_case(name)

    def flat_variant_name(self, name: str) -> str:
        """Return the member name of a flat enum variant."""
        return _apply_case(name, self.flat_variant_case)

    def variant_class_name(self, name: str) -> str:
        """Return the nested class name of a tagged-union variant."""
        return _apply_case(name, self.tagged_variant_case)

    def var_name(self, name: str) -> str:
        """Return the attribute/parameter name of a field."""
        return _keyword_safe(snake_case(name))

    def predicate_name(self, variant_name: str) -> str:
        """Return the name of the ``is_<variant>`` membership predicate."""
        return f"is_{snake_case(variant_name)}"


def split_words(name: str) -> list[str]:
    """Split an identifier into words across underscores and case changes.

    ``"HTTPServerError"`` becomes ``["HTTP", "Server", "Error"]`` and
    ``"max_retry2"`` becomes ``["max", "retry2"]``.
    """
    words: list[str] = []
    for chunk in name.split("_"):
        words.extend(_WORD_RE.findall(chunk))
    return words


def snake_case(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def upper_camel_case(name: str) -> str:
    return "".join(w.capitalize() for w in split_words(name))


def shouty_snake_case(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


# ################
# Implementation
# ################

_WORD_RE = re.compile(r"[A-Z]+[0-9]*(?=[A-Z][a-z]|\b)|[A-Z]?[a-z]+[0-9]*|[A-Z]+[0-9]*|[0-9]+")


def _apply_case(name: str, case: VariantCase) -> str:
    if case is VariantCase.SHOUTY:
        return shouty_snake_case(name)
    if case is VariantCase.CAMEL:
        return upper_camel_case(name)
    return name


def _keyword_safe(name: str) -> str:
    return f"{name}_" if keyword.iskeyword(name) else name
