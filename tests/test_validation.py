"""Tests for answer validators and machine-name converters."""

from __future__ import annotations

import pytest

from site_builder_console.errors import InvalidArgumentError
from site_builder_console.validation import (
    camel_case_to_human,
    humanize_machine_name,
    underscore_to_camel_case,
    validate_cardinality,
    validate_dimension_length,
    validate_machine_name,
)


class TestMachineName:
    @pytest.mark.parametrize("name", ["article", "field_tags", "hero_2x", "a1"])
    def test_valid(self, name):
        assert validate_machine_name(name) == name

    def test_surrounding_whitespace_is_trimmed(self):
        assert validate_machine_name("  page ") == "page"

    @pytest.mark.parametrize("name", ["", "Article", "field-tags", "with space", "é"])
    def test_invalid(self, name):
        with pytest.raises(InvalidArgumentError, match="lowercase letters, numbers and underscores"):
            validate_machine_name(name)

    def test_invalid_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_machine_name("Nope")


class TestCardinality:
    @pytest.mark.parametrize("value,expected", [(1, 1), ("3", 3), (-1, -1), ("-1", -1)])
    def test_valid(self, value, expected):
        assert validate_cardinality(value) == expected

    @pytest.mark.parametrize("value", [0, "0", -2, "abc", "", None, True])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgumentError, match="positive integer or -1"):
            validate_cardinality(value)


class TestDimensionLength:
    def test_valid(self):
        assert validate_dimension_length("1920") == 1920
        assert validate_dimension_length(1) == 1

    @pytest.mark.parametrize("value", [0, "-10", "wide", "", None])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgumentError, match="positive integer"):
            validate_dimension_length(value)


class TestConverters:
    def test_underscore_to_camel_case(self):
        assert underscore_to_camel_case("custom_bundle") == "customBundle"
        assert underscore_to_camel_case("page") == "page"
        assert underscore_to_camel_case("") == ""

    def test_camel_case_to_human(self):
        assert camel_case_to_human("customBundle") == "Custom bundle"
        assert camel_case_to_human("heroBanner2x") == "Hero banner2x"

    def test_humanize_strips_prefix(self):
        assert humanize_machine_name("field_main_image", strip_prefix="field_") == "Main image"
        assert humanize_machine_name("style") == "Style"
