"""
test_parser.py — Tests for the printf grammar, flags, and parse errors.
"""

from __future__ import annotations

import pytest

from numspec.parser import parse_spec
from numspec.spec import (
    Conversion,
    FormattingError,
    MalformedSpec,
    UnsupportedConversion,
)


class TestConversions:
    @pytest.mark.parametrize("fmt,conversion,uppercase", [
        ("%d", Conversion.DECIMAL, False),
        ("%i", Conversion.DECIMAL, False),
        ("%o", Conversion.OCTAL, False),
        ("%x", Conversion.HEX_LOWER, False),
        ("%X", Conversion.HEX_UPPER, False),
        ("%e", Conversion.SCIENTIFIC, False),
        ("%E", Conversion.SCIENTIFIC, True),
        ("%f", Conversion.FIXED, False),
        ("%F", Conversion.FIXED, True),
        ("%g", Conversion.GENERAL, False),
        ("%G", Conversion.GENERAL, True),
        ("%s", Conversion.STRING, False),
    ])
    def test_conversion_characters(self, fmt, conversion, uppercase):
        spec = parse_spec(fmt)
        assert spec.conversion is conversion
        assert spec.uppercase is uppercase

    def test_bare_conversion_has_no_width_or_precision(self):
        spec = parse_spec("%d")
        assert spec.width is None
        assert spec.precision is None


class TestWidthAndPrecision:
    def test_width(self):
        assert parse_spec("%10d").width == 10

    def test_width_and_precision(self):
        spec = parse_spec("%10.3f")
        assert spec.width == 10
        assert spec.precision == 3

    def test_precision_only(self):
        spec = parse_spec("%.2f")
        assert spec.width is None
        assert spec.precision == 2

    def test_empty_precision_means_zero(self):
        assert parse_spec("%.f").precision == 0

    def test_explicit_zero_precision_differs_from_unspecified(self):
        assert parse_spec("%.0f").precision == 0
        assert parse_spec("%f").precision is None

    def test_zero_flag_then_width(self):
        spec = parse_spec("%010d")
        assert spec.zero_padded
        assert spec.width == 10

    def test_format_strings_keep_printf_zero_handling(self):
        assert parse_spec("%f").strips_zeros is False


class TestFlags:
    def test_no_flags(self):
        spec = parse_spec("%d")
        assert not any([
            spec.left_justified, spec.zero_padded, spec.always_signed,
            spec.positive_space, spec.alternative_form, spec.commas, spec.parens,
        ])

    @pytest.mark.parametrize("fmt,attr", [
        ("%-d", "left_justified"),
        ("%0d", "zero_padded"),
        ("%+d", "always_signed"),
        ("% d", "positive_space"),
        ("%#x", "alternative_form"),
        ("%'d", "commas"),
    ])
    def test_single_flag(self, fmt, attr):
        assert getattr(parse_spec(fmt), attr) is True

    def test_flags_in_any_order(self):
        a = parse_spec("%+'-#012.3f")
        b = parse_spec("%#-'0+12.3f")
        assert a == b
        assert a.always_signed and a.commas and a.left_justified
        assert a.alternative_form and a.zero_padded
        assert a.width == 12 and a.precision == 3

    def test_repeated_flags_accepted(self):
        assert parse_spec("%''d").commas

    def test_plus_with_commas_and_scientific_is_syntactically_valid(self):
        spec = parse_spec("%+'e")
        assert spec.always_signed and spec.commas
        assert spec.conversion is Conversion.SCIENTIFIC

    def test_left_and_zero_both_recorded(self):
        spec = parse_spec("%-05d")
        assert spec.left_justified and spec.zero_padded


class TestMalformed:
    @pytest.mark.parametrize("fmt", [
        "",
        "d",
        "%",
        "%10",
        "%5.2",
        "%-",
        "%'",
        "%.",
        "%d ",
        " %d",
        "%dd",
        "value: %d",
        "%10.3.2f",
    ])
    def test_raises_malformed(self, fmt):
        with pytest.raises(MalformedSpec):
            parse_spec(fmt)

    def test_non_string_is_malformed(self):
        with pytest.raises(MalformedSpec):
            parse_spec(42)

    def test_error_message_names_input(self):
        with pytest.raises(MalformedSpec, match="'%10'"):
            parse_spec("%10")


class TestUnsupportedConversion:
    @pytest.mark.parametrize("fmt", ["%q", "%5.2z", "%a", "%c", "%%", "%u"])
    def test_raises_unsupported(self, fmt):
        with pytest.raises(UnsupportedConversion):
            parse_spec(fmt)

    def test_is_a_formatting_error(self):
        with pytest.raises(FormattingError):
            parse_spec("%q")

    def test_message_lists_supported(self):
        with pytest.raises(UnsupportedConversion, match="Supported"):
            parse_spec("%q")
