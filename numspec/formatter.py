"""
formatter.py — Render a single numeric value according to a FormatSpec.

render(spec, value) -> str

Order of operations:
  1. sign and magnitude (parens remember the sign, render the magnitude)
  2. magnitude digits per conversion: integer bases, printf float rules,
     shortest repr for %s, fraction / mixed-fraction forms for rationals
  3. trailing-zero stripping of the fractional digits
  4. thousands separators on the integer digits (never in exponent form)
  5. sign / parentheses
  6. width and padding; separators are dropped before the width is exceeded

Floats are rendered through Python's printf engine, which rounds the exact
binary value half-to-even.  Rationals are always reduced to lowest terms.
"""

from __future__ import annotations

import logging
import math
import re
from fractions import Fraction
from typing import NamedTuple, Optional

from numspec.spec import (
    Conversion,
    FormatSpec,
    Number,
    NumberKind,
    UnsupportedValueType,
    classify_value,
    is_negative,
)

log = logging.getLogger(__name__)

DEFAULT_FLOAT_PRECISION = 6
THOUSANDS_SEP = ","

_LEADING_DIGITS_RE = re.compile(r"\d+")


class Rendered(NamedTuple):
    """Magnitude rendering before sign and padding are applied."""

    prefix: str              # "0x", "0X", "0" (alternative form) or ""
    body: str                # digits without separators
    grouped: Optional[str]   # body with separators, None if grouping does not apply
    zero_fill: bool          # whether zero padding may be used for this body


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _to_float(value: Number) -> float:
    try:
        return float(value)
    except (OverflowError, ValueError):
        raise UnsupportedValueType(
            f"Value {value!r} cannot be converted to a float"
        ) from None


def _normalise(value: Number, kind: NumberKind) -> Number:
    """Collapse the accepted numeric types onto int, float and Fraction."""
    if kind is NumberKind.INTEGER:
        return int(value)
    if kind is NumberKind.RATIONAL:
        return Fraction(value.numerator, value.denominator)
    return _to_float(value)


def group_digits(digits: str) -> str:
    """Insert THOUSANDS_SEP every three digits from the right."""
    head = len(digits) % 3 or 3
    parts = [digits[:head]]
    parts.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return THOUSANDS_SEP.join(parts)


def add_commas(body: str) -> Optional[str]:
    """
    Group the leading run of integer digits in *body*.

    Returns None when grouping does not apply: exponent renderings and
    bodies that do not start with a digit (inf, nan).
    """
    if "e" in body or "E" in body:
        return None
    m = _LEADING_DIGITS_RE.match(body)
    if m is None:
        return None
    return group_digits(m.group()) + body[m.end():]


def strip_trailing_zeros(body: str) -> str:
    """
    Remove trailing zeros after the decimal point, keeping any exponent
    suffix.  The point itself goes when no fractional digits remain.
    """
    if "." not in body:
        return body
    m = re.search(r"[eE]", body)
    mantissa, exponent = (body[:m.start()], body[m.start():]) if m else (body, "")
    return mantissa.rstrip("0").rstrip(".") + exponent


def _zero_fill_grouped(body: str, target: int) -> str:
    """Left-pad the integer digits of *body* with zeros, regrouping as it grows."""
    m = _LEADING_DIGITS_RE.match(body)
    digits, rest = (m.group(), body[m.end():]) if m else ("", body)
    grouped = group_digits(digits) + rest if digits else body
    while len(grouped) < target:
        digits = "0" + digits
        grouped = group_digits(digits) + rest
    return grouped


def _non_finite(value: float, spec: FormatSpec) -> Rendered:
    text = "nan" if math.isnan(value) else "inf"
    return Rendered("", text.upper() if spec.uppercase else text, None, False)


# ---------------------------------------------------------------------------
# Magnitude renderers
# ---------------------------------------------------------------------------

_INTEGER_FORMATS = {
    Conversion.DECIMAL: "d",
    Conversion.OCTAL: "o",
    Conversion.HEX_LOWER: "x",
    Conversion.HEX_UPPER: "X",
}


def _render_integer(magnitude: int, spec: FormatSpec) -> Rendered:
    digits = format(magnitude, _INTEGER_FORMATS[spec.conversion])
    if spec.precision is not None:
        digits = digits.zfill(spec.precision)

    prefix = ""
    if spec.alternative_form:
        if spec.conversion is Conversion.OCTAL and not digits.startswith("0"):
            prefix = "0"
        elif spec.conversion is Conversion.HEX_LOWER and magnitude:
            prefix = "0x"
        elif spec.conversion is Conversion.HEX_UPPER and magnitude:
            prefix = "0X"

    grouped = None
    if spec.commas and spec.conversion is Conversion.DECIMAL:
        grouped = group_digits(digits)

    # printf ignores the 0 flag when an integer precision is given.
    return Rendered(prefix, digits, grouped, spec.precision is None)


def _render_float(magnitude: float, spec: FormatSpec) -> Rendered:
    precision = DEFAULT_FLOAT_PRECISION if spec.precision is None else spec.precision
    char = spec.conversion.value.upper() if spec.uppercase else spec.conversion.value
    alt = "#" if spec.alternative_form else ""
    body = f"%{alt}.{precision}{char}" % magnitude

    if spec.strips_zeros and not spec.alternative_form:
        body = strip_trailing_zeros(body)

    grouped = add_commas(body) if spec.commas else None
    return Rendered("", body, grouped, True)


def _render_string(magnitude: Number, kind: NumberKind, spec: FormatSpec) -> Rendered:
    if kind is NumberKind.RATIONAL:
        if magnitude.denominator == 1:
            body = str(magnitude.numerator)
        else:
            body = f"{magnitude.numerator}{spec.fraction_sep}{magnitude.denominator}"
    else:
        # int and float both use their shortest round-trip text.
        body = str(magnitude)

    if spec.precision is not None:
        body = body[:spec.precision]

    if kind is NumberKind.FLOAT and spec.strips_zeros:
        body = strip_trailing_zeros(body)

    grouped = None
    if spec.commas and (kind is not NumberKind.RATIONAL or magnitude.denominator == 1):
        grouped = add_commas(body)
    return Rendered("", body, grouped, False)


def mixed_fraction_parts(magnitude: Fraction, spec: FormatSpec) -> tuple[int, int, int]:
    """
    Split a non-negative rational into (whole, numerator, denominator) with
    numerator < denominator, honouring spec.try_denominator when the
    numerator stays integral under the substitution.
    """
    whole, numerator = divmod(magnitude.numerator, magnitude.denominator)
    denominator = magnitude.denominator
    tryden = spec.try_denominator
    if numerator and tryden and tryden != denominator:
        scaled = numerator * tryden
        if scaled % denominator == 0:
            numerator, denominator = scaled // denominator, tryden
    return whole, numerator, denominator


def _render_mixed(magnitude: Fraction, spec: FormatSpec) -> Rendered:
    whole, numerator, denominator = mixed_fraction_parts(magnitude, spec)

    fraction = ""
    if numerator:
        num_text = str(numerator)
        if spec.fraction_width:
            num_text = num_text.zfill(spec.fraction_width)
        fraction = f"{num_text}{spec.fraction_sep}{denominator}"

    def join(whole_text: str) -> str:
        if not fraction:
            return whole_text
        if not whole:
            return fraction
        return f"{whole_text}{spec.mixed_fraction_sep}{fraction}"

    body = join(str(whole))
    grouped = join(group_digits(str(whole))) if spec.commas and whole else None
    return Rendered("", body, grouped, False)


# ---------------------------------------------------------------------------
# Sign and padding
# ---------------------------------------------------------------------------

def _sign(spec: FormatSpec, negative: bool) -> tuple[str, str]:
    if negative:
        return ("(", ")") if spec.parens else ("-", "")
    if spec.always_signed:
        return "+", ""
    if spec.positive_space:
        return " ", ""
    return "", ""


def _pad(spec: FormatSpec, head: str, body: str, tail: str, zero_fill: bool) -> str:
    text = head + body + tail
    if spec.width is None or len(text) >= spec.width:
        return text
    gap = spec.width - len(text)
    if spec.left_justified:
        return text + " " * gap
    if zero_fill:
        return head + "0" * gap + body + tail
    return " " * gap + text


def _assemble(spec: FormatSpec, negative: bool, rendered: Rendered) -> str:
    lead, tail = _sign(spec, negative)
    head = lead + rendered.prefix
    zero_fill = rendered.zero_fill and spec.zero_padded and not spec.left_justified

    if rendered.grouped is not None:
        fixed = len(head) + len(tail)
        if spec.width is None or fixed + len(rendered.grouped) <= spec.width:
            if zero_fill and spec.width is not None:
                return head + _zero_fill_grouped(rendered.body, spec.width - fixed) + tail
            return _pad(spec, head, rendered.grouped, tail, False)
        log.debug(
            "Dropping thousands separators: %r does not fit width %d",
            rendered.grouped, spec.width,
        )

    return _pad(spec, head, rendered.body, tail, zero_fill)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render(spec: FormatSpec, value: Number) -> str:
    """
    Format *value* according to *spec* and return the formatted string.

    Raises UnsupportedValueType for values outside int/float/rational, for
    mixed fractions of floats, for rationals or integers too large to convert
    to float under a float conversion, and for signalling-NaN Decimals.
    """
    kind = classify_value(value)
    if spec.mixed_fraction and kind is NumberKind.FLOAT:
        raise UnsupportedValueType(
            f"Mixed-fraction rendering requires a rational value, got float {value!r}"
        )

    value = _normalise(value, kind)

    if kind is NumberKind.FLOAT and not math.isfinite(value):
        return _assemble(spec, is_negative(value), _non_finite(abs(value), spec))

    if spec.mixed_fraction and kind is NumberKind.RATIONAL:
        rendered = _render_mixed(abs(value), spec)
    elif spec.conversion.is_integer:
        # Truncate toward zero first so that -0.5 renders as "0".
        value = int(value)
        rendered = _render_integer(abs(value), spec)
    elif spec.conversion.is_float:
        rendered = _render_float(abs(_to_float(value)), spec)
    else:
        rendered = _render_string(abs(value), kind, spec)

    return _assemble(spec, is_negative(value), rendered)
