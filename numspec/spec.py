"""
spec.py — FormatSpec data model, numeric value tagging, and error taxonomy.

FormatSpec is the parsed, immutable description of how one value is
rendered.  It is produced by parser.parse_spec (printf-style strings) or
options.resolve_options (named options) and consumed by formatter.render.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Optional, Union

Number = Union[int, float, Fraction, Decimal]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class FormattingError(ValueError):
    """Base class for every error raised while building or applying a spec."""


class MalformedSpec(FormattingError):
    """Raised when a format string does not match the printf grammar."""


class UnsupportedConversion(FormattingError):
    """Raised when the conversion character is not one of d i o x X e E f F g G s."""


class ConflictingOptions(FormattingError):
    """Raised when mutually exclusive options (signed + parens) are both set."""


class UnsupportedValueType(FormattingError, TypeError):
    """Raised when the value cannot be rendered with the requested spec."""


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

class Conversion(str, Enum):
    DECIMAL    = "d"
    FIXED      = "f"
    SCIENTIFIC = "e"
    GENERAL    = "g"
    HEX_LOWER  = "x"
    HEX_UPPER  = "X"
    OCTAL      = "o"
    STRING     = "s"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_CONVERSIONS

    @property
    def is_float(self) -> bool:
        return self in (Conversion.FIXED, Conversion.SCIENTIFIC, Conversion.GENERAL)


_INTEGER_CONVERSIONS = frozenset(
    {Conversion.DECIMAL, Conversion.HEX_LOWER, Conversion.HEX_UPPER, Conversion.OCTAL}
)


class NumberKind(str, Enum):
    INTEGER  = "integer"
    FLOAT    = "float"
    RATIONAL = "rational"


def classify_value(value: object) -> NumberKind:
    """
    Tag *value* as INTEGER, FLOAT or RATIONAL.

    bool is rejected even though it subclasses int; Decimal is treated as a
    float.  Raises UnsupportedValueType for anything else.
    """
    if isinstance(value, bool):
        raise UnsupportedValueType(f"Cannot format bool value {value!r}")
    if isinstance(value, numbers.Integral):
        return NumberKind.INTEGER
    if isinstance(value, numbers.Rational):
        return NumberKind.RATIONAL
    if isinstance(value, (float, Decimal, numbers.Real)):
        return NumberKind.FLOAT
    raise UnsupportedValueType(
        f"Cannot format value of type {type(value).__name__}: {value!r}"
    )


def is_negative(value: Number) -> bool:
    """True for values below zero, including -0.0; NaN is never negative."""
    if isinstance(value, (float, Decimal)):
        fv = float(value)
        if math.isnan(fv):
            return False
        return math.copysign(1.0, fv) < 0
    return value < 0


@dataclass(frozen=True)
class FormatSpec:
    """Parsed representation of a format string or a named option set."""

    conversion: Conversion
    uppercase: bool = False
    width: Optional[int] = None
    precision: Optional[int] = None
    left_justified: bool = False
    zero_padded: bool = False
    always_signed: bool = False
    positive_space: bool = False
    alternative_form: bool = False
    commas: bool = False
    parens: bool = False
    strip_zeros: Optional[bool] = None   # None: strip only when precision is None
    mixed_fraction: bool = False
    mixed_fraction_sep: str = "_"
    fraction_sep: str = "/"
    fraction_width: Optional[int] = None
    try_denominator: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("width", "precision", "fraction_width"):
            v = getattr(self, name)
            if v is not None and v < 0:
                raise MalformedSpec(f"{name} must be non-negative, got {v}")
        if self.try_denominator is not None and self.try_denominator <= 0:
            raise MalformedSpec(
                f"try_denominator must be positive, got {self.try_denominator}"
            )
        if self.always_signed and self.parens:
            raise ConflictingOptions("'signed' and 'parens' cannot both be set")

    @property
    def strips_zeros(self) -> bool:
        if self.strip_zeros is None:
            return self.precision is None
        return self.strip_zeros

    def as_dict(self) -> dict:
        d = asdict(self)
        d["conversion"] = self.conversion.value.upper() if self.uppercase else self.conversion.value
        d["strip_zeros"] = self.strips_zeros
        return d
