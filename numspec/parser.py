"""
parser.py — printf-style format string grammar.

Grammar: %[FLAGS][WIDTH][.PRECISION]CONVERSION

  FLAGS       — any of  - 0 + <space> # '  in any order, repeats allowed
                  -   left-justify          0   zero-pad
                  +   always show sign      ' ' space before positives
                  #   alternative form      '   thousands separators
  WIDTH       — decimal digits
  PRECISION   — decimal digits; an empty precision ("%.f") means 0
  CONVERSION  — one of  d i o x X e E f F g G s

The whole string must be a single conversion; no literal text around it.
"""

from __future__ import annotations

import logging
import re

from numspec.spec import (
    Conversion,
    FormatSpec,
    MalformedSpec,
    UnsupportedConversion,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

SPEC_RE = re.compile(
    r"%(?P<flags>[-0+ #']*)(?P<width>\d+)?(?:\.(?P<precision>\d*))?(?P<conversion>[^-+ #'.\d])",
    re.DOTALL,
)

# Conversion character → (Conversion, uppercase)
CONVERSIONS: dict[str, tuple[Conversion, bool]] = {
    "d": (Conversion.DECIMAL, False),
    "i": (Conversion.DECIMAL, False),
    "o": (Conversion.OCTAL, False),
    "x": (Conversion.HEX_LOWER, False),
    "X": (Conversion.HEX_UPPER, False),
    "e": (Conversion.SCIENTIFIC, False),
    "E": (Conversion.SCIENTIFIC, True),
    "f": (Conversion.FIXED, False),
    "F": (Conversion.FIXED, True),
    "g": (Conversion.GENERAL, False),
    "G": (Conversion.GENERAL, True),
    "s": (Conversion.STRING, False),
}


def lookup_conversion(char: str) -> tuple[Conversion, bool]:
    """
    Map a conversion character to (Conversion, uppercase).

    Raises UnsupportedConversion for anything outside the supported set.
    """
    try:
        return CONVERSIONS[char]
    except (KeyError, TypeError):
        raise UnsupportedConversion(
            f"Unsupported conversion {char!r}. "
            f"Supported: {' '.join(CONVERSIONS)}"
        ) from None


def parse_spec(format_string: str) -> FormatSpec:
    """
    Parse *format_string* into a FormatSpec.

    Raises MalformedSpec if the string is not a single printf conversion and
    UnsupportedConversion if the conversion character is unknown.
    """
    if not isinstance(format_string, str):
        raise MalformedSpec(
            f"Format string must be str, got {type(format_string).__name__}"
        )

    m = SPEC_RE.fullmatch(format_string)
    if m is None:
        raise MalformedSpec(
            f"Malformed format string: {format_string!r}. "
            "Expected %[flags][width][.precision]conversion"
        )

    conversion, uppercase = lookup_conversion(m.group("conversion"))
    flags = m.group("flags")
    width = m.group("width")
    precision = m.group("precision")

    spec = FormatSpec(
        conversion=conversion,
        uppercase=uppercase,
        width=int(width) if width is not None else None,
        # "%.f" is a precision of zero.
        precision=int(precision or "0") if precision is not None else None,
        left_justified="-" in flags,
        zero_padded="0" in flags,
        always_signed="+" in flags,
        positive_space=" " in flags,
        alternative_form="#" in flags,
        commas="'" in flags,
        strip_zeros=False,
    )
    log.debug("Parsed %r -> %s", format_string, spec)
    return spec
