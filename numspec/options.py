"""
options.py — Translate named formatting options into a FormatSpec.

Option vocabulary (names kept exactly as callers pass them):

  width, precision        minimum width / decimal places (min digits for ints)
  leftjustified           pad on the right instead of the left
  zeropadding             pad with zeros between sign and digits
  commas                  group integer digits in threes
  signed                  always show a sign
  positivespace           space before non-negative values
  parens                  negative values as (magnitude)
  stripzeros              strip trailing fractional zeros (default: no precision given)
  alternative             printf '#' alternative form
  conversion              printf conversion character (default depends on the value)
  mixedfraction           rationals as int_num/den
  mixedfractionsep        separator between integer part and fraction ("_")
  fractionsep             separator between numerator and denominator ("/")
  fractionwidth           zero-pad the numerator to this width
  tryden                  preferred denominator when it loses no precision
"""

from __future__ import annotations

import logging
from typing import Optional

from numspec.parser import lookup_conversion
from numspec.spec import (
    ConflictingOptions,
    Conversion,
    FormatSpec,
    NumberKind,
    UnsupportedValueType,
)

log = logging.getLogger(__name__)

_DEFAULT_CONVERSIONS = {
    NumberKind.INTEGER: Conversion.DECIMAL,
    NumberKind.FLOAT: Conversion.FIXED,
    NumberKind.RATIONAL: Conversion.STRING,
}


def resolve_options(
    kind: NumberKind,
    *,
    width: Optional[int] = None,
    precision: Optional[int] = None,
    leftjustified: bool = False,
    zeropadding: bool = False,
    commas: bool = False,
    signed: bool = False,
    positivespace: bool = False,
    parens: bool = False,
    stripzeros: Optional[bool] = None,
    alternative: bool = False,
    conversion: Optional[str] = None,
    mixedfraction: bool = False,
    mixedfractionsep: str = "_",
    fractionsep: str = "/",
    fractionwidth: Optional[int] = None,
    tryden: Optional[int] = None,
) -> FormatSpec:
    """
    Build the FormatSpec equivalent to the named options for a value of
    *kind*.

    Raises ConflictingOptions when both *signed* and *parens* are set,
    UnsupportedConversion for an unknown *conversion* character,
    UnsupportedValueType when *mixedfraction* is requested for a float, and
    MalformedSpec for negative widths or precisions.
    """
    if signed and parens:
        raise ConflictingOptions("Options 'signed' and 'parens' are mutually exclusive")

    if mixedfraction and kind is NumberKind.FLOAT:
        raise UnsupportedValueType(
            "Option 'mixedfraction' requires an integer or rational value, got a float"
        )

    uppercase = False
    if mixedfraction and kind is NumberKind.RATIONAL:
        # The mixed-fraction path ignores any requested conversion.
        conv = Conversion.STRING
    elif conversion is not None:
        conv, uppercase = lookup_conversion(conversion)
    else:
        conv = _DEFAULT_CONVERSIONS[kind]

    if stripzeros is None:
        stripzeros = precision is None

    spec = FormatSpec(
        conversion=conv,
        uppercase=uppercase,
        width=width,
        precision=precision,
        left_justified=leftjustified,
        zero_padded=zeropadding,
        always_signed=signed,
        positive_space=positivespace,
        alternative_form=alternative,
        commas=commas,
        parens=parens,
        strip_zeros=stripzeros,
        mixed_fraction=mixedfraction,
        mixed_fraction_sep=mixedfractionsep,
        fraction_sep=fractionsep,
        fraction_width=fractionwidth,
        try_denominator=tryden,
    )
    log.debug("Resolved %s options -> %s", kind.value, spec)
    return spec
