"""
cli.py — Click entry points: render, options, inspect.

Entry point registered as `numspec` in pyproject.toml.
"""

from __future__ import annotations

import logging
import sys
from fractions import Fraction
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from numspec.spec import FormattingError, Number

err_console = Console(stderr=True)
out_console = Console(highlight=False, soft_wrap=True, emoji=False)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.WARNING if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, markup=True)],
    )


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------

def parse_number(text: str) -> Number:
    """
    Turn command-line text into int, Fraction ("p/q") or float.

    Raises ValueError if *text* is none of these.
    """
    text = text.strip()
    if "/" in text:
        return Fraction(text)
    try:
        return int(text)
    except ValueError:
        return float(text)


class NumberParam(click.ParamType):
    name = "number"

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            return value
        try:
            return parse_number(value)
        except (ValueError, ZeroDivisionError):
            self.fail(f"{value!r} is not an integer, float or p/q rational", param, ctx)


NUMBER = NumberParam()


def _fail(exc: FormattingError) -> None:
    err_console.print(f"[red]{type(exc).__name__}:[/red] {escape(str(exc))}", highlight=False)
    sys.exit(2)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
def cli() -> None:
    """numspec — printf-style number formatting with commas, parens and fractions."""


# ---------------------------------------------------------------------------
# render command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("format_string")
@click.argument("values", nargs=-1, required=True, type=NUMBER)
@click.option("--verbose", is_flag=True, default=False, help="Debug logging")
@click.option("--quiet", is_flag=True, default=False, help="Suppress console output except errors")
def render(format_string: str, values: tuple, verbose: bool, quiet: bool) -> None:
    """Format each VALUE with FORMAT_STRING, one result per line."""
    _setup_logging(verbose=verbose, quiet=quiet)
    from numspec.api import default_cache, render_once

    try:
        for value in values:
            out_console.print(render_once(format_string, value), markup=False)
    except FormattingError as exc:
        _fail(exc)
    log.debug("%d formatter(s) cached", len(default_cache))


# ---------------------------------------------------------------------------
# options command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("value", type=NUMBER)
@click.option("--width", type=click.IntRange(min=0), default=None, help="Minimum width")
@click.option("--precision", type=click.IntRange(min=0), default=None,
              help="Decimal places (minimum digits for integers)")
@click.option("--left", "leftjustified", is_flag=True, default=False, help="Left-justify")
@click.option("--zero", "zeropadding", is_flag=True, default=False, help="Pad with zeros")
@click.option("--commas", is_flag=True, default=False, help="Thousands separators")
@click.option("--signed", is_flag=True, default=False, help="Always show the sign")
@click.option("--positive-space", "positivespace", is_flag=True, default=False,
              help="Space before non-negative values")
@click.option("--parens", is_flag=True, default=False, help="Negatives as (magnitude)")
@click.option("--strip/--no-strip", "stripzeros", default=None,
              help="Strip trailing zeros [default: strip when no precision]")
@click.option("--alternative", is_flag=True, default=False, help="printf '#' form")
@click.option("--conversion", default=None, help="printf conversion character")
@click.option("--mixed-fraction", "mixedfraction", is_flag=True, default=False,
              help="Render rationals as whole_num/den")
@click.option("--mixed-sep", "mixedfractionsep", default="_", show_default=True,
              help="Separator between whole part and fraction")
@click.option("--fraction-sep", "fractionsep", default="/", show_default=True,
              help="Separator between numerator and denominator")
@click.option("--fraction-width", "fractionwidth", type=click.IntRange(min=0), default=None,
              help="Zero-pad the numerator to this width")
@click.option("--try-denominator", "tryden", type=click.IntRange(min=1), default=None,
              help="Preferred denominator when exact")
@click.option("--verbose", is_flag=True, default=False, help="Debug logging")
@click.option("--quiet", is_flag=True, default=False, help="Suppress console output except errors")
def options(value: Number, verbose: bool, quiet: bool, **opts) -> None:
    """Format VALUE from named options."""
    _setup_logging(verbose=verbose, quiet=quiet)
    from numspec.api import render_with_options

    try:
        out_console.print(render_with_options(value, **opts), markup=False)
    except FormattingError as exc:
        _fail(exc)


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("format_string")
@click.option("--verbose", is_flag=True, default=False)
@click.option("--quiet", is_flag=True, default=False)
def inspect(format_string: str, verbose: bool, quiet: bool) -> None:
    """Show how FORMAT_STRING is parsed."""
    _setup_logging(verbose=verbose, quiet=quiet)
    from numspec.parser import parse_spec

    try:
        spec = parse_spec(format_string)
    except FormattingError as exc:
        _fail(exc)
        return

    t = Table(box=box.ROUNDED, show_header=True, title=f"Format spec {format_string!r}")
    t.add_column("Field", style="bold")
    t.add_column("Value", justify="right")
    for name, v in spec.as_dict().items():
        t.add_row(name, "[dim]—[/dim]" if v is None else str(v))
    out_console.print(t)


def main(argv: Optional[list[str]] = None) -> None:
    cli.main(args=argv, prog_name="numspec")


if __name__ == "__main__":
    main()
