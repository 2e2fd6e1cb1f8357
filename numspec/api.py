"""
api.py — Public entry points.

  render_once(fmt, value)            cached: parse once per format string
  build_formatter(fmt)(value)        uncached: caller keeps the formatter
  render_with_options(value, **opts) named options, no cache
"""

from __future__ import annotations

from typing import Optional

from numspec.cache import BoundFormatter, FormatterCache, make_formatter
from numspec.formatter import render
from numspec.options import resolve_options
from numspec.spec import Number, classify_value

# Shared by every render_once call that does not pass its own cache.
default_cache = FormatterCache()


def render_once(
    format_string: str,
    value: Number,
    *,
    cache: Optional[FormatterCache] = None,
) -> str:
    """Format *value* with *format_string*, reusing the cached formatter."""
    if cache is None:
        cache = default_cache
    return cache.get_or_create(format_string)(value)


def build_formatter(format_string: str) -> BoundFormatter:
    """Return a reusable formatter for *format_string* without touching the cache."""
    return make_formatter(format_string)


def render_with_options(value: Number, **options) -> str:
    """
    Format *value* from named options (width, precision, commas, parens, ...).

    See numspec.options.resolve_options for the vocabulary.  An unknown
    option name raises TypeError.
    """
    spec = resolve_options(classify_value(value), **options)
    return render(spec, value)
