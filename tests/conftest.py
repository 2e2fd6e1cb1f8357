"""
conftest.py — Shared fixtures for the numspec test suite.

Provides:
  parse_mixed(text)    — rebuild a Fraction from mixed-fraction output
  counting_factory     — make_formatter wrapper that records every build
  fresh_cache          — an empty FormatterCache isolated from default_cache
"""

from __future__ import annotations

from fractions import Fraction

import pytest

from numspec.cache import FormatterCache, make_formatter


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_mixed(text: str, mixed_sep: str = "_", fraction_sep: str = "/") -> Fraction:
    """
    Inverse of mixed-fraction rendering: "-1_1/2" → Fraction(-3, 2).

    Handles the whole-only ("3") and fraction-only ("1/2") forms.
    """
    negative = text.startswith("-")
    body = text.lstrip("-").replace(",", "")
    whole_text, _, fraction_text = body.rpartition(mixed_sep)
    if fraction_sep not in fraction_text:
        # No fraction part at all, e.g. "3".
        whole_text, fraction_text = fraction_text, ""

    value = Fraction(int(whole_text or "0"))
    if fraction_text:
        num, den = fraction_text.split(fraction_sep)
        value += Fraction(int(num), int(den))
    return -value if negative else value


class CountingFactory:
    """Callable stand-in for make_formatter that remembers what it built."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, format_string: str):
        self.calls.append(format_string)
        return make_formatter(format_string)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def counting_factory() -> CountingFactory:
    return CountingFactory()


@pytest.fixture
def fresh_cache(counting_factory) -> FormatterCache:
    return FormatterCache(factory=counting_factory)
