"""
cache.py — Bound formatters and the per-format-string formatter cache.

Each distinct format string is parsed and bound once per FormatterCache and
then reused.  Lookups take no lock: a miss builds a BoundFormatter outside
any critical section and publishes it with dict.setdefault, so concurrent
misses on the same string may build twice but every caller ends up with the
first formatter stored.  Failed builds are never stored.  Only the
`builds` counter is updated under a lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from numspec.formatter import render
from numspec.parser import parse_spec
from numspec.spec import FormatSpec, Number

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundFormatter:
    """A render routine bound to one parsed FormatSpec."""

    format_string: str
    spec: FormatSpec

    def __call__(self, value: Number) -> str:
        return render(self.spec, value)

    apply = __call__


def make_formatter(format_string: str) -> BoundFormatter:
    """
    Parse *format_string* and return a BoundFormatter without caching it.

    Raises MalformedSpec / UnsupportedConversion for bad format strings.
    """
    return BoundFormatter(format_string, parse_spec(format_string))


@dataclass
class FormatterCache:
    """Process-lifetime map of format string → BoundFormatter."""

    factory: Callable[[str], BoundFormatter] = make_formatter
    builds: int = field(default=0, init=False)
    _builds_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )
    _formatters: dict[str, BoundFormatter] = field(default_factory=dict, init=False, repr=False)

    def get_or_create(self, format_string: str) -> BoundFormatter:
        formatter = self._formatters.get(format_string)
        if formatter is not None:
            return formatter

        # Raises on a bad format string; nothing is stored in that case.
        built = self.factory(format_string)
        with self._builds_lock:
            self.builds += 1
        log.debug("Built formatter for %r (%d cached)", format_string, len(self._formatters) + 1)
        return self._formatters.setdefault(format_string, built)

    def lookup(self, format_string: str) -> Optional[BoundFormatter]:
        return self._formatters.get(format_string)

    def clear(self) -> None:
        self._formatters.clear()

    def __contains__(self, format_string: object) -> bool:
        return format_string in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)
