"""Timing helpers shared by the demonstration programs."""

from __future__ import annotations

import re
import time

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_time() -> float:
    """Return the wall-clock time in seconds, with sub-second precision."""
    return time.time()


def spin(howlong: float) -> None:
    """Busy-wait for ``howlong`` seconds without yielding the CPU."""
    start = get_time()
    while get_time() - start < howlong:
        pass


def _atoi(text: str) -> int:
    """Parse a leading integer the lenient way: junk yields 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0