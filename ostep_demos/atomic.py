"""An integer cell with an atomic compare-and-swap."""

from __future__ import annotations

import threading


class AtomicInt:
    """Integer whose updates go through compare-and-swap."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def compare_and_swap(self, old: int, new: int) -> bool:
        """Store ``new`` if the value equals ``old``; report whether it did."""
        with self._lock:
            if self._value != old:
                return False
            self._value = new
            return True

    def load(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value


def main(argv: list[str] | None = None) -> int:
    """Show one successful and one failing compare-and-swap."""
    cell = AtomicInt(0)
    print(f"before successful cas: {cell.load()}")
    success = cell.compare_and_swap(0, 100)
    print(f"after successful cas: {cell.load()} (success: {int(success)})")

    print(f"before failing cas: {cell.load()}")
    success = cell.compare_and_swap(0, 200)
    print(f"after failing cas: {cell.load()} (old: {int(success)})")
    return 0