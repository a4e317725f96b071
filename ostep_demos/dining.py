"""Dining philosophers: five threads sharing five forks guarded by semaphores."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import TextIO

from .common import _atoi

NUM_PHILOSOPHERS = 5
_INDENT = 10


def left(p: int) -> int:
    """The fork on philosopher ``p``'s left."""
    return p


def right(p: int) -> int:
    """The fork on philosopher ``p``'s right."""
    return (p + 1) % NUM_PHILOSOPHERS


class Table:
    """Five forks, each a binary semaphore, and the rules for picking them up.

    With ``avoid_deadlock`` the last philosopher takes the right fork first,
    which breaks the cycle of waiting. With ``verbose`` every step is written
    to ``out``, indented by the philosopher's seat.
    """

    def __init__(
        self,
        avoid_deadlock: bool = True,
        verbose: bool = False,
        out: TextIO | None = None,
    ) -> None:
        self.avoid_deadlock = avoid_deadlock
        self.verbose = verbose
        self._out = sys.stdout if out is None else out
        self._forks = [threading.Semaphore(1) for _ in range(NUM_PHILOSOPHERS)]
        self._print_lock = threading.Semaphore(1)
        self._holders: list[int | None] = [None] * NUM_PHILOSOPHERS
        self._holders_lock = threading.Lock()

    @property
    def holders(self) -> tuple[int | None, ...]:
        """Which philosopher holds each fork, or None for a free fork."""
        with self._holders_lock:
            return tuple(self._holders)

    def say(self, p: int, message: str) -> None:
        """Write ``message`` indented for seat ``p`` when verbose."""
        if not self.verbose:
            return
        with self._print_lock:
            self._out.write(" " * (p * _INDENT) + message + "\n")
            self._out.flush()

    def _check(self, p: int) -> None:
        if not 0 <= p < NUM_PHILOSOPHERS:
            raise ValueError(f"no philosopher {p}; seats are 0..{NUM_PHILOSOPHERS - 1}")

    def _take(self, p: int, fork: int) -> None:
        self._forks[fork].acquire()
        with self._holders_lock:
            self._holders[fork] = p

    def _drop(self, fork: int) -> None:
        with self._holders_lock:
            self._holders[fork] = None
        self._forks[fork].release()

    def _try_message(self, p: int, fork: int) -> str:
        if not self.avoid_deadlock:
            return f"{p}: try {fork}"
        if p == NUM_PHILOSOPHERS - 1:
            return f"{p} try {fork}"
        return f"try {fork}"

    def get_forks(self, p: int) -> None:
        """Pick up both of philosopher ``p``'s forks, blocking until free."""
        self._check(p)
        if self.avoid_deadlock and p == NUM_PHILOSOPHERS - 1:
            order = (right(p), left(p))
        else:
            order = (left(p), right(p))
        for fork in order:
            self.say(p, self._try_message(p, fork))
            self._take(p, fork)

    def put_forks(self, p: int) -> None:
        """Put down both of philosopher ``p``'s forks."""
        self._check(p)
        self._drop(left(p))
        self._drop(right(p))


def dine(num_loops: int, avoid_deadlock: bool = True, verbose: bool = False) -> list[int]:
    """Seat five philosophers for ``num_loops`` meals each; return meals eaten.

    Without ``avoid_deadlock`` the run may never finish.
    """
    print("dining: started", flush=True)
    table = Table(avoid_deadlock, verbose)
    meals = [0] * NUM_PHILOSOPHERS

    def philosopher(p: int) -> None:
        table.say(p, f"{p}: start")
        for _ in range(num_loops):
            table.say(p, f"{p}: think")
            table.get_forks(p)
            table.say(p, f"{p}: eat")
            meals[p] += 1
            table.put_forks(p)
            table.say(p, f"{p}: done")

    threads = [
        threading.Thread(target=philosopher, args=(p,)) for p in range(NUM_PHILOSOPHERS)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    print("dining: finished", flush=True)
    return meals


def main(argv: list[str] | None = None) -> int:
    """Run the dining philosophers for the given number of meals."""
    parser = argparse.ArgumentParser(prog="dining_philosophers")
    parser.add_argument("num_loops", type=_atoi)
    parser.add_argument("--avoid-deadlock", action="store_true",
                        help="let the last philosopher take the right fork first")
    parser.add_argument("--verbose", action="store_true",
                        help="print every step of every philosopher")
    args = parser.parse_args(argv)
    dine(args.num_loops, args.avoid_deadlock, args.verbose)
    return 0