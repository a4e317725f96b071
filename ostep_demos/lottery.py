"""Lottery scheduling: pick the job holding the winning ticket."""

from __future__ import annotations

import sys
from collections import deque

from .common import _atoi

_MASK = 0xFFFFFFFF
_MODULUS = 2147483647


class _GlibcRandom:
    """Additive feedback generator matching the C library's srandom/random."""

    def __init__(self, seed: int) -> None:
        seed &= _MASK
        if seed == 0:
            seed = 1
        if seed >= 1 << 31:
            seed -= 1 << 32
        state = [seed]
        for _ in range(30):
            state.append((16807 * state[-1]) % _MODULUS)
        state[0] &= _MASK
        state.extend(state[:3])
        self._state: deque[int] = deque(state, maxlen=34)
        for _ in range(310):
            self.random()

    def random(self) -> int:
        value = (self._state[-31] + self._state[-3]) & _MASK
        self._state.append(value)
        return value >> 1


class Lottery:
    """A list of jobs, each holding tickets, drawn from by a seeded generator."""

    def __init__(self, seed: int) -> None:
        self._rng = _GlibcRandom(seed)
        self._jobs: list[int] = []

    @property
    def jobs(self) -> tuple[int, ...]:
        """Ticket counts, most recently inserted job first."""
        return tuple(self._jobs)

    @property
    def total(self) -> int:
        """The number of tickets held by all jobs."""
        return sum(self._jobs)

    def insert(self, tickets: int) -> None:
        """Add a job at the head of the list."""
        self._jobs.insert(0, tickets)

    def pick(self, winner: int) -> int:
        """Return the tickets of the job holding ticket number ``winner``."""
        if not 0 <= winner < self.total:
            raise ValueError(f"winning ticket {winner} out of range 0..{self.total - 1}")
        counter = 0
        for tickets in self._jobs:
            counter += tickets
            if counter > winner:
                return tickets
        raise ValueError(f"no job holds ticket {winner}")

    def draw(self) -> tuple[int, int]:
        """Draw a winning ticket; return it with the winning job's tickets."""
        total = self.total
        if total <= 0:
            raise ValueError("no tickets to draw from")
        winner = self._rng.random() % total
        return winner, self.pick(winner)

    def describe(self) -> str:
        """Render the job list as the scheduler prints it."""
        return "List: " + "".join(f"[{tickets}] " for tickets in self._jobs)


def main(argv: list[str] | None = None) -> int:
    """Run a number of lottery draws over three jobs."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: lottery <seed> <loops>", file=sys.stderr)
        raise SystemExit(1)
    seed, loops = _atoi(args[0]), _atoi(args[1])
    lottery = Lottery(seed)
    for tickets in (50, 100, 25):
        lottery.insert(tickets)
    print(lottery.describe())
    for _ in range(loops):
        winner, tickets = lottery.draw()
        print(lottery.describe())
        print(f"winner: {winner} {tickets}\n")
    return 0