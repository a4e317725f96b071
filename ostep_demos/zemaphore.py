"""A counting semaphore built from a lock and a condition variable."""

from __future__ import annotations

import argparse
import threading
import time


class Zemaphore:
    """Counting semaphore; a negative start value needs extra posts."""

    def __init__(self, value: int) -> None:
        self._value = value
        self._cond = threading.Condition()

    @property
    def value(self) -> int:
        """The current count."""
        with self._cond:
            return self._value

    def wait(self) -> None:
        """Block until the count is positive, then decrement it."""
        with self._cond:
            self._cond.wait_for(lambda: self._value > 0)
            self._value -= 1

    def post(self) -> None:
        """Increment the count and wake one waiter."""
        with self._cond:
            self._value += 1
            self._cond.notify()


def main(argv: list[str] | None = None) -> int:
    """Parent waits on a semaphore that a child thread posts."""
    parser = argparse.ArgumentParser(
        prog="zemaphore", description="join a thread with a semaphore"
    )
    parser.add_argument("--delay", type=float, default=4.0,
                        help="seconds the child sleeps before posting")
    args = parser.parse_args(argv)

    done = Zemaphore(0)

    def child() -> None:
        time.sleep(args.delay)
        print("child")
        done.post()

    print("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    done.wait()
    print("parent: end")
    thread.join()
    return 0