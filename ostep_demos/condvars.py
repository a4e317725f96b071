"""Condition variables: joining threads and bounded producer/consumer buffers."""

from __future__ import annotations

import argparse
import threading
import time
from collections import deque

from .common import _atoi

END_OF_PRODUCTION = -1


class _Log:
    """Prints lines and remembers them in the order they were printed."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def say(self, line: str) -> None:
        with self._lock:
            print(line, flush=True)
            self._lines.append(line)

    @property
    def lines(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._lines)


class Synchronizer:
    """A join signal that a waiter consumes, resetting it for the next use."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._done = False

    def signal(self) -> None:
        """Mark the event as done and wake a waiter."""
        with self._cond:
            self._done = True
            self._cond.notify()

    def wait(self) -> None:
        """Block until signalled, then reset."""
        with self._cond:
            self._cond.wait_for(lambda: self._done)
            self._done = False


def join_demo(delay: float = 1.0) -> tuple[str, ...]:
    """Parent waits on a state variable guarded by a lock and condition."""
    log = _Log()
    cond = threading.Condition()
    done = False

    def child() -> None:
        nonlocal done
        log.say("child")
        time.sleep(delay)
        with cond:
            done = True
            cond.notify()

    log.say("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    with cond:
        cond.wait_for(lambda: done)
    log.say("parent: end")
    thread.join()
    return log.lines


def _join_modular_demo(delay: float = 1.0) -> tuple[str, ...]:
    """The join demonstration using a reusable Synchronizer."""
    log = _Log()
    sync = Synchronizer()

    def child() -> None:
        log.say("child")
        time.sleep(delay)
        sync.signal()

    log.say("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    sync.wait()
    log.say("parent: end")
    thread.join()
    return log.lines


def join_spin_demo(delay: float = 5.0) -> tuple[str, ...]:
    """Parent busy-waits on a flag the child sets after ``delay`` seconds."""
    log = _Log()
    done = False

    def child() -> None:
        nonlocal done
        log.say("child")
        time.sleep(delay)
        done = True

    log.say("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    while not done:
        pass
    log.say("parent: end")
    thread.join()
    return log.lines


def join_no_state_demo(delay: float = 2.0, timeout: float | None = None) -> bool:
    """Child signals with no state variable before the parent waits.

    The signal is lost; with no timeout the parent waits forever. Returns
    whether the parent was woken by a signal.
    """
    cond = threading.Condition()

    def child() -> None:
        print("child: begin", flush=True)
        with cond:
            print("child: signal", flush=True)
            cond.notify()

    print("parent: begin", flush=True)
    thread = threading.Thread(target=child)
    thread.start()
    time.sleep(delay)
    print("parent: wait to be signalled...", flush=True)
    with cond:
        signalled = cond.wait(timeout)
    thread.join()
    if signalled:
        print("parent: end", flush=True)
    return signalled


def _join_no_lock_demo(delay: float = 2.0, timeout: float | None = None) -> bool:
    """Child sets the flag and signals without the lock, losing the signal.

    The parent holds the lock while it sleeps for ``delay`` seconds; the child
    signals halfway through, when no one is waiting. Returns whether the
    parent was woken by a signal.
    """
    cond = threading.Condition()
    done = False

    def child() -> None:
        nonlocal done
        print("child: begin", flush=True)
        time.sleep(delay / 2)
        done = True
        print("child: signal", flush=True)
        if cond.acquire(blocking=False):
            cond.notify()
            cond.release()

    print("parent: begin", flush=True)
    thread = threading.Thread(target=child)
    thread.start()
    signalled = True
    with cond:
        print("parent: check condition", flush=True)
        while not done:
            time.sleep(delay)
            print("parent: wait to be signalled...", flush=True)
            if not cond.wait(timeout):
                signalled = False
                break
    thread.join()
    if signalled:
        print("parent: end", flush=True)
    return signalled


class BoundedBuffer:
    """A fixed-size FIFO guarded by a lock and one or two condition variables."""

    def __init__(self, size: int, single_cv: bool = False) -> None:
        if size < 1:
            raise ValueError(f"buffer size must be positive, not {size}")
        self._size = size
        self._items: deque[int] = deque()
        self._lock = threading.Lock()
        self._fill = threading.Condition(self._lock)
        self._empty = self._fill if single_cv else threading.Condition(self._lock)

    def put(self, value: int) -> None:
        """Wait for a free slot, store ``value`` and wake a consumer."""
        with self._lock:
            while len(self._items) == self._size:
                self._empty.wait()
            self._items.append(value)
            self._fill.notify()

    def get(self) -> int:
        """Wait for an item, remove the oldest one and wake a producer."""
        with self._lock:
            while not self._items:
                self._fill.wait()
            value = self._items.popleft()
            self._empty.notify()
            return value


def run_producer_consumer(
    size: int, loops: int, consumers: int = 1, single_cv: bool = False
) -> list[list[int]]:
    """Produce ``loops`` values for ``consumers`` threads; return what each got.

    The producer ends with one end-of-production marker per consumer; the
    markers are not included in the returned lists.
    """
    if consumers < 0:
        raise ValueError(f"consumer count must not be negative, not {consumers}")
    buffer = BoundedBuffer(size, single_cv)
    received: list[list[int]] = [[] for _ in range(consumers)]

    def producer() -> None:
        for value in range(loops):
            buffer.put(value)
        for _ in range(consumers):
            buffer.put(END_OF_PRODUCTION)

    def consumer(values: list[int]) -> None:
        while (value := buffer.get()) != END_OF_PRODUCTION:
            values.append(value)

    threads = [threading.Thread(target=producer)]
    threads += [threading.Thread(target=consumer, args=(values,)) for values in received]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return received


def main(argv: list[str] | None = None) -> int:
    """Run one of the condition-variable demonstrations."""
    parser = argparse.ArgumentParser(prog="condvars", description="condition variable demos")
    demos = parser.add_subparsers(dest="demo", required=True)

    for name, delay in (("join", 1.0), ("join_modular", 1.0), ("join_spin", 5.0)):
        sub = demos.add_parser(name)
        sub.add_argument("--delay", type=float, default=delay)
    for name in ("join_no_lock", "join_no_state_var"):
        sub = demos.add_parser(name)
        sub.add_argument("--delay", type=float, default=2.0)
        sub.add_argument("--timeout", type=float, default=None,
                         help="stop waiting for the lost signal after this many seconds")
    for name in ("pc", "pc_single_cv"):
        sub = demos.add_parser(name)
        sub.add_argument("buffersize", type=_atoi)
        sub.add_argument("loops", type=_atoi)
        sub.add_argument("consumers", type=_atoi)

    args = parser.parse_args(argv)
    if args.demo == "join":
        join_demo(args.delay)
    elif args.demo == "join_modular":
        _join_modular_demo(args.delay)
    elif args.demo == "join_spin":
        join_spin_demo(args.delay)
    elif args.demo == "join_no_lock":
        _join_no_lock_demo(args.delay, args.timeout)
    elif args.demo == "join_no_state_var":
        join_no_state_demo(args.delay, args.timeout)
    else:
        try:
            run_producer_consumer(
                args.buffersize, args.loops, args.consumers, args.demo == "pc_single_cv"
            )
        except ValueError as exc:
            parser.error(str(exc))
    return 0