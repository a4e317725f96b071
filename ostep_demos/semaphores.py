"""Semaphores as locks, join signals, throttles and reader/writer locks."""

from __future__ import annotations

import argparse
import threading
import time
from collections import deque

from .common import _atoi
from .condvars import END_OF_PRODUCTION, _Log

MAX_CONSUMERS = 10


def binary_counter(loops: int = 10_000_000, threads: int = 2) -> int:
    """Increment a shared counter from several threads under a binary semaphore."""
    mutex = threading.Semaphore(1)
    counter = 0

    def child() -> None:
        nonlocal counter
        for _ in range(loops):
            with mutex:
                counter += 1

    workers = [threading.Thread(target=child) for _ in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return counter


def join_demo(delay: float = 2.0) -> tuple[str, ...]:
    """Parent waits on a semaphore that starts at zero until the child posts."""
    log = _Log()
    done = threading.Semaphore(0)

    def child() -> None:
        time.sleep(delay)
        log.say("child")
        done.release()

    log.say("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    done.acquire()
    log.say("parent: end")
    thread.join()
    return log.lines


class SemaphoreBuffer:
    """A fixed-size FIFO whose slots are counted by semaphores."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"buffer size must be positive, not {size}")
        self._items: deque[int] = deque()
        self._empty = threading.Semaphore(size)
        self._full = threading.Semaphore(0)
        self._mutex = threading.Semaphore(1)

    def put(self, value: int) -> None:
        """Wait for a free slot and store ``value``."""
        self._empty.acquire()
        with self._mutex:
            self._items.append(value)
        self._full.release()

    def get(self) -> int:
        """Wait for an item and remove the oldest one."""
        self._full.acquire()
        with self._mutex:
            value = self._items.popleft()
        self._empty.release()
        return value


def producer_consumer(size: int, loops: int, consumers: int = 1) -> list[list[int]]:
    """Produce ``loops`` values for up to ten consumers; return what each got.

    Each consumer prints its id and every value it takes, the end marker
    included; the markers are left out of the returned lists.
    """
    if not 0 <= consumers <= MAX_CONSUMERS:
        raise ValueError(f"consumer count must be between 0 and {MAX_CONSUMERS}")
    buffer = SemaphoreBuffer(size)
    received: list[list[int]] = [[] for _ in range(consumers)]

    def producer() -> None:
        for value in range(loops):
            buffer.put(value)
        for _ in range(consumers):
            buffer.put(END_OF_PRODUCTION)

    def consumer(ident: int, values: list[int]) -> None:
        while True:
            value = buffer.get()
            print(f"{ident} {value}", flush=True)
            if value == END_OF_PRODUCTION:
                return
            values.append(value)

    threads = [threading.Thread(target=producer)]
    threads += [
        threading.Thread(target=consumer, args=(ident, values))
        for ident, values in enumerate(received)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return received


class RWLock:
    """Reader/writer lock: many readers at once, or one writer."""

    def __init__(self) -> None:
        self._readers = 0
        self._lock = threading.Semaphore(1)
        self._writelock = threading.Semaphore(1)

    def acquire_read(self) -> None:
        """Enter as a reader; the first reader shuts writers out."""
        with self._lock:
            self._readers += 1
            if self._readers == 1:
                self._writelock.acquire()

    def release_read(self) -> None:
        """Leave as a reader; the last reader lets writers in."""
        with self._lock:
            if self._readers == 0:
                raise RuntimeError("read lock released while not held")
            self._readers -= 1
            if self._readers == 0:
                self._writelock.release()

    def acquire_write(self) -> None:
        """Enter as the only writer."""
        self._writelock.acquire()

    def release_write(self) -> None:
        """Leave as the writer."""
        self._writelock.release()


def rwlock_demo(read_loops: int, write_loops: int) -> tuple[int, int]:
    """A reader and a writer share a counter; return the last read and final value."""
    lock = RWLock()
    counter = 0
    last_read = 0

    def reader() -> None:
        nonlocal last_read
        local = 0
        for _ in range(read_loops):
            lock.acquire_read()
            local = counter
            lock.release_read()
            print(f"read {local}", flush=True)
        print(f"read done: {local}", flush=True)
        last_read = local

    def writer() -> None:
        nonlocal counter
        for _ in range(write_loops):
            lock.acquire_write()
            counter += 1
            lock.release_write()
        print("write done", flush=True)

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    print("all done", flush=True)
    return last_read, counter


def throttle(num_threads: int, sem_value: int, delay: float = 1.0) -> int:
    """Let at most ``sem_value`` children run at once; return the peak observed."""
    gate = threading.Semaphore(sem_value)
    guard = threading.Lock()
    active = 0
    peak = 0

    def child(ident: int) -> None:
        nonlocal active, peak
        with gate:
            with guard:
                active += 1
                peak = max(peak, active)
            print(f"child {ident}", flush=True)
            time.sleep(delay)
            with guard:
                active -= 1

    print("parent: begin", flush=True)
    children = [threading.Thread(target=child, args=(ident,)) for ident in range(num_threads)]
    for thread in children:
        thread.start()
    for thread in children:
        thread.join()
    print("parent: end", flush=True)
    return peak


def main(argv: list[str] | None = None) -> int:
    """Run one of the semaphore demonstrations."""
    parser = argparse.ArgumentParser(prog="semaphores", description="semaphore demos")
    demos = parser.add_subparsers(dest="demo", required=True)

    binary = demos.add_parser("binary")
    binary.add_argument("--loops", type=int, default=10_000_000)
    binary.add_argument("--threads", type=int, default=2)

    join = demos.add_parser("join")
    join.add_argument("--delay", type=float, default=2.0)

    pc = demos.add_parser("pc")
    pc.add_argument("buffersize", type=_atoi)
    pc.add_argument("loops", type=_atoi)
    pc.add_argument("consumers", type=_atoi)

    rw = demos.add_parser("rwlock")
    rw.add_argument("readloops", type=_atoi)
    rw.add_argument("writeloops", type=_atoi)

    thr = demos.add_parser("throttle")
    thr.add_argument("num_threads", type=_atoi)
    thr.add_argument("sem_value", type=_atoi)
    thr.add_argument("--delay", type=float, default=1.0)

    args = parser.parse_args(argv)
    try:
        if args.demo == "binary":
            result = binary_counter(args.loops, args.threads)
            print(f"result: {result} (should be {args.loops * args.threads})")
        elif args.demo == "join":
            join_demo(args.delay)
        elif args.demo == "pc":
            producer_consumer(args.buffersize, args.loops, args.consumers)
        elif args.demo == "rwlock":
            rwlock_demo(args.readloops, args.writeloops)
        else:
            throttle(args.num_threads, args.sem_value, args.delay)
    except ValueError as exc:
        parser.error(str(exc))
    return 0