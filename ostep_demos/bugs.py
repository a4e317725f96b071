"""Classic concurrency bugs: atomicity violation, deadlock and ordering violation."""

from __future__ import annotations

import argparse
import contextlib
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

PR_STATE_INIT = 0
PROC_PID = 100

_T2_ATOMICITY = " " * 17
_T2_DEADLOCK = " " * 27


@dataclass
class ThreadInfo:
    """Shared thread record; ``pid`` is None once the process info is cleared."""

    pid: int | None


class PrThread:
    """A started thread plus its state, created the slow way."""

    def __init__(self, target: Callable[[], Any], delay: float = 1.0) -> None:
        self.state = PR_STATE_INIT
        self._result: Any = None
        self._error: Exception | None = None
        self._thread = threading.Thread(target=self._run, args=(target,))
        self._thread.start()
        time.sleep(delay)

    def _run(self, target: Callable[[], Any]) -> None:
        try:
            self._result = target()
        except Exception as exc:
            self._error = exc

    def wait(self) -> Any:
        """Join the thread; return its result or raise what it raised."""
        self._thread.join()
        if self._error is not None:
            raise self._error
        return self._result


def atomicity_demo(
    fixed: bool = False, check_delay: float = 2.0, clear_delay: float = 1.0
) -> int | None:
    """One thread checks then uses a pid another clears; return the pid used.

    Without the fix a clear between check and use raises RuntimeError.
    """
    info = ThreadInfo(pid=PROC_PID)
    lock: contextlib.AbstractContextManager[Any] = (
        threading.Lock() if fixed else contextlib.nullcontext()
    )

    def thread1() -> int | None:
        print("t1: before check", flush=True)
        with lock:
            if info.pid is None:
                return None
            print("t1: after check", flush=True)
            time.sleep(check_delay)
            print("t1: use!", flush=True)
            pid = info.pid
            if pid is None:
                raise RuntimeError("t1: process info cleared between check and use")
            print(pid, flush=True)
            return pid

    def thread2() -> None:
        print(f"{_T2_ATOMICITY}t2: begin", flush=True)
        time.sleep(clear_delay)
        with lock:
            print(f"{_T2_ATOMICITY}t2: set to NULL", flush=True)
            info.pid = None

    print("main: begin", flush=True)
    with ThreadPoolExecutor(max_workers=2) as pool:
        first = pool.submit(thread1)
        second = pool.submit(thread2)
        result = first.result()
        second.result()
    print("main: end", flush=True)
    return result


def deadlock_demo(timeout: float | None = None) -> frozenset[str]:
    """Two threads take two locks in opposite orders.

    With a timeout, a thread that cannot get its second lock gives up and
    releases its first; the names of those that gave up are returned.
    """
    locks = {"L1": threading.Lock(), "L2": threading.Lock()}
    limit = -1 if timeout is None else timeout
    gave_up: set[str] = set()
    guard = threading.Lock()

    def run(name: str, indent: str, first: str, second: str) -> None:
        def say(message: str) -> None:
            print(f"{indent}{name}: {message}", flush=True)

        say("begin")
        say(f"try to acquire {first}...")
        locks[first].acquire()
        say(f"{first} acquired")
        say(f"try to acquire {second}...")
        if not locks[second].acquire(timeout=limit):
            say(f"gave up on {second}")
            locks[first].release()
            with guard:
                gave_up.add(name)
            return
        say(f"{second} acquired")
        locks["L1"].release()
        locks["L2"].release()

    print("main: begin", flush=True)
    workers = [
        threading.Thread(target=run, args=("t1", "", "L1", "L2")),
        threading.Thread(target=run, args=("t2", _T2_DEADLOCK, "L2", "L1")),
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    print("main: end", flush=True)
    return frozenset(gave_up)


def ordering_demo(fixed: bool = False, delay: float = 1.0) -> int:
    """A thread reads the record of itself that its creator has yet to store.

    Without the fix that read fails with RuntimeError; return the state read.
    """
    print("ordering: begin", flush=True)
    m_thread: PrThread | None = None
    initialised = threading.Condition()
    ready = False

    def m_main() -> int:
        print("mMain: begin", flush=True)
        if fixed:
            with initialised:
                initialised.wait_for(lambda: ready)
        thread = m_thread
        if thread is None:
            raise RuntimeError("mMain: thread record used before it was stored")
        state = thread.state
        print(f"mMain: state is {state}", flush=True)
        return state

    m_thread = PrThread(m_main, delay)
    if fixed:
        with initialised:
            ready = True
            initialised.notify()

    state = m_thread.wait()
    print("ordering: end", flush=True)
    return state


def _fail(prog: str, exc: Exception) -> None:
    print(f"{prog}: {exc}", file=sys.stderr)
    raise SystemExit(1)


def atomicity_main(argv: list[str] | None = None) -> int:
    """Run the atomicity-violation demonstration."""
    parser = argparse.ArgumentParser(prog="atomicity")
    parser.add_argument("--fixed", action="store_true", help="guard with a lock")
    parser.add_argument("--check-delay", type=float, default=2.0)
    parser.add_argument("--clear-delay", type=float, default=1.0)
    args = parser.parse_args(argv)
    try:
        atomicity_demo(args.fixed, args.check_delay, args.clear_delay)
    except RuntimeError as exc:
        _fail("atomicity", exc)
    return 0


def deadlock_main(argv: list[str] | None = None) -> int:
    """Run the lock-ordering deadlock demonstration."""
    parser = argparse.ArgumentParser(prog="deadlock")
    parser.add_argument("--timeout", type=float, default=None,
                        help="give up on the second lock after this many seconds")
    args = parser.parse_args(argv)
    deadlock_demo(args.timeout)
    return 0


def ordering_main(argv: list[str] | None = None) -> int:
    """Run the ordering-violation demonstration."""
    parser = argparse.ArgumentParser(prog="ordering")
    parser.add_argument("--fixed", action="store_true",
                        help="wait on a condition variable first")
    parser.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)
    try:
        ordering_demo(args.fixed, args.delay)
    except RuntimeError as exc:
        _fail("ordering", exc)
    return 0