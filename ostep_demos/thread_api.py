"""Creating threads, passing them arguments and collecting their results."""

from __future__ import annotations

import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, TypeVar

from .common import _atoi

T = TypeVar("T")


@dataclass(frozen=True)
class ThreadArgs:
    """Two integers handed to a thread."""

    a: int
    b: int


def _run_thread(target: Callable[..., T], *args: object) -> T:
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(target, *args).result()


def create_demo() -> ThreadArgs:
    """Start a thread with a pair of arguments; return what it received."""

    def mythread(args: ThreadArgs) -> ThreadArgs:
        print(f"{args.a} {args.b}", flush=True)
        return args

    seen = _run_thread(mythread, ThreadArgs(10, 20))
    print("done", flush=True)
    return seen


def simple_args_demo(value: int = 100) -> int:
    """Hand a thread one value; it returns that value plus one."""

    def mythread(arg: int) -> int:
        print(arg, flush=True)
        return arg + 1

    returned = _run_thread(mythread, value)
    print(f"returned {returned}", flush=True)
    return returned


def return_args_demo(args: ThreadArgs | None = None) -> tuple[int, int]:
    """Hand a thread a pair of arguments; it returns a pair of results."""
    if args is None:
        args = ThreadArgs(10, 20)

    def mythread(received: ThreadArgs) -> tuple[int, int]:
        print(f"args {received.a} {received.b}", flush=True)
        return (1, 2)

    x, y = _run_thread(mythread, args)
    print(f"returned {x} {y}", flush=True)
    return (x, y)


def letters_demo() -> list[str]:
    """Two threads print their letter; return the letters in printed order."""
    printed: list[str] = []
    guard = threading.Lock()

    def mythread(letter: str) -> None:
        with guard:
            print(letter, flush=True)
            printed.append(letter)

    print("main: begin", flush=True)
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(mythread, letter) for letter in ("A", "B")]
        for future in futures:
            future.result()
    print("main: end", flush=True)
    return printed


class _Shared:
    def __init__(self) -> None:
        self.counter = 0


def racy_counter(loops: int) -> int:
    """Two threads each add ``loops`` to a shared counter without a lock."""
    shared = _Shared()

    def mythread(letter: str) -> None:
        cursor = iter(range(loops))
        print(f"{letter}: begin [addr of i: {hex(id(cursor))}]", flush=True)
        for _ in cursor:
            shared.counter = shared.counter + 1
        print(f"{letter}: done", flush=True)

    workers = [threading.Thread(target=mythread, args=(letter,)) for letter in ("A", "B")]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return shared.counter


def t1_main(argv: list[str] | None = None) -> int:
    """Run the racy counter and compare it with the expected total."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: main-first <loopcount>", file=sys.stderr)
        raise SystemExit(1)
    loops = _atoi(args[0])
    print("main: begin [counter = 0]", flush=True)
    counter = racy_counter(loops)
    print(f"main: done\n [counter: {counter}]\n [should: {loops * 2}]", flush=True)
    return 0


def va_main(argv: list[str] | None = None) -> int:
    """Print where code, a heap allocation and a local object live."""
    print(f"location of code : {hex(id(va_main.__code__))}")
    heap = bytearray(int(100e6))
    print(f"location of heap : {hex(id(heap))}")
    local = [3]
    print(f"location of stack: {hex(id(local))}")
    return 0