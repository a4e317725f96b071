"""Introductory programs: CPU and memory virtualisation, threads and I/O."""

from __future__ import annotations

import itertools
import os
import sys
import tempfile
import threading

from .common import _atoi, spin

DEFAULT_IO_PATH = os.path.join(tempfile.gettempdir(), "file")


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _usage(message: str) -> None:
    print(f"usage: {message}", file=sys.stderr)
    raise SystemExit(1)


def cpu_main(argv: list[str] | None = None) -> int:
    """Print a string once a second, forever."""
    args = _args(argv)
    if len(args) != 1:
        _usage("cpu <string>")
    text = args[0]
    for _ in itertools.count():
        print(text, flush=True)
        spin(1)
    return 0


def mem_main(argv: list[str] | None = None) -> int:
    """Increment a heap-held value once a second, forever."""
    args = _args(argv)
    if len(args) != 1:
        _usage("mem <value>")
    pid = os.getpid()
    cell = [0]
    print(f"({pid}) addr pointed to by p: {hex(id(cell))}", flush=True)
    cell[0] = _atoi(args[0])
    for _ in itertools.count():
        spin(1)
        cell[0] += 1
        print(f"({pid}) value of p: {cell[0]}", flush=True)
    return 0


class _Counter:
    def __init__(self) -> None:
        self.value = 0


def count_concurrently(loops: int, threads: int = 2) -> int:
    """Increment a shared counter from several threads with no lock."""
    counter = _Counter()

    def worker() -> None:
        for _ in range(loops):
            counter.value += 1

    workers = [threading.Thread(target=worker) for _ in range(threads)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()
    return counter.value


def threads_main(argv: list[str] | None = None) -> int:
    """Run two unsynchronised incrementing threads and report the total."""
    args = _args(argv)
    if len(args) != 1:
        _usage("threads <loops>")
    loops = _atoi(args[0])
    print(f"Initial value : {0}")
    print(f"Final value   : {count_concurrently(loops, 2)}")
    return 0


def write_hello(path: str | os.PathLike[str]) -> int:
    """Write "hello world" to ``path``, force it to disk, return bytes written."""
    data = b"hello world\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb", buffering=0) as handle:
        written = handle.write(data)
        if written != len(data):
            raise OSError(f"short write to {path}: {written} of {len(data)} bytes")
        os.fsync(handle.fileno())
    return written


def io_main(argv: list[str] | None = None) -> int:
    """Write the greeting to the given file, or to the default one."""
    args = _args(argv)
    if len(args) > 1:
        _usage("io [file]")
    write_hello(args[0] if args else DEFAULT_IO_PATH)
    return 0