"""Process creation: fork, wait, exec and output redirection."""

from __future__ import annotations

import argparse
import os
import sys
import time
import traceback
from typing import Callable, NoReturn

_SELF = os.path.abspath(__file__)


def _fork() -> int:
    sys.stdout.flush()
    sys.stderr.flush()
    return os.fork()


def _run_child(body: Callable[[], None]) -> NoReturn:
    """Run ``body`` in a forked child and leave the process without unwinding."""
    status = 0
    try:
        body()
        sys.stdout.flush()
    except BaseException:
        traceback.print_exc()
        status = 1
    finally:
        os._exit(status)


def fork_hello() -> int:
    """Fork; both sides greet. Returns the child's pid without waiting."""
    print(f"hello world (pid:{os.getpid()})", flush=True)
    rc = _fork()
    if rc == 0:
        _run_child(lambda: print(f"hello, I am child (pid:{os.getpid()})"))
    print(f"hello, I am parent of {rc} (pid:{os.getpid()})", flush=True)
    return rc


def fork_wait() -> int:
    """Fork a child that sleeps a second; wait for it and return its pid."""
    print(f"hello world (pid:{os.getpid()})", flush=True)
    rc = _fork()
    if rc == 0:
        def child() -> None:
            print(f"hello, I am child (pid:{os.getpid()})", flush=True)
            time.sleep(1)
        _run_child(child)
    wc, _ = os.waitpid(rc, 0)
    print(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})", flush=True)
    return wc


def fork_exec(path: str | os.PathLike[str]) -> int:
    """Fork a child that runs ``wc`` on ``path``; wait and return its pid."""
    print(f"hello world (pid:{os.getpid()})", flush=True)
    rc = _fork()
    if rc == 0:
        def child() -> None:
            print(f"hello, I am child (pid:{os.getpid()})", flush=True)
            try:
                os.execvp("wc", ["wc", os.fspath(path)])
            except OSError:
                print("this shouldn't print out", end="", flush=True)
        _run_child(child)
    wc, _ = os.waitpid(rc, 0)
    print(f"hello, I am parent of {rc} (wc:{wc}) (pid:{os.getpid()})", flush=True)
    return wc


def fork_redirect(path: str | os.PathLike[str], output: str | os.PathLike[str]) -> int:
    """Run ``wc`` on ``path`` in a child whose stdout goes to ``output``."""
    rc = _fork()
    if rc == 0:
        def child() -> None:
            fd = os.open(output, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o700)
            if fd != 1:
                os.dup2(fd, 1)
                os.close(fd)
            try:
                os.execvp("wc", ["wc", os.fspath(path)])
            except OSError:
                pass
        _run_child(child)
    wc, _ = os.waitpid(rc, 0)
    return wc


def main(argv: list[str] | None = None) -> int:
    """Run one of the process demonstrations."""
    parser = argparse.ArgumentParser(prog="processes", description="process API demos")
    parser.add_argument("demo", choices=["p1", "p2", "p3", "p4"])
    parser.add_argument("file", nargs="?", default=_SELF,
                        help="file for wc to count (p3, p4)")
    parser.add_argument("output", nargs="?", default="./p4.output",
                        help="file that receives wc's output (p4)")
    args = parser.parse_args(argv)
    try:
        if args.demo == "p1":
            fork_hello()
        elif args.demo == "p2":
            fork_wait()
        elif args.demo == "p3":
            fork_exec(args.file)
        else:
            fork_redirect(args.file, args.output)
    except OSError:
        print("fork failed", file=sys.stderr)
        raise SystemExit(1)
    return 0