"""A stack of integers kept in a memory-mapped file, persisting across runs."""

from __future__ import annotations

import mmap
import os
import struct
import sys
from types import TracebackType

from .common import _atoi

_COUNT = struct.Struct("@N")
_ITEM = struct.Struct("@i")

DEFAULT_IMAGE = "ps.img"


class PersistentStack:
    """Integer stack backed by a file: a native size count, then native ints."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file = open(path, "r+b")
        try:
            size = os.fstat(self._file.fileno()).st_size
            if size < _COUNT.size or size % _ITEM.size:
                raise ValueError(
                    f"image size {size} must be at least {_COUNT.size} "
                    f"and a multiple of {_ITEM.size}"
                )
            self._map = mmap.mmap(self._file.fileno(), size)
        except BaseException:
            self._file.close()
            raise
        self._size = size
        if len(self) > self.capacity:
            self.close()
            raise ValueError("image holds a count larger than its capacity")

    @property
    def capacity(self) -> int:
        """How many integers the image can hold."""
        return (self._size - _COUNT.size) // _ITEM.size

    def __len__(self) -> int:
        return _COUNT.unpack_from(self._map, 0)[0]

    def _offset(self, index: int) -> int:
        return _COUNT.size + index * _ITEM.size

    def push(self, value: int) -> bool:
        """Push ``value``; return False, leaving the stack unchanged, when full."""
        count = len(self)
        if self._offset(count + 1) > self._size:
            return False
        try:
            _ITEM.pack_into(self._map, self._offset(count), value)
        except struct.error as exc:
            raise ValueError(f"{value} does not fit in a stack slot") from exc
        _COUNT.pack_into(self._map, 0, count + 1)
        return True

    def pop(self) -> int | None:
        """Pop and return the top value, or None when the stack is empty."""
        count = len(self)
        if count == 0:
            return None
        count -= 1
        value = _ITEM.unpack_from(self._map, self._offset(count))[0]
        _COUNT.pack_into(self._map, 0, count)
        return value

    def close(self) -> None:
        """Flush the mapping and release the file."""
        if self._file.closed:
            return
        self._map.flush()
        self._map.close()
        self._file.close()

    def __enter__(self) -> PersistentStack:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()


def create_image(path: str | os.PathLike[str], size: int = mmap.PAGESIZE) -> None:
    """Create an empty, zero-filled backing file of ``size`` bytes."""
    with open(path, "wb") as handle:
        handle.truncate(size)


def main(argv: list[str] | None = None) -> int:
    """Apply "pop" and push arguments to the stack in ./ps.img."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        with PersistentStack(DEFAULT_IMAGE) as stack:
            for arg in args:
                if arg == "pop":
                    value = stack.pop()
                    if value is not None:
                        print(value)
                else:
                    stack.push(_atoi(arg))
    except (OSError, ValueError) as exc:
        print(f"pstack: {exc}", file=sys.stderr)
        raise SystemExit(1)
    return 0