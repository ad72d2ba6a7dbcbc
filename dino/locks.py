from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def path_key(path: Path) -> str:
    return os.path.normcase(str(path.resolve()))


class PathLockRegistry:
    """
    Per-path bookkeeping shared by every Store in the process.

    - critical_section(path) serializes loads and rewrites of one backing file,
      so a truncate never interleaves with another store's write.
    - open_handle/close_handle count the stores holding a path loaded; more
      than one means their rewrites will overwrite each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._handles: dict[str, int] = {}

    @contextmanager
    def critical_section(self, path: Path) -> Iterator[None]:
        key = path_key(path)
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            yield

    def open_handle(self, path: Path) -> int:
        """Record a store loading `path`; returns how many now hold it."""
        key = path_key(path)
        with self._guard:
            count = self._handles.get(key, 0) + 1
            self._handles[key] = count
            return count

    def close_handle(self, path: Path) -> None:
        key = path_key(path)
        with self._guard:
            count = self._handles.get(key, 0) - 1
            if count > 0:
                self._handles[key] = count
            else:
                self._handles.pop(key, None)

    def handles(self, path: Path) -> int:
        with self._guard:
            return self._handles.get(path_key(path), 0)


GLOBAL_PATH_LOCKS = PathLockRegistry()
