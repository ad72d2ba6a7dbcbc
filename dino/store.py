from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Iterator

from .document import Document
from .errors import (
    KeyNotFoundError,
    StoreAlreadyLoadedError,
    StoreCorruptError,
    StoreEncodeError,
    StoreNotLoadedError,
    StoreOpenError,
    StoreWriteError,
)
from .json_file import DocumentTree, dump_tree, is_scalar, parse_tree
from .locks import GLOBAL_PATH_LOCKS
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _check_key(key: object) -> None:
    if not isinstance(key, str):
        raise TypeError(f"keys must be str, got {type(key).__name__}")


def _frozen(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _frozen(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_frozen(v) for v in value)
    return value


class Store:
    """
    A flat key-value store persisted to a single JSON file.

    - load() must run before anything else; it creates the file if missing.
    - Every mutation rewrites the whole file in place (truncate, seek, write).
    - One Store per path per process; nothing coordinates other processes.
    """

    def __init__(self, path: str | os.PathLike[str], settings: Settings | None = None):
        self._path = Path(path)
        self._settings = settings or get_settings()
        self._file: IO[bytes] | None = None
        self._raw: str | None = None
        self._tree: DocumentTree | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def raw_text(self) -> str | None:
        return self._raw

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    def load(self) -> None:
        if self._tree is not None:
            raise StoreAlreadyLoadedError(self._path)

        encoding = self._settings.encoding
        with GLOBAL_PATH_LOCKS.critical_section(self._path):
            try:
                fd = os.open(self._path, os.O_RDWR | os.O_CREAT, 0o666)
                f = os.fdopen(fd, "r+b")
            except OSError as e:
                logger.exception("Cannot open database file %s", self._path)
                raise StoreOpenError(f"Cannot open the database at {self._path}: {e}") from e

            try:
                raw = f.read().decode(encoding)
                tree = parse_tree(raw)
            except OSError as e:
                f.close()
                logger.exception("Cannot read database file %s", self._path)
                raise StoreOpenError(f"Cannot read the database at {self._path}: {e}") from e
            except UnicodeDecodeError as e:
                f.close()
                logger.exception("Cannot decode database file %s", self._path)
                raise StoreCorruptError(f"Database at {self._path} is not valid {encoding} text") from e
            except StoreCorruptError:
                f.close()
                logger.exception("Cannot parse database file %s", self._path)
                raise

        self._file = f
        self._raw = raw
        self._tree = tree
        holders = GLOBAL_PATH_LOCKS.open_handle(self._path)
        if holders > 1:
            logger.warning("%s is loaded by %d stores in this process; the last write wins", self._path, holders)
        logger.debug("Loaded %s (%d keys)", self._path, len(tree))

    def close(self) -> None:
        f, self._file = self._file, None
        self._raw = None
        self._tree = None
        if f is not None:
            GLOBAL_PATH_LOCKS.close_handle(self._path)
            f.close()

    def __enter__(self) -> "Store":
        self.load()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _loaded_tree(self) -> DocumentTree:
        if self._tree is None:
            raise StoreNotLoadedError(self._path)
        return self._tree

    def find(self, key: str) -> Any:
        """
        Return the value stored under `key`.

        Objects come back as read-only views (nested lists as tuples), so the
        tree can only change through a mutation that rewrites the file.
        """
        val = self._loaded_tree().get(key)
        if val is None:
            raise KeyNotFoundError(key)
        return _frozen(val)

    def contains_key(self, key: str) -> bool:
        return key in self._loaded_tree()

    def len(self) -> int:
        return len(self._loaded_tree())

    def keys(self) -> list[str]:
        return list(self._loaded_tree())

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._loaded_tree())

    def insert(self, key: str, value: str | int | float | bool) -> None:
        _check_key(key)
        if not is_scalar(value):
            raise TypeError(f"insert() takes a scalar value, got {type(value).__name__}; use insert_tree()")
        self._commit({**self._loaded_tree(), key: value})

    def insert_tree(self, key: str, document: Document) -> None:
        _check_key(key)
        if not isinstance(document, Document):
            raise TypeError(f"insert_tree() takes a Document, got {type(document).__name__}")
        self._commit({**self._loaded_tree(), key: dict(document.children)})

    def remove(self, key: str) -> None:
        tree = dict(self._loaded_tree())
        tree.pop(key, None)
        # Rewritten even when the key was absent.
        self._commit(tree)

    def _commit(self, tree: DocumentTree) -> None:
        """
        Rewrite the backing file with `tree`, then adopt it as the document tree.

        Serialization and encoding happen before the file is truncated, so a
        value that cannot be written leaves both the file and the store as they were.
        """
        f = self._file
        if f is None:
            raise StoreNotLoadedError(self._path)

        text = dump_tree(tree, indent=self._settings.indent, sort_keys=self._settings.sort_keys)
        try:
            data = text.encode(self._settings.encoding)
        except UnicodeEncodeError as e:
            raise StoreEncodeError(
                f"Cannot encode the database at {self._path} as {self._settings.encoding}: {e.reason}"
            ) from e

        with GLOBAL_PATH_LOCKS.critical_section(self._path):
            try:
                f.truncate(0)
                f.seek(0)
                f.write(data)
                f.flush()
            except OSError as e:
                logger.exception("Cannot write to the database %s", self._path)
                # The file may now be empty or partial; the store is no longer usable.
                self.close()
                raise StoreWriteError(f"Cannot write to the database at {self._path}: {e}") from e

        self._tree = tree
        if self._settings.debug_log_writes:
            logger.debug("Rewrote %s (%d keys, %d bytes)", self._path, len(tree), len(data))

    def __len__(self) -> int:
        return self.len()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __getitem__(self, key: str) -> Any:
        return self.find(key)

    def __setitem__(self, key: str, value: Any) -> None:
        if isinstance(value, Document):
            self.insert_tree(key, value)
        else:
            self.insert(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __repr__(self) -> str:
        state = f"{len(self._tree)} keys" if self._tree is not None else "unloaded"
        return f"Store({str(self._path)!r}, {state})"
