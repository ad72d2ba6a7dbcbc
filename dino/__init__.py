from __future__ import annotations

from .document import Document
from .errors import (
    DinoError,
    KeyNotFoundError,
    StoreAlreadyLoadedError,
    StoreCorruptError,
    StoreEncodeError,
    StoreIOError,
    StoreNotLoadedError,
    StoreOpenError,
    StoreStateError,
    StoreWriteError,
)
from .settings import Settings, get_settings
from .store import Store

__all__ = [
    "Store",
    "Document",
    "Settings",
    "get_settings",
    "DinoError",
    "KeyNotFoundError",
    "StoreStateError",
    "StoreNotLoadedError",
    "StoreAlreadyLoadedError",
    "StoreIOError",
    "StoreOpenError",
    "StoreWriteError",
    "StoreCorruptError",
    "StoreEncodeError",
]
