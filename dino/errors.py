from __future__ import annotations


class DinoError(Exception):
    """Base class for everything raised by dino."""


class KeyNotFoundError(DinoError, KeyError):
    """
    Raised by Store.find when a key is absent or holds null.

    This is the one error callers are expected to handle.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return (
            f"The key `{self.key}` does not exist in the database. "
            "You might want to create this or handle the error!"
        )


class StoreStateError(DinoError, RuntimeError):
    pass


class StoreNotLoadedError(StoreStateError):
    def __init__(self, path: object):
        super().__init__(f"Store at {path} is not loaded; call load() first")


class StoreAlreadyLoadedError(StoreStateError):
    def __init__(self, path: object):
        super().__init__(f"Store at {path} is already loaded")


class StoreIOError(DinoError, OSError):
    pass


class StoreOpenError(StoreIOError):
    pass


class StoreWriteError(StoreIOError):
    pass


class StoreCorruptError(DinoError, ValueError):
    """The backing file does not hold a JSON object."""


class StoreEncodeError(DinoError, ValueError):
    """
    A mutation produced a tree that cannot be written in the configured
    encoding. Raised before the file is touched; the store is unchanged.
    """
