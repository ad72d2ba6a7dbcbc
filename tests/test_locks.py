from __future__ import annotations

import threading

from dino import Store
from dino.locks import GLOBAL_PATH_LOCKS, PathLockRegistry


def test_critical_section_is_shared_per_path(tmp_path):
    registry = PathLockRegistry()
    entered = threading.Event()

    def _other():
        with registry.critical_section(tmp_path / "sub" / ".." / "db.json"):
            entered.set()

    with registry.critical_section(tmp_path / "db.json"):
        t = threading.Thread(target=_other)
        t.start()
        assert not entered.wait(0.1)
    t.join(timeout=5)
    assert entered.is_set()


def test_critical_sections_on_different_paths_do_not_block(tmp_path):
    registry = PathLockRegistry()
    with registry.critical_section(tmp_path / "a.json"):
        with registry.critical_section(tmp_path / "b.json"):
            pass


def test_handle_counting(tmp_path):
    registry = PathLockRegistry()
    path = tmp_path / "db.json"

    assert registry.open_handle(path) == 1
    assert registry.open_handle(path) == 2
    registry.close_handle(path)
    assert registry.handles(path) == 1
    registry.close_handle(path)
    registry.close_handle(path)
    assert registry.handles(path) == 0


def test_store_lifecycle_updates_handles(db_path):
    assert GLOBAL_PATH_LOCKS.handles(db_path) == 0
    with Store(db_path):
        assert GLOBAL_PATH_LOCKS.handles(db_path) == 1
    assert GLOBAL_PATH_LOCKS.handles(db_path) == 0
