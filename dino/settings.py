from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw.strip())


@dataclass(frozen=True)
class Settings:
    # Serialization
    indent: int | None = 2
    sort_keys: bool = True
    encoding: str = "utf-8"

    # Debug
    debug_log_writes: bool = False


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    if env_file is not None:
        # Variables already present in the environment take precedence.
        load_dotenv(env_file, override=False)

    indent: int | None = _env_int("DINO_JSON_INDENT", 2)
    if indent is not None and indent < 0:
        indent = None

    return Settings(
        indent=indent,
        sort_keys=_env_bool("DINO_JSON_SORT_KEYS", True),
        encoding=os.getenv("DINO_ENCODING", "utf-8"),
        debug_log_writes=_env_bool("DINO_DEBUG_LOG_WRITES", False),
    )
