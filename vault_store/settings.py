from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .cipher import DEFAULT_WORK
from .paths import default_vault_path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    vault_path: Path
    vault_key: str

    # Keep the decrypted document in memory for the store's lifetime.
    cache: bool

    # PBKDF2 iteration count; must match the value the file was written with.
    work: int


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    if env_file is not None:
        load_dotenv(env_file)

    raw_path = os.getenv("VAULT_PATH", "").strip()
    vault_path = Path(raw_path).expanduser() if raw_path else default_vault_path()

    return Settings(
        vault_path=vault_path,
        vault_key=os.getenv("VAULT_KEY", ""),
        cache=_env_bool("VAULT_CACHE", True),
        work=_env_int("VAULT_WORK", DEFAULT_WORK),
    )
