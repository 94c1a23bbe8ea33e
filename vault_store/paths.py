from __future__ import annotations

import os
from pathlib import Path

VAULT_FILENAME = ".vault"


def home_dir() -> Path:
    home = os.getenv("HOME") or os.getenv("USERPROFILE")
    return Path(home) if home else Path.home()


def default_vault_path() -> Path:
    return home_dir() / VAULT_FILENAME


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
