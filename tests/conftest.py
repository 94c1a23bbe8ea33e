from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Callable

import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from vault_store import LocalStore, VaultCipher  # noqa: E402

TEST_KEY = "correct horse battery staple"


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".vault"


@pytest.fixture
def make_store(vault_path: Path) -> Callable[..., LocalStore]:
    """
    Build LocalStores over the sandboxed vault path; keyword arguments are
    passed through to LocalStore.
    """

    def _make(path: Path | None = None, key: str = TEST_KEY, **kwargs: Any) -> LocalStore:
        return LocalStore(path or vault_path, key, **kwargs)

    return _make


@pytest.fixture
def store(make_store: Callable[..., LocalStore]) -> LocalStore:
    return make_store()


@pytest.fixture
def write_plaintext(vault_path: Path) -> Callable[[str], None]:
    """Encrypt arbitrary plaintext under the test key and write it as the vault file."""

    def _write(plaintext: str) -> None:
        vault_path.parent.mkdir(parents=True, exist_ok=True)
        vault_path.write_text(VaultCipher(TEST_KEY).encrypt(plaintext), encoding="utf-8")

    return _write
