from __future__ import annotations

import base64
import logging
from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import CipherError

logger = logging.getLogger(__name__)

# Shared by every installation. Files written by this package depend on it; it is
# not the original tool's salt, and Fernet framing differs from that format anyway.
VAULT_SALT = "73F6C3A8-0C8B-4E1B-9A62-5D3E7E2B8F14"

DEFAULT_WORK = 100


class Cipher(Protocol):
    """
    Authenticated encrypt/decrypt over text. Implementations may be slow
    (iterated key derivation), so callers should keep them off the event loop.
    """

    def encrypt(self, plaintext: str) -> str:
        ...

    def decrypt(self, ciphertext: str) -> str:
        """Raise CipherError if the ciphertext was not produced under this key."""
        ...


class VaultCipher(Cipher):
    """
    PBKDF2-HMAC-SHA256 key derivation feeding a Fernet token (AES-CBC + HMAC).

    The derived key is computed lazily and kept for the lifetime of the instance.
    """

    def __init__(self, key: str, *, work: int = DEFAULT_WORK, salt: str = VAULT_SALT):
        if not key:
            raise ValueError("A non-empty key is required")
        if work < 1:
            raise ValueError("work must be a positive iteration count")
        self._key = key
        self._work = int(work)
        self._salt = salt.encode("utf-8")
        self._fernet: Fernet | None = None

    def _ensure_fernet(self) -> Fernet:
        if self._fernet is None:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=32,
                salt=self._salt,
                iterations=self._work,
            )
            derived = kdf.derive(self._key.encode("utf-8"))
            self._fernet = Fernet(base64.urlsafe_b64encode(derived))
            logger.debug("CIPHER: derived key (work=%d)", self._work)
        return self._fernet

    def encrypt(self, plaintext: str) -> str:
        token = self._ensure_fernet().encrypt(plaintext.encode("utf-8"))
        return token.decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        try:
            raw = self._ensure_fernet().decrypt(ciphertext.strip().encode("ascii"))
        except (InvalidToken, UnicodeEncodeError, ValueError) as e:
            raise CipherError("ciphertext failed authentication") from e
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CipherError("plaintext is not valid UTF-8") from e
