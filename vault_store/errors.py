from __future__ import annotations

from pathlib import Path


class VaultStoreError(Exception):
    """Base class for all errors raised by vault_store."""


class CipherError(VaultStoreError):
    """Raised by a cipher adapter when a ciphertext cannot be decrypted."""


class StoreUnreadable(VaultStoreError):
    """
    The vault file exists but could not be decrypted or parsed.

    Wrong key and corrupted file look the same to the user, so both map here.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = path
        super().__init__("Your .vault file is unreadable; check your VAULT_KEY and VAULT_PATH settings")


class ServiceNotConfigured(VaultStoreError):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f'Service "{service}" is not configured')


class WriteFailure(VaultStoreError):
    def __init__(self, path: Path | str):
        self.path = path
        super().__init__(f"Failed to write vault file {path}")


class SourceNotConfigured(VaultStoreError):
    def __init__(self, source: str):
        self.source = source
        super().__init__(f'Source "{source}" is not configured')


class ReservedSourceName(VaultStoreError):
    def __init__(self, source: str):
        self.source = source
        super().__init__(f'"{source}" is a reserved source name')


class SourceUnavailable(VaultStoreError):
    """No connector is registered for the source's type."""

    def __init__(self, source: str, source_type: str | None = None):
        self.source = source
        self.source_type = source_type
        msg = f'Source "{source}" has no available connector'
        if source_type:
            msg += f" (type: {source_type})"
        super().__init__(msg)
