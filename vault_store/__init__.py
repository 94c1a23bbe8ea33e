from __future__ import annotations

from .async_store import AsyncLocalStore, AsyncStore
from .canonical import canonicalize, decode_document, encode_document
from .cipher import VAULT_SALT, Cipher, VaultCipher
from .composite import CompositeStore
from .document import LOCAL_SOURCE, SourceConfig, VaultDocument
from .errors import (
    CipherError,
    ReservedSourceName,
    ServiceNotConfigured,
    SourceNotConfigured,
    SourceUnavailable,
    StoreUnreadable,
    VaultStoreError,
    WriteFailure,
)
from .interfaces import Store
from .local_store import LocalStore
from .settings import Settings, get_settings
from .sources import RemoteStore, SourceRegistry

__all__ = [
    "AsyncLocalStore",
    "AsyncStore",
    "canonicalize",
    "decode_document",
    "encode_document",
    "VAULT_SALT",
    "Cipher",
    "VaultCipher",
    "CompositeStore",
    "LOCAL_SOURCE",
    "SourceConfig",
    "VaultDocument",
    "CipherError",
    "ReservedSourceName",
    "ServiceNotConfigured",
    "SourceNotConfigured",
    "SourceUnavailable",
    "StoreUnreadable",
    "VaultStoreError",
    "WriteFailure",
    "Store",
    "LocalStore",
    "Settings",
    "get_settings",
    "RemoteStore",
    "SourceRegistry",
]
