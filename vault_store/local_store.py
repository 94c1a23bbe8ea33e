from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import ValidationError

from .canonical import decode_document, encode_document
from .cipher import DEFAULT_WORK, Cipher, VaultCipher
from .disk import atomic_write_text, path_lock, read_text
from .document import CURRENT_SOURCE_KEY, LOCAL_SOURCE, SourceConfig, VaultDocument, merge_settings
from .errors import CipherError, ServiceNotConfigured, SourceNotConfigured, StoreUnreadable, WriteFailure
from .interfaces import Store
from .sources import SourceRegistry, check_source_name

if TYPE_CHECKING:
    from .composite import CompositeStore
    from .settings import Settings

logger = logging.getLogger(__name__)


class LocalStore(Store):
    """
    The encrypted vault file on local disk.

    Every transaction (save_*, delete_*, clear, import_settings and the source
    management calls) runs load -> mutate -> dump while holding the lock for
    the vault path, on a private copy of the document. The cache is replaced
    only after the write succeeds, so a failed dump leaves it untouched and
    callers never share the cached object.

    Other processes writing the same file are not coordinated with.
    """

    def __init__(
        self,
        path: Path | str,
        key: str | None = None,
        *,
        cipher: Cipher | None = None,
        cache: bool = True,
        work: int = DEFAULT_WORK,
        source: str | None = None,
        registry: SourceRegistry | None = None,
    ):
        if cipher is None:
            if not key:
                raise ValueError("Either key or cipher is required")
            cipher = VaultCipher(key, work=work)
        self._path = Path(path).expanduser()
        self._cipher = cipher
        self._cache_enabled = cache
        self._cache: VaultDocument | None = None
        self._source = source or None
        self._registry = registry or SourceRegistry()
        self._lock = path_lock(self._path)

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs: Any) -> "LocalStore":
        return cls(settings.vault_path, settings.vault_key, cache=settings.cache, work=settings.work, **kwargs)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    def get_name(self) -> str:
        return LOCAL_SOURCE

    def set_source(self, source: str | None) -> None:
        """Override the current source for this instance only (not persisted)."""
        self._source = source or None

    def invalidate_cache(self) -> None:
        with self._lock:
            self._cache = None

    def composite(self) -> "CompositeStore":
        from .composite import CompositeStore

        return CompositeStore(self)

    # -- load / dump -----------------------------------------------------

    def _read(self) -> VaultDocument:
        if self._cache_enabled and self._cache is not None:
            return self._cache

        try:
            content = read_text(self._path)
        except UnicodeDecodeError as e:
            logger.info("VAULT LOAD: %s is not a text file", self._path)
            raise StoreUnreadable(self._path) from e
        if content is None:
            logger.debug("VAULT LOAD: %s does not exist, starting empty", self._path)
            return VaultDocument()

        try:
            plaintext = self._cipher.decrypt(content)
            doc = VaultDocument.from_disk_doc(decode_document(plaintext))
        except (CipherError, ValueError, TypeError, ValidationError) as e:
            logger.info("VAULT LOAD: %s is unreadable: %s", self._path, type(e).__name__)
            raise StoreUnreadable(self._path) from e

        if self._cache_enabled:
            self._cache = doc
        return doc

    def load(self) -> VaultDocument:
        with self._lock:
            return self._read().copy_deep()

    def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None:
        if not isinstance(doc, VaultDocument):
            doc = VaultDocument.from_disk_doc(doc)
        snapshot = doc.copy_deep()
        with self._lock:
            ciphertext = self._cipher.encrypt(encode_document(snapshot.to_disk_doc()))
            try:
                atomic_write_text(self._path, ciphertext)
            except OSError as e:
                logger.warning("VAULT DUMP: failed to write %s: %r", self._path, e)
                raise WriteFailure(self._path) from e
            if self._cache_enabled:
                self._cache = snapshot
        logger.debug("VAULT DUMP: wrote %s", self._path)

    # -- sources ---------------------------------------------------------

    def list_sources(self) -> tuple[list[str], str]:
        doc = self.load()
        return self._registry.list_names(doc), self._registry.current_name(doc, self._source)

    def get_store(self, source: str | None) -> Store:
        if not source or source == LOCAL_SOURCE:
            return self
        return self._registry.resolve(source, self.load(), self)

    def current_store(self) -> Store:
        doc = self.load()
        current = self._registry.current_name(doc, self._source)
        return self._registry.resolve(current, doc, self)

    def add_source(self, name: str, config: SourceConfig | Mapping[str, Any]) -> None:
        name = check_source_name(name)
        if not isinstance(config, SourceConfig):
            config = SourceConfig.model_validate(config)
        with self._lock:
            doc = self.load()
            doc.sources[name] = config.to_disk_doc()
            self.dump(doc)
        logger.info("VAULT SOURCES: added %s", name)

    def delete_source(self, name: str) -> None:
        with self._lock:
            doc = self.load()
            if doc.get_source(name) is None:
                raise SourceNotConfigured(name)
            del doc.sources[name]
            if doc.current_source == name:
                doc.sources.pop(CURRENT_SOURCE_KEY, None)
            self.dump(doc)
        logger.info("VAULT SOURCES: deleted %s", name)

    def set_current_source(self, name: str | None) -> None:
        with self._lock:
            doc = self.load()
            if not name or name == LOCAL_SOURCE:
                doc.sources.pop(CURRENT_SOURCE_KEY, None)
            elif doc.get_source(name) is None:
                raise SourceNotConfigured(name)
            else:
                doc.sources[CURRENT_SOURCE_KEY] = name
            self.dump(doc)

    # -- services --------------------------------------------------------

    def list_services(self) -> list[str]:
        return sorted(self.load().services)

    def save_globals(self, settings: Mapping[str, Any]) -> None:
        with self._lock:
            doc = self.load()
            doc.global_settings = merge_settings(doc.global_settings, settings)
            self.dump(doc)

    def save_service(self, service: str, settings: Mapping[str, Any]) -> None:
        with self._lock:
            doc = self.load()
            doc.services[service] = merge_settings(doc.services.get(service), settings)
            self.dump(doc)

    def delete_globals(self) -> None:
        with self._lock:
            doc = self.load()
            doc.global_settings = {}
            self.dump(doc)

    def delete_service(self, service: str) -> None:
        with self._lock:
            doc = self.load()
            if service not in doc.services:
                raise ServiceNotConfigured(service)
            del doc.services[service]
            self.dump(doc)

    def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None:
        doc = self.load()
        saved = doc.services.get(service)
        if not include_global and saved is None:
            return None
        return merge_settings(doc.global_settings, saved)

    def import_settings(self, settings: Mapping[str, Any]) -> None:
        incoming_services = settings.get("services") or {}
        with self._lock:
            doc = self.load()
            doc.global_settings = merge_settings(doc.global_settings, settings.get("global"))
            for service, values in incoming_services.items():
                doc.services[service] = merge_settings(doc.services.get(service), values)
            self.dump(doc)

    def export(self) -> dict[str, Any]:
        doc = self.load()
        return {"global": doc.global_settings, "services": doc.services}

    def clear(self) -> None:
        with self._lock:
            doc = self.load()
            doc.global_settings = {}
            doc.services = {}
            self.dump(doc)
