from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping

from .document import LOCAL_SOURCE, SourceConfig, VaultDocument, is_metadata_key
from .errors import ReservedSourceName, SourceNotConfigured, SourceUnavailable
from .interfaces import Store

if TYPE_CHECKING:
    from .local_store import LocalStore

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[str, SourceConfig], Store]


def check_source_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Source name must not be empty")
    if name == LOCAL_SOURCE or is_metadata_key(name):
        raise ReservedSourceName(name)
    return name


class SourceRegistry:
    """
    Resolves source names stored in a VaultDocument to stores.

    Transports are not implemented here: a connector factory is registered per
    SourceConfig.type and is handed the source name and its descriptor.
    """

    def __init__(self, factories: Mapping[str, ConnectorFactory] | None = None) -> None:
        self._factories: dict[str, ConnectorFactory] = dict(factories or {})

    def register(self, source_type: str, factory: ConnectorFactory) -> None:
        self._factories[source_type] = factory

    def list_names(self, doc: VaultDocument) -> list[str]:
        return doc.source_names() + [LOCAL_SOURCE]

    def current_name(self, doc: VaultDocument, override: str | None = None) -> str:
        current = override or doc.current_source
        if not current or doc.get_source(current) is None:
            return LOCAL_SOURCE
        return current

    def resolve(self, name: str | None, doc: VaultDocument, local: "LocalStore") -> Store:
        if not name or name == LOCAL_SOURCE:
            return local
        config = doc.get_source(name)
        if config is None:
            raise SourceNotConfigured(name)
        factory = self._factories.get(config.type)
        connector = factory(name, config) if factory is not None else None
        if connector is None:
            logger.debug("SOURCES: no connector for %s (type=%s)", name, config.type)
        return RemoteStore(name, config, local=local, connector=connector)


class RemoteStore(Store):
    """
    Store handle for a named non-local source.

    Data operations go to the connector; source selection is always answered
    by the local store, which owns the source registry.
    """

    def __init__(self, name: str, config: SourceConfig, *, local: "LocalStore", connector: Store | None = None):
        self._name = name
        self._config = config
        self._local = local
        self._connector = connector

    @property
    def config(self) -> SourceConfig:
        return self._config

    def get_name(self) -> str:
        return self._name

    def _require_connector(self) -> Store:
        if self._connector is None:
            raise SourceUnavailable(self._name, self._config.type)
        return self._connector

    def load(self) -> VaultDocument:
        return self._require_connector().load()

    def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None:
        self._require_connector().dump(doc)

    def list_sources(self) -> tuple[list[str], str]:
        return self._local.list_sources()

    def get_store(self, source: str | None) -> Store:
        return self._local.get_store(source)

    def current_store(self) -> Store:
        return self._local.current_store()

    def list_services(self) -> list[str]:
        return self._require_connector().list_services()

    def save_globals(self, settings: Mapping[str, Any]) -> None:
        self._require_connector().save_globals(settings)

    def save_service(self, service: str, settings: Mapping[str, Any]) -> None:
        self._require_connector().save_service(service, settings)

    def delete_globals(self) -> None:
        self._require_connector().delete_globals()

    def delete_service(self, service: str) -> None:
        self._require_connector().delete_service(service)

    def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None:
        return self._require_connector().service_settings(service, include_global)

    def import_settings(self, settings: Mapping[str, Any]) -> None:
        self._require_connector().import_settings(settings)

    def export(self) -> dict[str, Any]:
        return self._require_connector().export()

    def clear(self) -> None:
        self._require_connector().clear()
