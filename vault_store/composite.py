from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from .document import SourceConfig, VaultDocument
from .interfaces import Store

if TYPE_CHECKING:
    from .local_store import LocalStore


class CompositeStore(Store):
    """
    Source-agnostic facade over a LocalStore.

    Each data operation is sent to whichever store is current at call time.
    Source selection and management always stay with the local store.
    """

    def __init__(self, local: "LocalStore"):
        self._local = local

    @property
    def local(self) -> "LocalStore":
        return self._local

    def _target(self) -> Store:
        return self._local.current_store()

    def get_name(self) -> str:
        return self._target().get_name()

    def load(self) -> VaultDocument:
        return self._target().load()

    def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None:
        self._target().dump(doc)

    # sources
    def list_sources(self) -> tuple[list[str], str]:
        return self._local.list_sources()

    def get_store(self, source: str | None) -> Store:
        return self._local.get_store(source)

    def current_store(self) -> Store:
        return self._local.current_store()

    def set_source(self, source: str | None) -> None:
        self._local.set_source(source)

    def add_source(self, name: str, config: SourceConfig | Mapping[str, Any]) -> None:
        self._local.add_source(name, config)

    def delete_source(self, name: str) -> None:
        self._local.delete_source(name)

    def set_current_source(self, name: str | None) -> None:
        self._local.set_current_source(name)

    # services
    def list_services(self) -> list[str]:
        return self._target().list_services()

    def save_globals(self, settings: Mapping[str, Any]) -> None:
        self._target().save_globals(settings)

    def save_service(self, service: str, settings: Mapping[str, Any]) -> None:
        self._target().save_service(service, settings)

    def delete_globals(self) -> None:
        self._target().delete_globals()

    def delete_service(self, service: str) -> None:
        self._target().delete_service(service)

    def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None:
        return self._target().service_settings(service, include_global)

    def import_settings(self, settings: Mapping[str, Any]) -> None:
        self._target().import_settings(settings)

    def export(self) -> dict[str, Any]:
        return self._target().export()

    def clear(self) -> None:
        self._target().clear()
