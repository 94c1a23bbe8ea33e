from __future__ import annotations

import asyncio
from typing import Any, Mapping, Protocol

from .document import SourceConfig, VaultDocument
from .interfaces import Store
from .local_store import LocalStore


class AsyncStore(Protocol):
    async def load(self) -> VaultDocument: ...
    async def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None: ...

    async def list_sources(self) -> tuple[list[str], str]: ...
    async def get_store(self, source: str | None) -> Store: ...
    async def current_store(self) -> Store: ...

    async def list_services(self) -> list[str]: ...
    async def save_globals(self, settings: Mapping[str, Any]) -> None: ...
    async def save_service(self, service: str, settings: Mapping[str, Any]) -> None: ...
    async def delete_globals(self) -> None: ...
    async def delete_service(self, service: str) -> None: ...
    async def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None: ...

    async def import_settings(self, settings: Mapping[str, Any]) -> None: ...
    async def export(self) -> dict[str, Any]: ...
    async def clear(self) -> None: ...


class AsyncLocalStore(AsyncStore):
    """
    Async wrapper around LocalStore.
    Uses asyncio.to_thread so key derivation and file I/O never block the event loop.

    Transactions issued concurrently are serialized by the wrapped store's lock.
    """

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    @property
    def store(self) -> LocalStore:
        return self._store

    def get_name(self) -> str:
        return self._store.get_name()

    async def load(self) -> VaultDocument:
        return await asyncio.to_thread(self._store.load)

    async def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._store.dump, doc)

    async def list_sources(self) -> tuple[list[str], str]:
        return await asyncio.to_thread(self._store.list_sources)

    async def get_store(self, source: str | None) -> Store:
        return await asyncio.to_thread(self._store.get_store, source)

    async def current_store(self) -> Store:
        return await asyncio.to_thread(self._store.current_store)

    async def add_source(self, name: str, config: SourceConfig | Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._store.add_source, name, config)

    async def delete_source(self, name: str) -> None:
        await asyncio.to_thread(self._store.delete_source, name)

    async def set_current_source(self, name: str | None) -> None:
        await asyncio.to_thread(self._store.set_current_source, name)

    async def list_services(self) -> list[str]:
        return await asyncio.to_thread(self._store.list_services)

    async def save_globals(self, settings: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._store.save_globals, settings)

    async def save_service(self, service: str, settings: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._store.save_service, service, settings)

    async def delete_globals(self) -> None:
        await asyncio.to_thread(self._store.delete_globals)

    async def delete_service(self, service: str) -> None:
        await asyncio.to_thread(self._store.delete_service, service)

    async def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._store.service_settings, service, include_global)

    async def import_settings(self, settings: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._store.import_settings, settings)

    async def export(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.export)

    async def clear(self) -> None:
        await asyncio.to_thread(self._store.clear)
