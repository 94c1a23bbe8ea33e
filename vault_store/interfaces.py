from __future__ import annotations

from typing import Any, Mapping, Protocol

from .document import VaultDocument


class Store(Protocol):
    """
    Capability set shared by every store variant (local file, remote delegate,
    composite), so callers never need to know which source is active.
    """

    def get_name(self) -> str: ...

    def load(self) -> VaultDocument:
        """Load and return the full document (never None)."""
        ...

    def dump(self, doc: VaultDocument | Mapping[str, Any]) -> None:
        """Persist the full document."""
        ...

    def list_sources(self) -> tuple[list[str], str]: ...
    def get_store(self, source: str | None) -> "Store": ...
    def current_store(self) -> "Store": ...

    def list_services(self) -> list[str]: ...
    def save_globals(self, settings: Mapping[str, Any]) -> None: ...
    def save_service(self, service: str, settings: Mapping[str, Any]) -> None: ...
    def delete_globals(self) -> None: ...
    def delete_service(self, service: str) -> None: ...
    def service_settings(self, service: str, include_global: bool = False) -> dict[str, Any] | None: ...

    def import_settings(self, settings: Mapping[str, Any]) -> None: ...
    def export(self) -> dict[str, Any]: ...
    def clear(self) -> None: ...
