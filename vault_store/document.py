from __future__ import annotations

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOCAL_SOURCE = "local"
CURRENT_SOURCE_KEY = "__current__"

METADATA_KEY_RE = re.compile(r"^__.+__$")


def is_metadata_key(name: str) -> bool:
    return bool(METADATA_KEY_RE.match(name))


def merge_settings(saved: Mapping[str, Any] | None, settings: Mapping[str, Any] | None) -> dict[str, Any]:
    """New settings override saved keys on conflict; saved keys not in `settings` are kept."""
    merged = dict(saved or {})
    merged.update(settings or {})
    return merged


class SourceConfig(BaseModel):
    """
    Connection descriptor stored under sources[<name>]. Fields the connector
    needs beyond these are kept verbatim.
    """

    model_config = ConfigDict(extra="allow")

    type: str = "remote"
    url: str | None = None
    key: str | None = None

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class VaultDocument(BaseModel):
    """
    Mirrors the decrypted vault plaintext:
      {
        "global": { "<setting>": ... },
        "services": { "<service>": { "<setting>": ... } },
        "sources": { "<name>": {...}, "__current__": "<name>" }
      }
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    global_settings: dict[str, Any] = Field(default_factory=dict, alias="global")
    services: dict[str, dict[str, Any]] = Field(default_factory=dict)
    sources: dict[str, Any] = Field(default_factory=dict)

    @field_validator("global_settings", "services", "sources", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("services", mode="before")
    @classmethod
    def _drop_null_services(cls, v: Any) -> Any:
        # A null service entry means "not configured".
        if isinstance(v, Mapping):
            return {k: s for k, s in v.items() if s is not None}
        return v

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "VaultDocument":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def copy_deep(self) -> "VaultDocument":
        return self.model_copy(deep=True)

    def source_names(self) -> list[str]:
        return sorted(k for k in self.sources if not is_metadata_key(k) and k != LOCAL_SOURCE)

    def get_source(self, name: str) -> SourceConfig | None:
        if not name or is_metadata_key(name) or name == LOCAL_SOURCE:
            return None
        raw = self.sources.get(name)
        if raw is None:
            return None
        if isinstance(raw, SourceConfig):
            return raw
        if isinstance(raw, Mapping):
            return SourceConfig.model_validate(raw)
        # Legacy descriptors may be a bare URL string.
        return SourceConfig(url=str(raw))

    @property
    def current_source(self) -> str | None:
        cur = self.sources.get(CURRENT_SOURCE_KEY)
        return cur if isinstance(cur, str) and cur else None
