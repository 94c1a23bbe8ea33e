from __future__ import annotations

import pytest

from vault_store import LocalStore, RemoteStore
from vault_store.document import SourceConfig
from vault_store.errors import ReservedSourceName, SourceNotConfigured, SourceUnavailable


def test_empty_vault_lists_only_local(store):
    assert store.list_sources() == (["local"], "local")


def test_list_sources_skips_metadata_keys(store):
    store.dump(
        {
            "sources": {
                "work": {"url": "https://work.example.com"},
                "home": {"url": "https://home.example.com"},
                "__current__": "work",
                "__meta__": {"version": 1},
            }
        }
    )
    names, current = store.list_sources()
    assert names == ["home", "work", "local"]
    assert current == "work"


def test_local_is_listed_once_even_if_stored(store):
    store.dump({"sources": {"local": {"url": "https://shadow.example.com"}}})
    names, current = store.list_sources()
    assert names == ["local"]
    assert current == "local"
    assert store.get_store("local") is store


def test_current_falls_back_to_local_for_unknown_source(store):
    store.dump({"sources": {"__current__": "gone"}})
    assert store.list_sources() == (["local"], "local")
    assert store.current_store() is store


def test_instance_override_takes_precedence(store):
    store.add_source("work", {"url": "https://work.example.com"})
    store.add_source("home", {"url": "https://home.example.com"})
    store.set_current_source("work")

    store.set_source("home")
    assert store.list_sources()[1] == "home"

    store.set_source("nope")
    assert store.list_sources()[1] == "local"

    store.set_source(None)
    assert store.list_sources()[1] == "work"


@pytest.mark.parametrize("name", ["local", "__current__", "__anything__"])
def test_reserved_source_names_are_rejected(store, name):
    with pytest.raises(ReservedSourceName):
        store.add_source(name, {"url": "https://example.com"})


def test_empty_source_name_is_rejected(store):
    with pytest.raises(ValueError):
        store.add_source("  ", {"url": "https://example.com"})


def test_set_current_source(store, make_store):
    store.add_source("work", SourceConfig(url="https://work.example.com"))
    store.set_current_source("work")
    assert make_store(cache=False).load().sources["__current__"] == "work"

    store.set_current_source("local")
    assert "__current__" not in store.load().sources

    with pytest.raises(SourceNotConfigured):
        store.set_current_source("missing")


def test_delete_source_clears_current(store):
    store.add_source("work", {"url": "https://work.example.com"})
    store.set_current_source("work")
    store.delete_source("work")
    assert store.load().sources == {}
    assert store.list_sources() == (["local"], "local")

    with pytest.raises(SourceNotConfigured):
        store.delete_source("work")


def test_get_store_resolves_local(store):
    assert store.get_store(None) is store
    assert store.get_store("") is store
    assert store.get_store("local") is store


def test_get_store_unknown_source(store):
    with pytest.raises(SourceNotConfigured):
        store.get_store("missing")


def test_remote_without_connector_is_unavailable(store):
    store.add_source("work", {"type": "webdav", "url": "https://work.example.com", "user": "alice"})
    remote = store.get_store("work")
    assert isinstance(remote, RemoteStore)
    assert remote.get_name() == "work"
    assert remote.config.url == "https://work.example.com"
    assert remote.config.model_extra == {"user": "alice"}

    with pytest.raises(SourceUnavailable) as exc:
        remote.save_globals({"length": 12})
    assert exc.value.source_type == "webdav"

    # source selection never needs the connector
    assert remote.list_sources() == (["work", "local"], "local")
    assert remote.get_store("local") is store


def test_remote_delegates_to_registered_connector(store, tmp_path):
    backing: dict[str, LocalStore] = {}

    def connect(name, config):
        backing[name] = LocalStore(tmp_path / f"{name}.vault", config.key)
        return backing[name]

    store.registry.register("remote", connect)
    store.add_source("work", {"url": "https://work.example.com", "key": "remote-key"})
    store.set_current_source("work")

    remote = store.current_store()
    assert remote.get_name() == "work"
    remote.save_service("github", {"user": "alice"})

    assert backing["work"].service_settings("github") == {"user": "alice"}
    assert store.list_services() == []
