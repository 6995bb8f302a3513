import json

import pytest

from envchain.alias import Alias, AliasStore


@pytest.fixture
def store(tmp_path):
    return AliasStore(tmp_path / "aliases")


def test_set_and_get(store):
    store.set("prod", "production")
    assert store.get("prod").context == "production"


def test_set_empty_name(store):
    with pytest.raises(ValueError):
        store.set("", "production")


def test_set_empty_context(store):
    with pytest.raises(ValueError):
        store.set("prod", "")


def test_get_missing(store):
    with pytest.raises(LookupError):
        store.get("nope")


def test_delete_removes_alias(store):
    store.set("stg", "staging")
    store.delete("stg")
    with pytest.raises(LookupError):
        store.get("stg")


def test_delete_missing(store):
    with pytest.raises(LookupError):
        store.delete("ghost")


def test_list_sorted_by_name(store):
    store.set("zz", "ctx-z")
    store.set("aa", "ctx-a")
    store.set("mm", "ctx-m")
    assert [a.name for a in store.list()] == ["aa", "mm", "zz"]


def test_list_empty(store):
    assert store.list() == []


def test_list_skips_non_json_and_bad_files(store):
    store.set("ok", "ctx")
    (store.directory / "notes.txt").write_text("hello")
    (store.directory / "broken.json").write_text("{not json")
    assert store.list() == [Alias("ok", "ctx")]


def test_file_format(store):
    store.set("dev", "development")
    raw = json.loads((store.directory / "dev.json").read_text())
    assert raw == {"name": "dev", "context": "development"}


def test_set_overwrites(store):
    store.set("dev", "one")
    store.set("dev", "two")
    assert store.get("dev") == Alias("dev", "two")