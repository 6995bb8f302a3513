import json

import pytest

from envchain.group import Group, GroupStore


@pytest.fixture
def store(tmp_path):
    return GroupStore(tmp_path / "groups")


def test_save_and_load(store):
    g = Group(name="backend", contexts=["dev", "staging"])
    store.save(g)
    got = store.load("backend")
    assert got.name == "backend"
    assert got.contexts == ["dev", "staging"]


def test_save_empty_name(store):
    with pytest.raises(ValueError):
        store.save(Group(name="", contexts=["dev"]))


def test_save_empty_contexts(store):
    with pytest.raises(ValueError):
        store.save(Group(name="empty"))


def test_load_missing(store):
    with pytest.raises(LookupError, match="group not found: ghost"):
        store.load("ghost")


def test_delete_removes_group(store):
    store.save(Group(name="infra", contexts=["prod"]))
    store.delete("infra")
    with pytest.raises(LookupError):
        store.load("infra")


def test_delete_missing(store):
    with pytest.raises(LookupError):
        store.delete("ghost")


def test_list_sorted_by_name(store):
    for name in ["zebra", "alpha", "mango"]:
        store.save(Group(name=name, contexts=["dev"]))
    assert [g.name for g in store.list()] == ["alpha", "mango", "zebra"]


def test_list_ignores_dirs_and_other_files(store):
    store.save(Group(name="one", contexts=["dev"]))
    (store.directory / "sub.json").mkdir()
    (store.directory / "readme.txt").write_text("x")
    assert store.list() == [Group(name="one", contexts=["dev"])]


def test_file_format(store):
    store.save(Group(name="web", contexts=["a", "b"]))
    raw = json.loads((store.directory / "web.json").read_text())
    assert raw == {"name": "web", "contexts": ["a", "b"]}