import json

import pytest

from store import DEFAULT_PREFERENCES, RECENT_LIMIT, SessionStore


@pytest.fixture
def path(tmp_path):
    return str(tmp_path / "instance" / "store.json")


@pytest.fixture
def store(path):
    store = SessionStore(path, key="codeweave-user").init()
    yield store
    store.teardown()


def read(path):
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def test_load_is_none_when_logged_out(store):
    assert store.load() is None


def test_login_stores_default_preferences(store, path):
    user = store.login("Ada", email="ada@example.com")
    assert user["name"] == "Ada"
    assert user["email"] == "ada@example.com"
    assert user["preferences"] == DEFAULT_PREFERENCES
    assert read(path)["codeweave-user"] == user


def test_login_without_email_omits_it(store):
    assert "email" not in store.login("Ada")


def test_save_merges_preferences(store):
    store.login("Ada")
    user = store.save({"theme": "dark", "sound": True})
    assert user["preferences"]["theme"] == "dark"
    assert user["preferences"]["sound"] is True
    assert user["preferences"]["preferredLanguage"] == "javascript"
    assert store.load() == user


def test_save_while_logged_out_is_a_no_op(store, path):
    assert store.save({"theme": "dark"}) is None
    assert store.load() is None


def test_clear_logs_out(store, path):
    store.login("Ada")
    store.clear()
    assert store.load() is None
    assert "codeweave-user" not in read(path)


def test_changes_survive_a_new_store(store, path):
    store.login("Ada")
    store.save({"preferredLanguage": "python"})

    other = SessionStore(path, key="codeweave-user").init()
    assert other.load()["preferences"]["preferredLanguage"] == "python"


def test_other_keys_in_the_file_are_kept(path, tmp_path):
    (tmp_path / "instance").mkdir()
    with open(path, "w", encoding="utf-8") as fh:
        json.dump({"something-else": 1}, fh)

    store = SessionStore(path).init()
    store.login("Ada")
    store.clear()
    assert read(path) == {"something-else": 1}


def test_invalid_json_starts_empty(path, tmp_path, caplog):
    (tmp_path / "instance").mkdir()
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("{not json")

    store = SessionStore(path).init()
    assert store.load() is None
    assert "not valid JSON" in caplog.text


def test_load_returns_a_copy(store):
    store.login("Ada")
    store.load()["preferences"]["theme"] = "dark"
    assert store.load()["preferences"]["theme"] == "light"


def test_record_recent_moves_to_front_without_duplicates(store):
    store.login("Ada")
    for kind in ["bubble-sort", "merge-sort", "bubble-sort"]:
        store.record_recent(kind)
    assert store.load()["preferences"]["recentStructures"] == ["bubble-sort", "merge-sort"]


def test_record_recent_is_capped(store):
    store.login("Ada")
    kinds = ["a", "b", "c", "d", "e", "f", "g"]
    for kind in kinds:
        store.record_recent(kind)
    recent = store.load()["preferences"]["recentStructures"]
    assert len(recent) == RECENT_LIMIT
    assert recent == list(reversed(kinds))[:RECENT_LIMIT]


def test_record_recent_while_logged_out(store):
    assert store.record_recent("quick-sort") is None


@pytest.mark.parametrize("operation", [
    lambda s: s.load(),
    lambda s: s.login("Ada"),
    lambda s: s.save({"theme": "dark"}),
    lambda s: s.clear(),
])
def test_use_outside_the_lifecycle_raises(path, operation):
    store = SessionStore(path)
    with pytest.raises(RuntimeError):
        operation(store)

    store.init()
    store.teardown()
    assert not store.is_open
    with pytest.raises(RuntimeError):
        operation(store)
