"""Tests for the collection based record store."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from storeadmin.domain.exceptions import RecordNotFoundError, RecordStoreError


def test_create_uses_given_id_and_returns_record(store) -> None:
    record = store.create({"id": "abc", "name": "first"}, "things")

    assert record == {"id": "abc", "name": "first"}
    assert store.read("abc", "things") == {"id": "abc", "name": "first"}


def test_create_generates_id_when_missing(store) -> None:
    record = store.create({"name": "anonymous"}, "things")

    assert record["id"]
    assert store.read(record["id"], "things")["name"] == "anonymous"


def test_collections_are_isolated(store) -> None:
    store.create({"id": "same", "kind": "a"}, "alpha")
    store.create({"id": "same", "kind": "b"}, "beta")

    assert store.read("same", "alpha")["kind"] == "a"
    assert store.read("same", "beta")["kind"] == "b"
    assert store.read("missing", "alpha") is None


def test_update_merges_partial_record(store) -> None:
    store.create({"id": "k1", "name": "old", "keep": True}, "things")

    updated = store.update("k1", {"name": "new", "extra": 1}, "things")

    assert updated == {"id": "k1", "name": "new", "keep": True, "extra": 1}
    assert store.read("k1", "things") == updated


def test_update_missing_record_raises(store) -> None:
    with pytest.raises(RecordNotFoundError):
        store.update("nope", {"name": "x"}, "things")


def test_delete_reports_whether_record_existed(store) -> None:
    store.create({"id": "k1"}, "things")

    assert store.delete("k1", "things") is True
    assert store.delete("k1", "things") is False
    assert store.read("k1", "things") is None


def test_read_all_and_get_item_key(store) -> None:
    store.create({"id": "b", "email": "b@example.com"}, "users")
    store.create({"id": "a", "email": "a@example.com"}, "users")

    assert [record["id"] for record in store.read_all("users")] == ["a", "b"]
    assert store.get_item_key("email", "b@example.com", "users") == "b"
    assert store.get_item_key("email", "zzz@example.com", "users") is None


def test_iter_batches_survives_deleting_each_batch(store) -> None:
    for index in range(7):
        store.create({"id": f"k{index}"}, "things")

    seen: list[list[str]] = []
    for batch in store.iter_batches("things", 3):
        ids = [record["id"] for record in batch]
        seen.append(ids)
        for key in ids:
            store.delete(key, "things")

    assert seen == [["k0", "k1", "k2"], ["k3", "k4", "k5"], ["k6"]]
    assert store.read_all("things") == []


def test_iter_batches_rejects_non_positive_size(store) -> None:
    with pytest.raises(ValueError):
        list(store.iter_batches("things", 0))


def test_database_errors_become_record_store_errors(store, monkeypatch) -> None:
    def broken_commit() -> None:
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store.session, "commit", broken_commit)

    with pytest.raises(RecordStoreError):
        store.create({"id": "k1"}, "things")
