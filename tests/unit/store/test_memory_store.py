from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from result import is_err, is_ok

from kvstore.store.memory import MemoryStore
from kvstore.store.models import ErrorKind, StoreHaltedError, StoreKeyNotFoundError


def test_get_missing_key_returns_not_found() -> None:
    store: MemoryStore[str] = MemoryStore()

    result = store.get("missing")

    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, StoreKeyNotFoundError)
    assert error.key == "missing"


def test_set_get_and_overwrite() -> None:
    store: MemoryStore[bytes] = MemoryStore()

    assert is_ok(store.set("key", b"first"))
    assert store.get("key").unwrap() == b"first"

    store.set("key", b"second")
    assert store.get("key").unwrap() == b"second"


def test_values_are_stored_by_reference() -> None:
    store: MemoryStore[list[int]] = MemoryStore()
    value = [1]
    store.set("key", value)

    value.append(2)

    assert store.get("key").unwrap() is value


def test_delete_is_idempotent() -> None:
    store: MemoryStore[int] = MemoryStore()
    store.set("key", 1)

    assert is_ok(store.delete("key"))
    assert is_ok(store.delete("key"))
    assert is_err(store.get("key"))


def test_clear_removes_all_keys_and_keeps_store_usable() -> None:
    store: MemoryStore[int] = MemoryStore()
    store.set("a", 1)
    store.set("b", 2)

    assert is_ok(store.clear())

    assert store.keys().unwrap() == []
    assert is_ok(store.set("c", 3))
    assert store.get("c").unwrap() == 3


def test_keys_lists_current_entries() -> None:
    store: MemoryStore[int] = MemoryStore()
    store.set("a", 1)
    store.set("b", 2)
    store.delete("a")

    assert store.keys().unwrap() == ["b"]


def test_close_is_visible_to_every_holder() -> None:
    store: MemoryStore[int] = MemoryStore()
    other_holder = store
    store.set("a", 1)

    assert is_ok(store.close())

    result = other_holder.get("a")
    assert is_err(result)
    assert isinstance(result.unwrap_err(), StoreHaltedError)
    assert other_holder.closed


def test_operations_after_purge_return_halted() -> None:
    store: MemoryStore[int] = MemoryStore()
    store.set("a", 1)

    assert is_ok(store.purge())

    for result in (store.set("a", 2), store.get("a"), store.delete("a"), store.clear(), store.keys()):
        assert is_err(result)
        assert result.unwrap_err().kind is ErrorKind.HALTED


def test_context_manager_closes_store() -> None:
    with MemoryStore[int]() as store:
        store.set("a", 1)

    assert store.closed


def test_concurrent_writers_lose_no_updates() -> None:
    store: MemoryStore[int] = MemoryStore()
    writers, per_writer = 16, 200

    def write_keys(writer: int) -> list[bool]:
        return [is_ok(store.set(f"w{writer}-k{i}", writer * 1000 + i)) for i in range(per_writer)]

    with ThreadPoolExecutor(max_workers=writers) as pool:
        outcomes = [ok for batch in pool.map(write_keys, range(writers)) for ok in batch]

    assert all(outcomes)
    assert len(store.keys().unwrap()) == writers * per_writer
    for w in range(writers):
        for i in range(per_writer):
            assert store.get(f"w{w}-k{i}").unwrap() == w * 1000 + i
