"""Tests for the in-memory content store."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lanshare.domain.content import ContentExpiredError, ContentNotFoundError, ContentStore

from tests.conftest import START, TTL


class TestInsertAndGet:
    def test_get_returns_inserted_entry(self, store, factory):
        entry = factory.make_text_entry("hello")

        assert store.insert(entry) == entry.id
        assert store.get(entry.id) is entry

    def test_get_unknown_id_raises_not_found(self, store):
        with pytest.raises(ContentNotFoundError) as exc_info:
            store.get("missing")

        assert not isinstance(exc_info.value, ContentExpiredError)

    def test_duplicate_insert_is_rejected(self, store, factory):
        entry = factory.make_text_entry("hello")
        store.insert(entry)

        with pytest.raises(ValueError):
            store.insert(entry)

    def test_get_lazily_evicts_expired_entry(self, store, factory, clock):
        entry = factory.make_text_entry("hello")
        store.insert(entry)

        clock.set(entry.expires_at)
        with pytest.raises(ContentExpiredError):
            store.get(entry.id)

        assert entry.id not in store
        with pytest.raises(ContentNotFoundError) as exc_info:
            store.get(entry.id)
        assert not isinstance(exc_info.value, ContentExpiredError)

    def test_peek_returns_expired_entry_without_evicting(self, store, factory, clock):
        entry = factory.make_text_entry("hello")
        store.insert(entry)
        clock.set(entry.expires_at)

        assert store.peek(entry.id) is entry
        assert entry.id in store
        assert store.peek("missing") is None

    def test_text_lifetime_scenario(self, store, factory, clock):
        entry = factory.make_text_entry("short lived")
        store.insert(entry)

        clock.set(START + 9 * 60 + 59)
        assert store.get(entry.id) is entry

        clock.set(START + 10 * 60 + 1)
        assert store.sweep_expired() == [entry.id]
        with pytest.raises(ContentNotFoundError):
            store.get(entry.id)

    def test_lookup_after_expiry_then_sweep_finds_nothing(self, store, factory):
        entry = factory.make_text_entry("gone")
        store.insert(entry)
        later = START + TTL + 1

        with pytest.raises(ContentExpiredError):
            store.get(entry.id, now=later)

        assert store.sweep_expired(later) == []


class TestListAll:
    def test_most_recent_first(self, store, factory):
        first = factory.make_text_entry("one")
        second = factory.make_file_entry("two.txt", "text/plain", 1, b"2")
        third = factory.make_text_entry("three")
        for entry in (first, second, third):
            store.insert(entry)

        assert [entry.id for entry in store.list_all()] == [third.id, second.id, first.id]

    def test_excludes_expired_without_removing(self, store, factory, clock):
        old = factory.make_text_entry("old")
        store.insert(old)
        clock.advance(TTL / 2)
        fresh = factory.make_text_entry("fresh")
        store.insert(fresh)

        clock.set(old.expires_at)

        assert store.list_all() == [fresh]
        assert old.id in store
        assert len(store) == 2

    def test_empty_store(self, store):
        assert store.list_all() == []


class TestRemoveAndSweep:
    def test_remove_reports_whether_anything_was_removed(self, store, factory):
        entry = factory.make_text_entry("bye")
        store.insert(entry)

        assert store.remove(entry.id) is True
        assert store.remove(entry.id) is False
        assert store.remove("never-existed") is False

    def test_sweep_removes_only_expired(self, store, factory, clock):
        old = factory.make_text_entry("old")
        store.insert(old)
        clock.advance(60)
        young = factory.make_text_entry("young")
        store.insert(young)

        removed = store.sweep_expired(old.expires_at)

        assert removed == [old.id]
        assert young.id in store
        assert old.id not in store

    def test_sweep_is_idempotent_for_same_instant(self, store, factory):
        for text in ("a", "b", "c"):
            store.insert(factory.make_text_entry(text))
        now = START + TTL

        assert len(store.sweep_expired(now)) == 3
        assert store.sweep_expired(now) == []

    def test_sweep_uses_clock_when_no_time_given(self, store, factory, clock):
        entry = factory.make_text_entry("a")
        store.insert(entry)

        assert store.sweep_expired() == []
        clock.advance(TTL)
        assert store.sweep_expired() == [entry.id]


class TestConcurrency:
    def test_parallel_inserts_and_sweeps_lose_nothing(self, factory, clock):
        store = ContentStore(clock=clock)
        entries = [factory.make_text_entry(f"entry {i}") for i in range(200)]

        def insert(entry):
            store.insert(entry)
            store.sweep_expired()
            return store.get(entry.id).id

        with ThreadPoolExecutor(max_workers=8) as pool:
            fetched = list(pool.map(insert, entries))

        assert sorted(fetched) == sorted(entry.id for entry in entries)
        assert len(store) == 200

    def test_each_expired_id_is_swept_exactly_once(self, factory, clock):
        store = ContentStore(clock=clock)
        entries = [factory.make_text_entry(f"entry {i}") for i in range(300)]
        for entry in entries:
            store.insert(entry)
        later = START + TTL
        barrier = threading.Barrier(6)

        def sweep(_):
            barrier.wait()
            return store.sweep_expired(later)

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(sweep, range(6)))

        swept = [content_id for result in results for content_id in result]
        assert sorted(swept) == sorted(entry.id for entry in entries)
        assert len(store) == 0
