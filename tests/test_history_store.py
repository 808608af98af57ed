from __future__ import annotations

import dataclasses

import pytest

from history_store import HistoryEntry, HistoryStore


def test_entries_are_listed_oldest_first():
    store = HistoryStore()
    store.append("FF", 16, 255)
    store.append("1+1", 10, 2)

    assert store.list_all() == (
        HistoryEntry("FF", 16, 255),
        HistoryEntry("1+1", 10, 2),
    )
    assert len(store) == 2


def test_entries_are_immutable():
    entry = HistoryStore().append("7", 8, 7)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.result = 8


def test_listing_is_a_snapshot():
    store = HistoryStore()
    store.append("1", 10, 1)
    snapshot = store.list_all()
    store.append("2", 10, 2)
    assert len(snapshot) == 1
    assert len(store.list_all()) == 2


def test_store_grows_without_eviction():
    store = HistoryStore()
    for i in range(1000):
        store.append(str(i), 10, i)
    entries = store.list_all()
    assert len(entries) == 1000
    assert entries[0].result == 0
    assert entries[-1].result == 999
