from __future__ import annotations

import asyncio
import threading

import pytest

from weatherapp.entities import Coordinate
from weatherapp.exceptions import PersistenceFailure
from weatherapp.storage import LastLocationStore, MemoryKeyValueStore, SqliteKeyValueStore


def test_load_returns_none_before_any_save():
    store = LastLocationStore(MemoryKeyValueStore())

    assert store.load() is None


def test_save_then_load_round_trip_in_sqlite(tmp_path):
    path = tmp_path / "nested" / "state.sqlite3"
    LastLocationStore(SqliteKeyValueStore(str(path))).save(Coordinate(40.0, -75.0))

    # a new store over the same file sees the value, as after a restart
    restored = LastLocationStore(SqliteKeyValueStore(str(path))).load()

    assert restored == Coordinate(40.0, -75.0)


def test_sqlite_overwrites_previous_value(tmp_path):
    kv = SqliteKeyValueStore(str(tmp_path / "state.sqlite3"))
    store = LastLocationStore(kv)

    store.save(Coordinate(1.0, 2.0))
    store.save(Coordinate(3.0, 4.0))

    assert store.load() == Coordinate(3.0, 4.0)
    assert kv.get("missing") is None


def test_zero_pair_is_reported_as_absent():
    store = LastLocationStore(MemoryKeyValueStore())
    store.save(Coordinate(0.0, 0.0))

    assert store.load() is None


def test_only_one_zero_component_is_a_real_location():
    store = LastLocationStore(MemoryKeyValueStore({"lat": 0.0, "lon": 32.5}))

    assert store.load() == Coordinate(0.0, 32.5)


def test_unwritable_path_raises_persistence_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    store = LastLocationStore(SqliteKeyValueStore(str(blocker / "state.sqlite3")))

    with pytest.raises(PersistenceFailure):
        store.save(Coordinate(1.0, 1.0))


def test_background_save_swallows_failures(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    store = LastLocationStore(SqliteKeyValueStore(str(blocker / "state.sqlite3")))

    async def scenario():
        store.save_in_background(Coordinate(1.0, 1.0))
        await store.flush()

    with caplog.at_level("WARNING"):
        asyncio.run(scenario())

    assert "Could not persist last location" in caplog.text


class InterleavingStore(MemoryKeyValueStore):
    """Writes keys one at a time and pauses the first write between them."""

    def __init__(self) -> None:
        super().__init__()
        self.started = threading.Event()
        self.other_done = threading.Event()
        self._calls = 0

    def set_many(self, values) -> None:
        self._calls += 1
        first = self._calls == 1
        for index, (key, value) in enumerate(values.items()):
            self.set(key, value)
            if first and index == 0:
                self.started.set()
                self.other_done.wait(timeout=0.5)
        if not first:
            self.other_done.set()


def test_overlapping_background_saves_never_mix_coordinates():
    kv = InterleavingStore()
    store = LastLocationStore(kv)

    async def scenario():
        store.save_in_background(Coordinate(1.0, 2.0))
        await asyncio.to_thread(kv.started.wait, 2)
        store.save_in_background(Coordinate(3.0, 4.0))
        await store.flush()

    asyncio.run(scenario())

    assert store.load() == Coordinate(3.0, 4.0)


def test_sqlite_writes_both_keys_in_one_call(tmp_path):
    kv = SqliteKeyValueStore(str(tmp_path / "state.sqlite3"))

    kv.set_many({"lat": 12.5, "lon": -7.25})

    assert kv.get("lat") == 12.5
    assert kv.get("lon") == -7.25
