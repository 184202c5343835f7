"""Persistence of the last successfully resolved coordinate.

Values live in a small key/value store so the backing mechanism can be
swapped: :class:`SqliteKeyValueStore` survives process restarts,
:class:`MemoryKeyValueStore` is used by tests.
"""
from __future__ import annotations

import asyncio
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional, Protocol, Set

from .entities import Coordinate
from .exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

LATITUDE_KEY = "lat"
LONGITUDE_KEY = "lon"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[float]:
        ...

    def set(self, key: str, value: float) -> None:
        ...

    def set_many(self, values: Mapping[str, float]) -> None:
        """Write every pair or none of them."""
        ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, float]] = None) -> None:
        self._values: Dict[str, float] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[float]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: float) -> None:
        with self._lock:
            self._values[key] = value

    def set_many(self, values: Mapping[str, float]) -> None:
        with self._lock:
            self._values.update(values)


class SqliteKeyValueStore:
    """Scalar values in a single sqlite table, one row per key."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            connection = sqlite3.connect(self.path, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise PersistenceFailure(f"cannot open {self.path}") from exc
        try:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value REAL NOT NULL
                )
                """
            )
            yield connection
            connection.commit()
        except sqlite3.Error as exc:
            connection.rollback()
            raise PersistenceFailure(str(exc)) from exc
        finally:
            connection.close()

    def get(self, key: str) -> Optional[float]:
        with self._lock, self._connection() as connection:
            row = connection.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return float(row[0])

    def set(self, key: str, value: float) -> None:
        with self._lock, self._connection() as connection:
            connection.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, float(value)),
            )

    def set_many(self, values: Mapping[str, float]) -> None:
        with self._lock, self._connection() as connection:
            connection.executemany(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                [(key, float(value)) for key, value in values.items()],
            )


class LastLocationStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        # lat and lon are only ever read or written together under this lock
        self._lock = threading.Lock()
        self._pending: Set[asyncio.Future] = set()

    def save(self, coord: Coordinate) -> None:
        try:
            with self._lock:
                self._store.set_many({LATITUDE_KEY: coord.latitude, LONGITUDE_KEY: coord.longitude})
        except PersistenceFailure:
            raise
        except Exception as exc:  # noqa: BLE001 - any backend error is a persistence failure
            raise PersistenceFailure(str(exc)) from exc

    def save_in_background(self, coord: Coordinate) -> asyncio.Future:
        """Schedule :meth:`save` without waiting for it.

        Must be called from a running event loop. The returned task never
        raises into the caller; failures are logged and dropped.
        """
        task = asyncio.ensure_future(asyncio.to_thread(self.save, coord))
        self._pending.add(task)
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Future) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Could not persist last location: %s", exc)

    async def flush(self) -> None:
        """Wait for background saves; used on shutdown and in tests."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def load(self) -> Optional[Coordinate]:
        try:
            with self._lock:
                latitude = self._store.get(LATITUDE_KEY)
                longitude = self._store.get(LONGITUDE_KEY)
        except PersistenceFailure:
            raise
        except Exception as exc:  # noqa: BLE001
            raise PersistenceFailure(str(exc)) from exc
        coord = Coordinate(latitude=latitude or 0.0, longitude=longitude or 0.0)
        if coord.is_unset():
            return None
        return coord


__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    "LastLocationStore",
    "LATITUDE_KEY",
    "LONGITUDE_KEY",
]
