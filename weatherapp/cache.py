from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class CachedResponse:
    data: bytes
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)


class ResponseStore:
    """In-process response store keyed by exact request URL.

    Entries never expire; presence of a key is authoritative.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, CachedResponse] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, url: str) -> Optional[CachedResponse]:
        with self._lock:
            entry = self._storage.get(url)
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def set(self, url: str, entry: CachedResponse) -> None:
        with self._lock:
            self._storage[url] = entry

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._storage

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()
            self.hits = 0
            self.misses = 0


__all__ = ["CachedResponse", "ResponseStore"]
