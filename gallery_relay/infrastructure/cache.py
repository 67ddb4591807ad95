from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..config import SETTINGS


Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    payload: Any
    stored_at: float


def cache_key(category: Optional[str], page: int) -> str:
    # Page size is not part of the key.
    return f"{category or 'all'}_page_{page}"


class ResponseCache:
    """Keeps the last successful response per key, stamped with its store time.

    Entries are only removed through :meth:`delete`; there is no size bound.
    """

    def __init__(self, ttl: float | None = None, clock: Clock = time.time) -> None:
        self._ttl = SETTINGS.cache_ttl if ttl is None else ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(payload=payload, stored_at=self._clock())
        self._entries[key] = entry
        return entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def is_valid(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self._ttl

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


CACHE = ResponseCache()
