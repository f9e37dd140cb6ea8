"""In-memory list cache with a pluggable invalidation policy."""

import dataclasses
import logging
import time
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from wordbook_manager.services.caching.list_cache import (
    CacheEntry,
    InvalidationPolicy,
    ListCache,
    NeverExpire,
    T,
)

logger = logging.getLogger(__name__)


class InMemoryListCache(ListCache[T]):
    """
    Unbounded process-local cache.

    Entries are replaced wholesale on every change, so a list handed out by
    ``get`` is never mutated afterwards. There is no lock: all callers share
    one event loop.
    """

    def __init__(
        self,
        policy: Optional[InvalidationPolicy] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._policy = policy or NeverExpire()
        self._clock = clock or time.monotonic
        self._entries: Dict[Hashable, CacheEntry[T]] = {}

    def _fresh_entry(self, key: Hashable) -> Optional[CacheEntry[T]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._policy.is_fresh(entry, self._clock()):
            logger.debug("Cache entry %r expired", key)
            del self._entries[key]
            return None
        return entry

    def get(self, key: Hashable) -> Optional[List[T]]:
        entry = self._fresh_entry(key)
        return list(entry.items) if entry else None

    def put(self, key: Hashable, items: Iterable[T]) -> None:
        self._entries[key] = CacheEntry(items=list(items), stored_at=self._clock())

    def extend(self, key: Hashable, items: Iterable[T], create: bool = False) -> None:
        entry = self._fresh_entry(key)
        if entry is None:
            if create:
                self.put(key, items)
            return
        # Appending keeps the original stored_at so a TTL is not extended.
        self._entries[key] = CacheEntry(items=entry.items + list(items), stored_at=entry.stored_at)

    def patch(self, key: Hashable, item_ids: Iterable[str], changes: Dict[str, Any]) -> None:
        entry = self._fresh_entry(key)
        if entry is None:
            return
        ids = set(item_ids)
        items = [
            dataclasses.replace(item, **changes) if item.id in ids else item
            for item in entry.items
        ]
        self._entries[key] = CacheEntry(items=items, stored_at=entry.stored_at)

    def remove(self, key: Hashable, item_ids: Iterable[str]) -> None:
        entry = self._fresh_entry(key)
        if entry is None:
            return
        ids = set(item_ids)
        items = [item for item in entry.items if item.id not in ids]
        self._entries[key] = CacheEntry(items=items, stored_at=entry.stored_at)

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> List[Hashable]:
        return list(self._entries.keys())
