"""Caching services - abstract interface and concrete implementations."""

from wordbook_manager.services.caching.list_cache import (
    CacheEntry,
    InvalidationPolicy,
    ListCache,
    NeverExpire,
    TimeToLive,
)
from wordbook_manager.services.caching.in_memory_list_cache import InMemoryListCache

__all__ = [
    "ListCache",
    "CacheEntry",
    "InvalidationPolicy",
    "NeverExpire",
    "TimeToLive",
    "InMemoryListCache",
]
