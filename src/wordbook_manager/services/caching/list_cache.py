"""List cache abstraction - read-through storage for collections of entities."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A cached list and the clock reading taken when it was stored."""

    items: List[T]
    stored_at: float


class InvalidationPolicy(ABC):
    """Decides whether a cache entry may still be served."""

    @abstractmethod
    def is_fresh(self, entry: CacheEntry, now: float) -> bool:
        pass


class NeverExpire(InvalidationPolicy):
    """Entries live until explicitly invalidated. Writes made by other
    processes are never noticed."""

    def is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return True


class TimeToLive(InvalidationPolicy):
    """Entries expire a fixed number of seconds after they were stored."""

    def __init__(self, seconds: float):
        if seconds <= 0:
            raise ValueError("TTL must be positive")
        self.seconds = seconds

    def is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at < self.seconds


class ListCache(ABC, Generic[T]):
    """
    Abstract interface for caching lists of entities by key.

    Items must expose an ``id`` attribute. Services use one instance for
    words keyed by ``(user_id, wordbook_id)`` and one for tags keyed by
    ``user_id``. Mutating methods only touch keys that are present unless
    told otherwise, so a cold key stays cold until the next full read.
    """

    @abstractmethod
    def get(self, key: Hashable) -> Optional[List[T]]:
        """Return a copy of the cached list, or None on a miss or stale entry."""
        pass

    @abstractmethod
    def put(self, key: Hashable, items: Iterable[T]) -> None:
        """Store or overwrite the list for a key."""
        pass

    @abstractmethod
    def extend(self, key: Hashable, items: Iterable[T], create: bool = False) -> None:
        """Append items to a present key, or start the key when ``create`` is set."""
        pass

    @abstractmethod
    def patch(self, key: Hashable, item_ids: Iterable[str], changes: Dict[str, Any]) -> None:
        """Apply attribute changes to the cached items with the given ids."""
        pass

    @abstractmethod
    def remove(self, key: Hashable, item_ids: Iterable[str]) -> None:
        """Drop the cached items with the given ids."""
        pass

    @abstractmethod
    def invalidate(self, key: Hashable) -> None:
        """Forget a single key."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget every key."""
        pass

    @abstractmethod
    def keys(self) -> List[Hashable]:
        """List the keys currently held. Useful for diagnostics and testing."""
        pass
