"""Tag-based response cache with time-based expiry."""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


@dataclass
class CacheEntry:
    value: Any
    cached_at: float
    tags: frozenset[str] = field(default_factory=frozenset)


class TagCache:
    """Cache whose entries expire after ``ttl_seconds`` and can be dropped by tag.

    Keys are free-form. The client caches API reads under request keys with
    the articles tag, and rendered pages untagged under their path (e.g. "/"),
    so ``invalidate_path`` is the only way to drop a page entry.
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Get a value if present and fresh, else None."""
        if not self.enabled:
            return None

        entry = self._entries.get(key)
        if entry is None:
            return None

        if self.clock() - entry.cached_at > self.ttl_seconds:
            del self._entries[key]
            return None

        return entry.value

    def set(self, key: str, value: Any, tags: Iterable[str] = ()) -> None:
        if self.enabled:
            self._entries[key] = CacheEntry(value=value, cached_at=self.clock(), tags=frozenset(tags))

    def invalidate(self, tag: str) -> int:
        """Drop every entry carrying ``tag``. Returns the number dropped."""
        stale = [key for key, entry in self._entries.items() if tag in entry.tags]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def invalidate_path(self, path: str) -> bool:
        """Drop the cached page for ``path``. Returns True if one was cached."""
        return self._entries.pop(path, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
