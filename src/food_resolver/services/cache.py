"""Content-addressed cache for image analysis results."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from food_resolver.domain.vision import AnalyzedFood

_logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 1000


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class CacheEntry:
    """A stored analysis; never mutated after insertion."""

    image_hash: str
    foods: tuple[AnalyzedFood, ...]
    suggestions: tuple[str, ...]
    created_at: datetime


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache usage."""

    size: int
    hits: int
    misses: int
    max_entries: int
    ttl_seconds: int


class Cache(Protocol):
    """Cache interface for analysis results keyed by image hash."""

    def get(self, image_hash: str) -> CacheEntry | None:
        """Return a cached entry if present and not expired."""

    def set(
        self,
        image_hash: str,
        foods: list[AnalyzedFood],
        suggestions: list[str],
    ) -> CacheEntry:
        """Store an analysis result."""


@dataclass
class AnalysisCache(Cache):
    """Thread-safe in-memory cache with TTL expiry."""

    ttl_seconds: int = DEFAULT_TTL_SECONDS
    max_entries: int = DEFAULT_MAX_ENTRIES
    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, CacheEntry] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _hits: int = 0
    _misses: int = 0

    def get(self, image_hash: str) -> CacheEntry | None:
        """Return an entry, evicting it if it has expired."""
        with self._lock:
            entry = self._entries.get(image_hash)
            if entry is None:
                self._misses += 1
                return None
            if self._is_expired(entry, self.clock()):
                del self._entries[image_hash]
                self._misses += 1
                _logger.info("Cache entry expired for hash %s", image_hash)
                return None
            self._hits += 1
        _logger.info("Cache hit for hash %s", image_hash)
        return entry

    def set(
        self,
        image_hash: str,
        foods: list[AnalyzedFood],
        suggestions: list[str],
    ) -> CacheEntry:
        """Store a result, sweeping expired entries when full."""
        with self._lock:
            now = self.clock()
            if len(self._entries) >= self.max_entries:
                removed = self._sweep_locked(now)
                if len(self._entries) >= self.max_entries:
                    _logger.warning(
                        "Analysis cache over capacity after sweeping %s entries",
                        removed,
                    )
            entry = CacheEntry(
                image_hash=image_hash,
                foods=tuple(foods),
                suggestions=tuple(suggestions),
                created_at=now,
            )
            self._entries[image_hash] = entry
            size = len(self._entries)
        _logger.info("Cached analysis for hash %s (size=%s)", image_hash, size)
        return entry

    def sweep(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        with self._lock:
            return self._sweep_locked(self.clock())

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        _logger.info("Analysis cache cleared")

    def stats(self) -> CacheStats:
        """Return current usage counters."""
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                max_entries=self.max_entries,
                ttl_seconds=self.ttl_seconds,
            )

    def _is_expired(self, entry: CacheEntry, now: datetime) -> bool:
        return now - entry.created_at > timedelta(seconds=self.ttl_seconds)

    def _sweep_locked(self, now: datetime) -> int:
        expired = [
            key for key, entry in self._entries.items() if self._is_expired(entry, now)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            _logger.info("Swept %s expired cache entries", len(expired))
        return len(expired)
