# IconForge - An On-Demand Vector Icon Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Icon Cache Infrastructure

This module implements the two LRU caches that keep repeated icon requests
cheap. Parsing markup and rasterizing paths are both pure functions of their
inputs, so results can be reused until evicted or cleared.

Architecture:
- BitmapCacheKey: (icon_id, weight, width, height) identifying one render
- MarkupCache: LRU cache of parsed IconDocuments keyed by icon identifier
- BitmapCache: LRU cache of rendered Bitmaps with entry and memory limits
- IconCache: the pair of tiers shared by every caller of a renderer

Thread Safety:
Each tier has its own lock, held only for the dictionary bookkeeping of a
single get/put/clear. Parsing and rasterizing happen outside the lock, so
two threads computing different keys never wait on each other. Two threads
missing the same key may both compute it; the second put simply replaces an
identical value. Cached values are frozen, so a reader never sees a partially
built entry.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Hashable

from . import types as ic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BitmapCacheKey:
    """Unique identifier for a cached bitmap.

    Frozen dataclass for automatic __hash__ and __eq__, making it suitable
    as a dictionary key. A render is a deterministic function of exactly
    these four values for a given document and foreground color.
    """
    icon_id: str
    weight: str
    width: int
    height: int


class LRUCache:
    """Bounded, lock-protected LRU map.

    Uses OrderedDict for O(1) LRU operations. When an entry is accessed,
    it moves to the end (most recently used). When capacity is exceeded,
    the first item (least recently used) is evicted.
    """
    DEFAULT_MAX_ENTRIES = 256

    def __init__(self, max_entries: int | None = None, name: str = "cache") -> None:
        """Initialize the cache with an optional size limit.

        Args:
            max_entries: Maximum cached entries before LRU eviction.
                        Defaults to DEFAULT_MAX_ENTRIES.
            name: Label used in log messages and stats
        """
        self._cache: OrderedDict[Hashable, Any] = OrderedDict()
        self._max_entries = max_entries or self.DEFAULT_MAX_ENTRIES
        self._lock = threading.Lock()
        self.name = name
        self._hits = 0
        self._misses = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: Hashable) -> Any | None:
        """Retrieve a cached value, updating LRU order.

        Returns:
            The cached value if found, None otherwise
        """
        with self._lock:
            value = self._cache.get(key)
            if value is None:
                self._misses += 1
                return None
            self._hits += 1
            self._cache.move_to_end(key)
            return value

    def put(self, key: Hashable, value: Any) -> None:
        """Cache a value with LRU eviction.

        If the key already exists, updates value and LRU position.
        If the cache is full, evicts least recently used entries.
        """
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._cache[key] = value
                return
            while len(self._cache) >= self._max_entries and self._cache:
                self._evict_oldest()
            self._cache[key] = value

    def _evict_oldest(self) -> None:
        # Caller holds the lock
        self._cache.popitem(last=False)

    def _reset(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        with self._lock:
            count = len(self._cache)
            self._reset()
        logger.info("Cleared %s (%d entries)", self.name, count)

    def stats(self) -> dict:
        """Return cache statistics for debugging/profiling.

        Returns:
            Dictionary with entries count, max_entries, hits, misses, and hit_rate
        """
        with self._lock:
            total = self._hits + self._misses
            return {
                'entries': len(self._cache),
                'max_entries': self._max_entries,
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / total if total > 0 else 0.0,
            }

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


class MarkupCache(LRUCache):
    """LRU cache of parsed IconDocuments keyed by icon identifier.

    Kept much smaller than the bitmap tier: one document serves every
    weight and size of its icon.
    """
    DEFAULT_MAX_ENTRIES = 200

    def __init__(self, max_entries: int | None = None) -> None:
        super().__init__(max_entries, name="markup cache")


class BitmapCache(LRUCache):
    """LRU cache for rendered icon bitmaps.

    Enforces both entry count and memory limits to prevent unbounded growth
    when callers request many distinct sizes.
    """
    DEFAULT_MAX_ENTRIES = 1000
    DEFAULT_MAX_BYTES = 64 * 1024 * 1024  # 64 MB

    def __init__(self, max_entries: int | None = None, max_bytes: int | None = None) -> None:
        super().__init__(max_entries, name="bitmap cache")
        self._max_bytes = max_bytes or self.DEFAULT_MAX_BYTES
        self._current_bytes = 0

    def put(self, key: BitmapCacheKey, bitmap: ic.Bitmap) -> None:
        """Cache a bitmap with LRU eviction by count and memory."""
        entry_bytes = bitmap.nbytes
        with self._lock:
            if key in self._cache:
                self._current_bytes -= self._cache[key].nbytes
                del self._cache[key]

            # Evict if over limits
            while (len(self._cache) >= self._max_entries or
                   self._current_bytes + entry_bytes > self._max_bytes) and self._cache:
                self._evict_oldest()

            self._cache[key] = bitmap
            self._current_bytes += entry_bytes

    def _evict_oldest(self) -> None:
        _, evicted = self._cache.popitem(last=False)
        self._current_bytes -= evicted.nbytes

    def _reset(self) -> None:
        super()._reset()
        self._current_bytes = 0

    def stats(self) -> dict:
        result = super().stats()
        with self._lock:
            result['memory_bytes'] = self._current_bytes
            result['max_bytes'] = self._max_bytes
        return result


class IconCache:
    """The markup and bitmap tiers, constructed once and handed to renderers.

    The two tiers lock independently; clearing one never waits on the other.
    """

    def __init__(self, markup_entries: int | None = None, bitmap_entries: int | None = None,
                 bitmap_bytes: int | None = None) -> None:
        self.markup = MarkupCache(markup_entries)
        self.bitmaps = BitmapCache(bitmap_entries, bitmap_bytes)

    def clear(self) -> None:
        """Empty both tiers. Safe to call while renders are in flight."""
        self.markup.clear()
        self.bitmaps.clear()

    def stats(self) -> dict:
        return {
            'markup': self.markup.stats(),
            'bitmaps': self.bitmaps.stats(),
        }
