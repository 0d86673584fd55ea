"""
In-memory cache for venue image resolutions.

Entries live until clear() or process exit (no TTL). Misses are stored too, so
an unresolvable venue is only fuzzy-matched once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from domain.models import ResolvedImageEntry


@dataclass
class CacheStats:
    size: int
    keys: List[str] = field(default_factory=list)
    hits: int = 0
    misses: int = 0


def make_cache_key(category: str, venue_name: Optional[str], venue_id: Optional[str]) -> str:
    return f"{category}-{venue_name or ''}-{venue_id or 'no-id'}"


class ImageResolutionCache:
    def __init__(self) -> None:
        self._entries: Dict[str, ResolvedImageEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[ResolvedImageEntry]:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, entry: ResolvedImageEntry) -> None:
        self._entries[entry.cache_key] = entry

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._entries),
            keys=list(self._entries.keys()),
            hits=self.hits,
            misses=self.misses,
        )
