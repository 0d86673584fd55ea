"""
Venue image resolution.

Maps a (category, venue id / venue name) pair onto an ordered list of
candidate image URLs in the image bucket. Lookups go, in order:

1. place-id folder index (folders whose image files are known),
2. exact venue-name mapping,
3. fuzzy venue-name mapping (first qualifying table entry wins),
4. a generated folder guess from the sanitized name plus the venue id.

Nothing here checks that a URL exists; the display layer walks the list
(see services.image_fallback) and drops to a placeholder at the end.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import quote

from domain.models import ResolvedImageEntry, VenueFolderEntry
from services.image_cache import CacheStats, ImageResolutionCache, make_cache_key
from services.venue_image_mappings import VENUE_IMAGE_MAPPINGS, VenueMappings

logger = logging.getLogger(__name__)

# Suffixes tried under a venue folder, in display order.
IMAGE_SUFFIXES = ("_1.jpg", "_2.jpg", "_3.jpg", ".jpg", "_hero.jpg")

# A fuzzy candidate needs at least this token score.
MIN_TOKEN_SCORE = 2
MIN_TOKEN_LENGTH = 3

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_TOKEN_SPLIT = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-]+")
_GUESS_STRIP = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def clean_name(name: str) -> str:
    return _NON_ALNUM.sub("", (name or "").lower())


def name_tokens(name: str) -> List[str]:
    """Split on case transitions, underscores and hyphens; clean each part.

    Spaces do not split, so "Dolmen Mall" stays one token and a shared
    generic word alone cannot make two names look alike.
    """
    parts = _TOKEN_SPLIT.split(name or "")
    return [t for t in (clean_name(p) for p in parts) if t]


def token_overlap_score(left: Iterable[str], right: Iterable[str]) -> int:
    right = list(right)
    score = 0
    for a in left:
        if len(a) < MIN_TOKEN_LENGTH:
            continue
        for b in right:
            if len(b) < MIN_TOKEN_LENGTH:
                continue
            if a == b:
                score += 2
            elif a in b or b in a:
                score += 1
    return score


def find_partial_match(venue_name: str, available_names: Iterable[str]) -> Optional[str]:
    """
    Return the first available name that loosely matches venue_name.

    Candidates are checked in the given order and the first one that
    qualifies wins, even if a later one would score higher.
    """
    cleaned = clean_name(venue_name)
    if not cleaned:
        return None
    tokens = name_tokens(venue_name)

    for available in available_names:
        cleaned_available = clean_name(available)
        if not cleaned_available:
            continue
        if cleaned in cleaned_available or cleaned_available in cleaned:
            return available
        if token_overlap_score(tokens, name_tokens(available)) >= MIN_TOKEN_SCORE:
            return available
    return None


def guess_folder_name(venue_name: str, venue_id: str) -> str:
    """Folder naming convention of the image bucket: Name_With_Underscores_<id>."""
    cleaned = _GUESS_STRIP.sub("", venue_name)
    cleaned = _WHITESPACE.sub("_", cleaned)
    return f"{cleaned}_{venue_id}"


def load_folder_index(path: Union[str, Path]) -> Dict[str, VenueFolderEntry]:
    """
    Read a place-id folder index ({"venues": [{place_id, place_name, s3_folder,
    category, city, available_images}, ...]}). Missing files give an empty index.
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to read image folder index %s", path)
        return {}

    index: Dict[str, VenueFolderEntry] = {}
    for item in (payload or {}).get("venues", []):
        try:
            entry = VenueFolderEntry(
                place_id=str(item["place_id"]),
                place_name=item.get("place_name", ""),
                folder=item["s3_folder"],
                category=item.get("category", ""),
                city=item.get("city", ""),
                available_images=tuple(item.get("available_images") or ()),
            )
        except (KeyError, TypeError):
            logger.warning("Skipping malformed folder index entry: %r", item)
            continue
        index.setdefault(entry.place_id, entry)
    return index


class VenueImageResolver:
    def __init__(
        self,
        mappings: Optional[VenueMappings] = None,
        folder_index: Optional[Mapping[str, VenueFolderEntry]] = None,
        base_url: Optional[str] = None,
        cache: Optional[ImageResolutionCache] = None,
    ):
        if base_url is None:
            from settings import settings

            base_url = settings.VENUE_IMAGE_BASE_URL
        self.mappings = mappings if mappings is not None else VENUE_IMAGE_MAPPINGS
        self.folder_index = folder_index or {}
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else ImageResolutionCache()

    def _url(self, folder: str, filename: str) -> str:
        return f"{self.base_url}/{quote(folder, safe='')}/{quote(filename, safe='')}"

    def folder_candidates(self, folder: str) -> List[str]:
        return [self._url(folder, f"{folder}{suffix}") for suffix in IMAGE_SUFFIXES]

    def _category_mappings(self, category: str) -> Dict[str, str]:
        table = self.mappings.get(category)
        return table if isinstance(table, dict) else {}

    def _resolve(self, category: str, venue_id: Optional[str], venue_name: Optional[str], key: str) -> ResolvedImageEntry:
        if venue_id:
            indexed = self.folder_index.get(venue_id)
            if indexed and indexed.category == category and indexed.available_images:
                return ResolvedImageEntry(
                    cache_key=key,
                    urls=[self._url(indexed.folder, image) for image in indexed.available_images],
                    method="place_id",
                    folder=indexed.folder,
                )

        table = self._category_mappings(category)
        if venue_name:
            folder = table.get(venue_name)
            if isinstance(folder, str) and folder:
                return ResolvedImageEntry(key, self.folder_candidates(folder), "exact", folder)

            match = find_partial_match(venue_name, table.keys())
            folder = table.get(match) if match else None
            if isinstance(folder, str) and folder:
                logger.debug("Fuzzy image match %s/%r -> %r", category, venue_name, match)
                return ResolvedImageEntry(key, self.folder_candidates(folder), "fuzzy", folder)

        if venue_id and venue_name:
            folder = guess_folder_name(venue_name, venue_id)
            return ResolvedImageEntry(key, self.folder_candidates(folder), "generated", folder)

        logger.debug("No image mapping for %s/%r (id=%s)", category, venue_name, venue_id)
        return ResolvedImageEntry(cache_key=key)

    def resolve_entry(
        self,
        category: str,
        venue_id: Optional[Union[str, int]] = None,
        venue_name: Optional[str] = None,
    ) -> ResolvedImageEntry:
        venue_id = str(venue_id) if venue_id not in (None, "") else None
        key = make_cache_key(category, venue_name, venue_id)
        if not venue_id and not venue_name:
            return ResolvedImageEntry(cache_key=key)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            entry = self._resolve(category, venue_id, venue_name, key)
        except Exception:
            logger.exception("Image resolution failed for %s/%r (id=%s)", category, venue_name, venue_id)
            entry = ResolvedImageEntry(cache_key=key)
        self.cache.put(entry)
        return entry

    def resolve_images(
        self,
        category: str,
        venue_id: Optional[Union[str, int]] = None,
        venue_name: Optional[str] = None,
    ) -> List[str]:
        """Ordered candidate URLs for a venue; empty when nothing can be guessed."""
        return list(self.resolve_entry(category, venue_id, venue_name).urls)

    def primary_image(
        self,
        category: str,
        venue_id: Optional[Union[str, int]] = None,
        venue_name: Optional[str] = None,
    ) -> Optional[str]:
        return self.resolve_entry(category, venue_id, venue_name).primary

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()


_default_image_resolver: Optional[VenueImageResolver] = None


def get_default_image_resolver() -> VenueImageResolver:
    global _default_image_resolver
    if _default_image_resolver is None:
        from settings import settings

        _default_image_resolver = VenueImageResolver(
            folder_index=load_folder_index(settings.VENUE_DATA_DIR / "image_folders.json"),
            base_url=settings.VENUE_IMAGE_BASE_URL,
        )
    return _default_image_resolver


def resolve_venue_images(
    category: str,
    venue_id: Optional[Union[str, int]] = None,
    venue_name: Optional[str] = None,
) -> List[str]:
    return get_default_image_resolver().resolve_images(category, venue_id, venue_name)


def clear_venue_mapping_cache() -> None:
    get_default_image_resolver().clear_cache()
    logger.info("Venue mapping cache cleared")


def get_venue_mapping_cache_stats() -> CacheStats:
    return get_default_image_resolver().cache_stats()
