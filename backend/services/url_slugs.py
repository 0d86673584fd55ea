"""URL-friendly slugs for venue detail pages."""
from __future__ import annotations

import re
from typing import Dict, Optional, Union

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")
_VENUE_URL = re.compile(r"/([^/]+)/([0-9]+)(?:-(.+))?")


def create_slug(text: Optional[str]) -> str:
    """
    Lower-case, drop everything but [a-z0-9], whitespace and hyphens, then
    turn whitespace runs into hyphens and collapse/trim hyphens.

    >>> create_slug("DOLMEN MALL - Clifton")
    'dolmen-mall-clifton'
    """
    if not text:
        return ""
    slug = text.lower().strip()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def create_venue_url(category: str, venue_id: Union[str, int], venue_name: Optional[str]) -> str:
    slug = create_slug(venue_name)
    return f"/{category}/{venue_id}-{slug}" if slug else f"/{category}/{venue_id}"


def parse_venue_url(url: str) -> Optional[Dict[str, Optional[str]]]:
    """Split ``/category/id[-slug]`` into its parts; None when the path does not match."""
    match = _VENUE_URL.fullmatch(url or "")
    if not match:
        return None
    return {
        "category": match.group(1),
        "id": match.group(2),
        "slug": match.group(3) or None,
    }
