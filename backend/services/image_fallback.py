"""
Consumer side of the image candidate list: which URL to show next when one
fails to load, ending at a category placeholder.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "/placeholder.svg"

RESTAURANT_PLACEHOLDER = (
    "https://images.unsplash.com/photo-1525648199074-cee30ba79a4a"
    "?crop=entropy&cs=tinysrgb&fit=max&fm=jpg&q=80&w=1080"
)
CAFE_PLACEHOLDER = (
    "https://images.unsplash.com/photo-1501339847302-ac426a4a7cbb"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=2070&q=80"
)

# Direct URLs are used as-is; bare file names live under <base>/category-placeholders/.
CATEGORY_PLACEHOLDERS = {
    "restaurants": RESTAURANT_PLACEHOLDER,
    "cafes": CAFE_PLACEHOLDER,
    "arts-culture": "arts-culture-default.jpg",
    "entertainment": "entertainment-default.jpg",
    "health-wellness": "health-wellness-default.jpg",
    "shopping": "shopping-default.jpg",
    "sports-fitness": "sports-fitness-default.jpg",
}


def placeholder_for(category: str, base_url: Optional[str] = None, custom: Optional[str] = None) -> str:
    """Placeholder image for a category. A custom placeholder always wins."""
    if custom:
        return custom
    fallback = CATEGORY_PLACEHOLDERS.get(category)
    if not fallback:
        return DEFAULT_PLACEHOLDER
    if fallback.startswith("http"):
        return fallback
    if not base_url:
        from settings import settings

        base_url = settings.VENUE_IMAGE_BASE_URL
    return f"{base_url.rstrip('/')}/category-placeholders/{fallback}"


class ImageCandidateCycle:
    """
    Walks a resolved candidate list on load errors.

    Each failure moves to the candidate after the failed one (wrapping
    around the list). Once every candidate has failed, the placeholder is
    returned and stays current.
    """

    def __init__(self, candidates: Sequence[str], placeholder: str = DEFAULT_PLACEHOLDER):
        self.candidates: List[str] = [c for c in candidates if c]
        self.placeholder = placeholder
        self._failed: set = set()
        self.current: str = self.candidates[0] if self.candidates else placeholder

    @property
    def exhausted(self) -> bool:
        return self.current == self.placeholder and (
            not self.candidates or len(self._failed) >= len(set(self.candidates))
        )

    def on_error(self, failed_url: Optional[str] = None) -> str:
        failed = failed_url or self.current
        if failed == self.placeholder:
            return self.current
        self._failed.add(failed)

        if self.candidates:
            try:
                start = self.candidates.index(failed)
            except ValueError:
                start = -1
            count = len(self.candidates)
            for step in range(1, count + 1):
                nxt = self.candidates[(start + step) % count]
                if nxt not in self._failed:
                    logger.debug("Image %s failed, trying %s", failed, nxt)
                    self.current = nxt
                    return nxt

        logger.debug("All %d image candidates failed, using placeholder", len(self.candidates))
        self.current = self.placeholder
        return self.current
