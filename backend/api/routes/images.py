"""
Venue image API routes.

The resolver only proposes candidate URLs; clients load them in order and
fall back to the returned placeholder.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api import database
from domain.models import VenueCategory
from services.image_fallback import placeholder_for
from settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


class VenueImagesResponse(BaseModel):
    category: str
    venue_id: Optional[str] = None
    venue_name: Optional[str] = None
    method: str
    folder: Optional[str] = None
    primary: Optional[str] = None
    candidates: List[str]
    placeholder: str


class CacheStatsResponse(BaseModel):
    size: int
    keys: List[str]
    hits: int
    misses: int


@router.get("/cache/stats", response_model=CacheStatsResponse)
def get_cache_stats():
    stats = database.get_image_resolver().cache_stats()
    return CacheStatsResponse(size=stats.size, keys=stats.keys, hits=stats.hits, misses=stats.misses)


@router.delete("/cache", response_model=CacheStatsResponse)
def clear_cache():
    resolver = database.get_image_resolver()
    resolver.clear_cache()
    logger.info("Image resolution cache cleared via API")
    stats = resolver.cache_stats()
    return CacheStatsResponse(size=stats.size, keys=stats.keys, hits=stats.hits, misses=stats.misses)


@router.get("/{category}", response_model=VenueImagesResponse)
def get_venue_images(
    category: str,
    venue_id: Optional[str] = Query(None),
    venue_name: Optional[str] = Query(None),
    fallback: Optional[str] = Query(None, description="Custom placeholder image"),
):
    """Candidate image URLs for one venue, in display order."""
    if VenueCategory.from_slug(category) is None:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    category = category.strip().lower()

    resolver = database.get_image_resolver()
    entry = resolver.resolve_entry(category, venue_id, venue_name)
    return VenueImagesResponse(
        category=category,
        venue_id=venue_id,
        venue_name=venue_name,
        method=entry.method,
        folder=entry.folder,
        primary=entry.primary,
        candidates=list(entry.urls),
        placeholder=placeholder_for(
            category,
            base_url=resolver.base_url,
            custom=fallback or settings.VENUE_PLACEHOLDER_IMAGE,
        ),
    )
