"""
Venue API routes: URL parsing and "you may also like" recommendations.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api import database
from domain.models import VenueCategory
from services.recommendations import DEFAULT_COUNT, recommend
from services.url_slugs import create_venue_url, parse_venue_url
from services.venue_catalog import find_record

router = APIRouter()
logger = logging.getLogger(__name__)


class RecommendationResponse(BaseModel):
    id: str
    name: str
    category: str
    city: str
    score: float
    rating: float
    url: str
    reason: str
    external_place_id: Optional[str] = None


class RecommendationsResponse(BaseModel):
    venue_id: str
    category: str
    canonical_url: str
    recommendations: List[RecommendationResponse]


class ParsedVenueUrlResponse(BaseModel):
    category: str
    id: str
    slug: Optional[str] = None


@router.get("/resolve-url", response_model=ParsedVenueUrlResponse)
def resolve_url(path: str = Query(..., description="Venue path such as /shopping/10-dolmen-mall-clifton")):
    parsed = parse_venue_url(path)
    if parsed is None:
        raise HTTPException(status_code=404, detail="Not a venue URL")
    return ParsedVenueUrlResponse(**parsed)


@router.get("/{category}/{venue_id}/recommendations", response_model=RecommendationsResponse)
def get_recommendations(
    category: str,
    venue_id: str,
    count: int = Query(DEFAULT_COUNT, ge=1, le=20),
):
    venue_category = VenueCategory.from_slug(category)
    if venue_category is None:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")

    collections = database.get_collections()
    current = find_record(collections, venue_category, venue_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Venue not found")

    items = recommend(current, collections, count=count)
    logger.debug("Recommendations for %s/%s: %d items", category, venue_id, len(items))
    return RecommendationsResponse(
        venue_id=current.id,
        category=venue_category.value,
        canonical_url=create_venue_url(venue_category.value, current.id, current.name),
        recommendations=[
            RecommendationResponse(
                id=item.id,
                name=item.name,
                category=item.category,
                city=item.city,
                score=item.score,
                rating=item.rating,
                url=item.url,
                reason=item.reason,
                external_place_id=item.external_place_id,
            )
            for item in items
        ],
    )
