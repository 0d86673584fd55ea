"""
Search API routes.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api import database
from domain.models import ALL_CATEGORIES, SearchFilters, SearchResult, VenueCategory
from services.search_engine import popular_searches
from settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


class SearchResultResponse(BaseModel):
    id: str
    name: str
    category: str
    city: str
    neighborhood: str
    description: str
    rating: float
    url: str
    match_score: float
    external_place_id: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    category: str
    city: Optional[str] = None
    total: int
    results: List[SearchResultResponse]


class PopularSearchesResponse(BaseModel):
    category: str
    searches: List[str]


def result_to_response(result: SearchResult) -> SearchResultResponse:
    """Convert domain SearchResult to API response."""
    return SearchResultResponse(
        id=result.id,
        name=result.name,
        category=result.category,
        city=result.city,
        neighborhood=result.neighborhood,
        description=result.description,
        rating=result.rating,
        url=result.url,
        match_score=result.match_score,
        external_place_id=result.external_place_id,
    )


def _validate_category(category: Optional[str]) -> str:
    if not category or category == ALL_CATEGORIES:
        return ALL_CATEGORIES
    if VenueCategory.from_slug(category) is None:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    return category.strip().lower()


@router.get("", response_model=SearchResponse)
def search_venues(
    q: str = Query("", description="Free-text query"),
    category: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    """Rank venues across categories for a free-text query."""
    category = _validate_category(category)
    filters = SearchFilters(
        category=category,
        city=city or None,
        limit=limit or settings.SEARCH_DEFAULT_LIMIT,
    )
    results = database.get_search_engine().search(q, filters)
    return SearchResponse(
        query=q,
        category=category,
        city=filters.city,
        total=len(results),
        results=[result_to_response(r) for r in results],
    )


@router.get("/popular", response_model=PopularSearchesResponse)
def get_popular_searches(category: Optional[str] = Query(None)):
    """Suggested queries for the search box."""
    category = category or ALL_CATEGORIES
    return PopularSearchesResponse(category=category, searches=popular_searches(category))
