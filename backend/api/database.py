"""
In-memory venue catalog for the API.

Collections are read from the venue data directory once, on first use, and
shared by every request.
"""
from typing import Dict, List, Optional

from domain.models import VenueCategory, VenueRecord
from services.image_resolver import VenueImageResolver, get_default_image_resolver
from services.search_engine import RelevanceSearchEngine
from services.venue_catalog import load_collections

# In-memory storage
venues_db: Optional[Dict[VenueCategory, List[VenueRecord]]] = None
_search_engine: Optional[RelevanceSearchEngine] = None
_image_resolver: Optional[VenueImageResolver] = None


def get_collections() -> Dict[VenueCategory, List[VenueRecord]]:
    global venues_db
    if venues_db is None:
        venues_db = load_collections()
    return venues_db


def get_search_engine() -> RelevanceSearchEngine:
    global _search_engine
    if _search_engine is None:
        _search_engine = RelevanceSearchEngine(get_collections())
    return _search_engine


def get_image_resolver() -> VenueImageResolver:
    global _image_resolver
    if _image_resolver is None:
        _image_resolver = get_default_image_resolver()
    return _image_resolver


def install(
    collections: Optional[Dict[VenueCategory, List[VenueRecord]]] = None,
    resolver: Optional[VenueImageResolver] = None,
) -> None:
    """Swap in explicit collections / resolver (tests, scripts). None resets to lazy loading."""
    global venues_db, _search_engine, _image_resolver
    venues_db = collections
    _search_engine = None
    _image_resolver = resolver
