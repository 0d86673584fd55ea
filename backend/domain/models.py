"""
Core domain models for the venue discovery backend.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional


class VenueCategory(str, Enum):
    """Venue categories, valued by their public slug."""
    RESTAURANTS = "restaurants"
    CAFES = "cafes"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    ARTS_CULTURE = "arts-culture"
    SPORTS_FITNESS = "sports-fitness"
    HEALTH_WELLNESS = "health-wellness"

    @classmethod
    def from_slug(cls, value: Optional[str]) -> Optional["VenueCategory"]:
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class VenueRecord:
    """
    One venue listing, projected onto the shape shared by every category.

    Records are built once by the catalog adapters and never mutated.
    Text fields are always strings (missing values become "").
    """
    id: str
    name: str
    category: VenueCategory
    city: str = ""
    neighborhood: str = ""
    primary_descriptor: str = ""  # cuisine, venue type, facility type...
    secondary_descriptor: str = ""  # cafes only: cafe category
    rating: float = 0.0
    external_place_id: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class SearchFilters:
    """Optional search narrowing. category=None or "all" searches everything."""
    category: Optional[str] = None
    city: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class SearchResult:
    """A ranked search hit. Built fresh per search call."""
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


@dataclass(frozen=True)
class VenueFolderEntry:
    """Entry of the place-id folder index (folders known to hold images)."""
    place_id: str
    place_name: str
    folder: str
    category: str
    city: str = ""
    available_images: tuple = ()


@dataclass
class ResolvedImageEntry:
    """
    Outcome of one image resolution.

    method is one of "place_id", "exact", "fuzzy", "generated" or "none".
    """
    cache_key: str
    urls: List[str] = field(default_factory=list)
    method: str = "none"
    folder: Optional[str] = None

    @property
    def primary(self) -> Optional[str]:
        return self.urls[0] if self.urls else None


@dataclass
class RecommendationItem:
    id: str
    name: str
    category: str
    city: str
    score: float
    rating: float
    url: str
    reason: str
    external_place_id: Optional[str] = None
