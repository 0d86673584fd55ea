"""
Query-time relevance search over the in-memory venue collections.

Every category collection is scanned with a fixed, per-category set of
weighted fields plus keyword bonuses; matches from all scanned categories are
merged and ranked by match score, then rating.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from domain.models import ALL_CATEGORIES, SearchFilters, SearchResult, VenueCategory, VenueRecord

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 10.0
PREFIX_MATCH_SCORE = 8.0
SUBSTRING_MATCH_SCORE = 6.0
WORD_MATCH_SCORE = 2.0
FUZZY_CHAR_SCORE = 0.1

# A record must score strictly above this to be returned.
INCLUSION_THRESHOLD = 0.5


def field_score(text: Optional[str], query: Optional[str]) -> float:
    """Score how well one text field matches the query, in [0, 10]."""
    if not text or not query:
        return 0.0

    text_lower = text.lower()
    query_lower = query.lower()

    if text_lower == query_lower:
        return EXACT_MATCH_SCORE
    if text_lower.startswith(query_lower):
        return PREFIX_MATCH_SCORE
    if query_lower in text_lower:
        return SUBSTRING_MATCH_SCORE

    word_score = sum(WORD_MATCH_SCORE for word in query_lower.split() if word in text_lower)

    # Same character at the same position, not an edit distance.
    same_position = sum(1 for a, b in zip(query_lower, text_lower) if a == b)
    fuzzy_score = same_position * FUZZY_CHAR_SCORE

    return min(max(word_score, fuzzy_score), EXACT_MATCH_SCORE)


# (query_lower, record) -> bonus points
BonusRule = Callable[[str, VenueRecord], float]


def keyword_bonus(keywords: Sequence[str], points: float, record_test: Optional[Callable[[VenueRecord], bool]] = None) -> BonusRule:
    """Bonus granted when the query mentions any keyword (and the record passes record_test)."""

    def rule(query_lower: str, record: VenueRecord) -> float:
        if not any(k in query_lower for k in keywords):
            return 0.0
        if record_test is not None and not record_test(record):
            return 0.0
        return points

    return rule


def _descriptor_contains(fragment: str) -> Callable[[VenueRecord], bool]:
    return lambda record: fragment in record.primary_descriptor.lower()


def _city_is(city: str) -> Callable[[VenueRecord], bool]:
    return lambda record: record.city.lower() == city


def _study_friendly(record: VenueRecord) -> bool:
    return float(record.attributes.get("wifi_and_study_environment_score") or 0) > 7


@dataclass(frozen=True)
class CategoryProfile:
    category: VenueCategory
    route: str  # url segment and result id prefix
    default_label: str
    # (field accessor name, weight), scored in order
    fields: Tuple[Tuple[str, float], ...]
    bonuses: Tuple[BonusRule, ...] = ()
    description_field: str = "primary_descriptor"

    def score(self, record: VenueRecord, query: str, query_lower: str) -> float:
        total = 0.0
        for attr, weight in self.fields:
            total += field_score(getattr(record, attr, "") or "", query) * weight
        for bonus in self.bonuses:
            total += bonus(query_lower, record)
        return total

    def to_result(self, record: VenueRecord, score: float) -> SearchResult:
        descriptor = getattr(record, self.description_field, "") or self.default_label
        return SearchResult(
            id=f"{self.route}-{record.id}",
            name=record.name or "Unknown",
            category=self.category.value,
            city=record.city,
            neighborhood=record.neighborhood,
            description=f"{descriptor} • {record.neighborhood}",
            rating=record.rating,
            url=f"/{self.route}/{record.id}",
            match_score=score,
            external_place_id=record.external_place_id,
        )


_COMMON_FIELDS = (
    ("name", 3.0),
    ("primary_descriptor", 2.0),
    ("neighborhood", 2.0),
    ("city", 1.5),
)

CATEGORY_PROFILES: Dict[VenueCategory, CategoryProfile] = {
    VenueCategory.RESTAURANTS: CategoryProfile(
        category=VenueCategory.RESTAURANTS,
        route="restaurant",
        default_label="Restaurant",
        fields=(("name", 3.0), ("primary_descriptor", 2.5), ("neighborhood", 2.0), ("city", 1.5)),
        bonuses=(
            keyword_bonus(["biryani"], 5.0, _descriptor_contains("biryani")),
            keyword_bonus(["karachi"], 3.0, _city_is("karachi")),
            keyword_bonus(["lahore"], 3.0, _city_is("lahore")),
            keyword_bonus(["fine dining"], 4.0, _descriptor_contains("fine")),
        ),
    ),
    VenueCategory.CAFES: CategoryProfile(
        category=VenueCategory.CAFES,
        route="cafe",
        default_label="Cafe",
        fields=_COMMON_FIELDS + (("secondary_descriptor", 1.5),),
        bonuses=(
            keyword_bonus(["coffee"], 4.0, _descriptor_contains("coffee")),
            keyword_bonus(["study"], 3.0, _study_friendly),
        ),
        description_field="secondary_descriptor",
    ),
    VenueCategory.SHOPPING: CategoryProfile(
        category=VenueCategory.SHOPPING,
        route="shopping",
        default_label="Shopping",
        fields=_COMMON_FIELDS,
        bonuses=(
            keyword_bonus(["mall"], 4.0, _descriptor_contains("mall")),
            keyword_bonus(["shopping"], 4.0, _descriptor_contains("shopping")),
        ),
    ),
    VenueCategory.ENTERTAINMENT: CategoryProfile(
        category=VenueCategory.ENTERTAINMENT,
        route="entertainment",
        default_label="Entertainment",
        fields=_COMMON_FIELDS,
        bonuses=(keyword_bonus(["entertainment", "cinema", "movie"], 3.0),),
    ),
    VenueCategory.ARTS_CULTURE: CategoryProfile(
        category=VenueCategory.ARTS_CULTURE,
        route="arts-culture",
        default_label="Arts & Culture",
        fields=_COMMON_FIELDS,
    ),
    VenueCategory.SPORTS_FITNESS: CategoryProfile(
        category=VenueCategory.SPORTS_FITNESS,
        route="sports-fitness",
        default_label="Sports & Fitness",
        fields=_COMMON_FIELDS,
        bonuses=(keyword_bonus(["gym", "fitness", "sports"], 5.0),),
    ),
    VenueCategory.HEALTH_WELLNESS: CategoryProfile(
        category=VenueCategory.HEALTH_WELLNESS,
        route="health-wellness",
        default_label="Health & Wellness",
        fields=_COMMON_FIELDS,
        bonuses=(
            keyword_bonus(["health", "wellness", "spa"], 3.0),
            # gym searches belong to sports-fitness
            keyword_bonus(["gym", "fitness"], -2.0),
        ),
    ),
}


class RelevanceSearchEngine:
    """
    Ranks venues from several category collections against a free-text query.

    ``records_scored`` counts how many records of each category were scored
    over the engine's lifetime; categories skipped by a filter never appear.
    """

    def __init__(
        self,
        collections: Mapping[VenueCategory, Sequence[VenueRecord]],
        profiles: Optional[Mapping[VenueCategory, CategoryProfile]] = None,
    ):
        self.collections = collections
        self.profiles = profiles or CATEGORY_PROFILES
        self.records_scored: Counter = Counter()

    def _categories_for(self, category: Optional[str]) -> List[VenueCategory]:
        if not category or category == ALL_CATEGORIES:
            return list(self.profiles.keys())
        selected = VenueCategory.from_slug(category)
        if selected is None or selected not in self.profiles:
            return []
        return [selected]

    def search(self, query: Optional[str], filters: Optional[SearchFilters] = None) -> List[SearchResult]:
        filters = filters or SearchFilters()
        query = query or ""
        query_lower = query.lower()
        city_filter = filters.city.lower() if filters.city else None

        results: List[SearchResult] = []
        for category in self._categories_for(filters.category):
            profile = self.profiles[category]
            for record in self.collections.get(category, ()):
                self.records_scored[category.value] += 1
                score = profile.score(record, query, query_lower)
                if score <= INCLUSION_THRESHOLD:
                    continue
                if city_filter is not None and (record.city or "").lower() != city_filter:
                    continue
                results.append(profile.to_result(record, score))

        results.sort(key=lambda r: (r.match_score, r.rating), reverse=True)

        if filters.limit:
            results = results[: filters.limit]

        logger.debug(
            "search q=%r category=%s city=%s limit=%s -> %d results",
            query,
            filters.category,
            filters.city,
            filters.limit,
            len(results),
        )
        return results


POPULAR_SEARCHES: Dict[str, List[str]] = {
    "all": [
        "Best Biryani in Karachi",
        "Coffee Shops Islamabad",
        "Family Restaurants",
        "Shopping Malls",
        "Entertainment Venues",
    ],
    "restaurants": [
        "Best Biryani in Karachi",
        "Family Restaurants",
        "BBQ Restaurants",
        "Pakistani Cuisine",
        "Chinese Food",
    ],
    "cafes": [
        "Coffee Shops Islamabad",
        "Study Friendly Cafes",
        "Best Coffee Karachi",
        "Cafe with WiFi",
        "Breakfast Spots",
        "Tea Houses",
    ],
    "shopping": [
        "Shopping Malls Karachi",
        "Fashion Outlets",
        "Electronics Markets",
        "Local Bazaars",
        "Branded Stores",
        "Department Stores",
    ],
    "entertainment": [
        "Cinema Halls",
        "Gaming Zones",
        "Family Entertainment",
        "Kids Play Areas",
        "Bowling Alleys",
        "Arcade Games",
    ],
    "arts-culture": [
        "Art Galleries",
        "Museums",
        "Cultural Centers",
        "Exhibition Halls",
        "Craft Workshops",
        "Heritage Sites",
    ],
    "sports-fitness": [
        "Gyms Near Me",
        "Swimming Pools",
        "Sports Clubs",
        "Fitness Centers",
        "Yoga Studios",
        "Martial Arts",
    ],
    "health-wellness": [
        "Spa Services",
        "Wellness Centers",
        "Massage Therapy",
        "Beauty Salons",
        "Health Clinics",
        "Meditation Centers",
    ],
}


def popular_searches(category: Optional[str] = None) -> List[str]:
    """Suggested queries for a category; unknown categories get the general list."""
    return list(POPULAR_SEARCHES.get(category or ALL_CATEGORIES, POPULAR_SEARCHES[ALL_CATEGORIES]))
