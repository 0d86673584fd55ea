from __future__ import annotations

import random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from domain.models import RecommendationItem, VenueCategory, VenueRecord
from services.search_engine import CATEGORY_PROFILES

# Tunable constants
SAME_CITY_BONUS = 0.25
DIFFERENT_CITY_PENALTY = 0.15
RATING_WEIGHT = 0.35
DIVERSITY_BONUS = 0.2
RANDOM_FACTOR = 0.1
DEFAULT_COUNT = 3

C = VenueCategory

# Candidate pool per source category: the category itself first, then companions.
COMPANION_CATEGORIES: Dict[VenueCategory, Tuple[VenueCategory, ...]] = {
    C.RESTAURANTS: (C.RESTAURANTS, C.CAFES, C.SHOPPING, C.ENTERTAINMENT),
    C.CAFES: (C.CAFES, C.RESTAURANTS, C.SHOPPING, C.ARTS_CULTURE),
    C.SHOPPING: (C.SHOPPING, C.RESTAURANTS, C.CAFES, C.ENTERTAINMENT),
    C.ENTERTAINMENT: (C.ENTERTAINMENT, C.RESTAURANTS, C.ARTS_CULTURE, C.SHOPPING),
    C.ARTS_CULTURE: (C.ARTS_CULTURE, C.ENTERTAINMENT, C.CAFES, C.RESTAURANTS),
    C.SPORTS_FITNESS: (C.SPORTS_FITNESS, C.HEALTH_WELLNESS, C.CAFES, C.RESTAURANTS),
    C.HEALTH_WELLNESS: (C.HEALTH_WELLNESS, C.SPORTS_FITNESS, C.CAFES, C.RESTAURANTS),
}

# (source, candidate) -> reason. "{city}" is filled with the candidate's city.
SAME_CITY_REASONS: Dict[VenueCategory, str] = {
    C.RESTAURANTS: "Similar cuisine experience in {city}",
    C.CAFES: "Another great coffee spot in {city}",
    C.SHOPPING: "More shopping options in {city}",
    C.ENTERTAINMENT: "More fun activities in {city}",
    C.ARTS_CULTURE: "More cultural experiences in {city}",
    C.SPORTS_FITNESS: "More fitness options in {city}",
    C.HEALTH_WELLNESS: "More wellness options in {city}",
}

COMPANION_REASONS: Dict[Tuple[VenueCategory, VenueCategory], str] = {
    (C.RESTAURANTS, C.CAFES): "Perfect for post-meal coffee",
    (C.RESTAURANTS, C.SHOPPING): "Great for shopping after dining",
    (C.RESTAURANTS, C.ENTERTAINMENT): "Entertainment nearby",
    (C.CAFES, C.RESTAURANTS): "Perfect for a meal",
    (C.CAFES, C.SHOPPING): "Great for shopping while you work",
    (C.CAFES, C.ARTS_CULTURE): "Cultural experience nearby",
    (C.SHOPPING, C.RESTAURANTS): "Dining after shopping",
    (C.SHOPPING, C.CAFES): "Coffee break during shopping",
    (C.SHOPPING, C.ENTERTAINMENT): "Entertainment in the area",
    (C.ENTERTAINMENT, C.RESTAURANTS): "Dining before/after entertainment",
    (C.ENTERTAINMENT, C.ARTS_CULTURE): "Cultural experiences nearby",
    (C.ENTERTAINMENT, C.SHOPPING): "Shopping in the area",
    (C.ARTS_CULTURE, C.ENTERTAINMENT): "Entertainment nearby",
    (C.ARTS_CULTURE, C.CAFES): "Perfect for post-visit coffee",
    (C.ARTS_CULTURE, C.RESTAURANTS): "Dining after cultural experience",
    (C.SPORTS_FITNESS, C.HEALTH_WELLNESS): "Wellness & recovery",
    (C.SPORTS_FITNESS, C.CAFES): "Post-workout refreshments",
    (C.SPORTS_FITNESS, C.RESTAURANTS): "Healthy dining options",
    (C.HEALTH_WELLNESS, C.SPORTS_FITNESS): "Fitness & activity",
    (C.HEALTH_WELLNESS, C.CAFES): "Healthy refreshments",
    (C.HEALTH_WELLNESS, C.RESTAURANTS): "Nutritious dining",
}

# Used when neither table above has an entry, keyed by the source category.
FALLBACK_REASONS: Dict[VenueCategory, str] = {
    C.RESTAURANTS: "Highly rated in {city}",
    C.CAFES: "Popular choice in {city}",
    C.SHOPPING: "Recommended in {city}",
    C.ENTERTAINMENT: "Popular choice in {city}",
    C.ARTS_CULTURE: "Recommended in {city}",
    C.SPORTS_FITNESS: "Popular choice in {city}",
    C.HEALTH_WELLNESS: "Recommended in {city}",
}
DEFAULT_FALLBACK_REASON = "Popular choice in {city}"


def relevance_score(current: VenueRecord, candidate: VenueRecord, rng: Optional[random.Random] = None) -> float:
    """Score a candidate against the venue being viewed. Never negative."""
    rng = rng or random
    score = candidate.rating * RATING_WEIGHT

    if current.city == candidate.city:
        score += SAME_CITY_BONUS
    else:
        score -= DIFFERENT_CITY_PENALTY

    if current.category != candidate.category:
        score += DIVERSITY_BONUS

    if candidate.rating >= 4.0:
        score += 0.15
    if candidate.rating >= 4.5:
        score += 0.1

    score += rng.random() * RANDOM_FACTOR
    return max(0.0, score)


def _reason(current: VenueRecord, candidate: VenueRecord) -> str:
    if candidate.category == current.category and candidate.city == current.city:
        template = SAME_CITY_REASONS[current.category]
    else:
        template = COMPANION_REASONS.get(
            (current.category, candidate.category),
            FALLBACK_REASONS.get(current.category, DEFAULT_FALLBACK_REASON),
        )
    return template.format(city=candidate.city)


def ensure_diversity(items: Sequence[RecommendationItem], count: int) -> List[RecommendationItem]:
    """Pick distinct categories first, then distinct cities, then whatever is left."""
    picked: List[RecommendationItem] = []
    picked_keys = set()

    def take(item: RecommendationItem) -> None:
        picked.append(item)
        picked_keys.add((item.category, item.id))

    used_categories = set()
    for item in items:
        if len(picked) >= count:
            break
        if item.category not in used_categories:
            take(item)
            used_categories.add(item.category)

    used_cities = set()
    for item in items:
        if len(picked) >= count:
            break
        if (item.category, item.id) not in picked_keys and item.city not in used_cities:
            take(item)
            used_cities.add(item.city)

    for item in items:
        if len(picked) >= count:
            break
        if (item.category, item.id) not in picked_keys:
            take(item)

    return picked[:count]


def recommend(
    current: VenueRecord,
    collections: Mapping[VenueCategory, Sequence[VenueRecord]],
    count: int = DEFAULT_COUNT,
    rng: Optional[random.Random] = None,
) -> List[RecommendationItem]:
    """Venues to suggest alongside `current`, drawn from its companion categories."""
    candidates: List[RecommendationItem] = []
    for category in COMPANION_CATEGORIES.get(current.category, (current.category,)):
        profile = CATEGORY_PROFILES[category]
        for record in collections.get(category, ()):
            if record.category == current.category and record.id == current.id:
                continue
            candidates.append(
                RecommendationItem(
                    id=record.id,
                    name=record.name,
                    category=category.value,
                    city=record.city,
                    score=relevance_score(current, record, rng),
                    rating=record.rating,
                    url=f"/{profile.route}/{record.id}",
                    reason=_reason(current, record),
                    external_place_id=record.external_place_id,
                )
            )

    candidates.sort(key=lambda item: item.score, reverse=True)
    return ensure_diversity(candidates, count)
