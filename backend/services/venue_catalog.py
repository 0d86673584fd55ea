"""
Venue catalog loading.

Each category ships its own JSON shape (``place_name`` vs ``mall_name``,
``facility_type`` vs ``venue_type`` and so on). The adapters below project a
raw row onto :class:`VenueRecord` so the search engine and the recommender
only ever see one shape.
"""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from domain.models import VenueCategory, VenueRecord

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_float(value: Any) -> float:
    """Number(x) || 0: anything non-numeric (or NaN) becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(num) or math.isinf(num):
        return 0.0
    return num


def _first(row: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return None


def _index(row: Dict[str, Any], position: int, *keys: str) -> str:
    value = _first(row, *keys)
    return str(value) if value else str(position + 1)


def _adapt_restaurant(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "restaurant_index"),
        name=_text(row.get("place_name")),
        category=VenueCategory.RESTAURANTS,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(row.get("cuisine")),
        rating=_as_float(row.get("total_score")),
        external_place_id=row.get("original_place_id") or None,
    )


def _adapt_cafe(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "cafe_index"),
        name=_text(row.get("place_name")),
        category=VenueCategory.CAFES,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(row.get("coffee_and_beverages")),
        secondary_descriptor=_text(row.get("cafe_category")),
        rating=_as_float(row.get("total_score")),
        external_place_id=row.get("original_place_id") or None,
        attributes={
            "wifi_and_study_environment_score": _as_float(row.get("wifi_and_study_environment_score")),
        },
    )


def _adapt_shopping(row: Dict[str, Any], position: int) -> VenueRecord:
    # Shopping ids are always positional, even when the row carries an index.
    return VenueRecord(
        id=str(position + 1),
        name=_text(_first(row, "mall_name", "place_name")),
        category=VenueCategory.SHOPPING,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(row.get("venue_type")),
        rating=_as_float(row.get("total_score")),
    )


def _adapt_entertainment(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "cafe_index"),
        name=_text(_first(row, "venue_name", "place_name")),
        category=VenueCategory.ENTERTAINMENT,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(row.get("venue_type")),
        rating=_as_float(row.get("total_score")),
    )


def _adapt_arts_culture(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "cafe_index"),
        name=_text(row.get("place_name")),
        category=VenueCategory.ARTS_CULTURE,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(row.get("venue_category")),
        rating=_as_float(row.get("total_score")),
    )


def _adapt_sports_fitness(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "cafe_index"),
        name=_text(_first(row, "facility_name", "place_name")),
        category=VenueCategory.SPORTS_FITNESS,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(_first(row, "facility_category", "facility_type") or "Sports & Fitness"),
        rating=_as_float(row.get("total_score")),
    )


def _adapt_health_wellness(row: Dict[str, Any], position: int) -> VenueRecord:
    return VenueRecord(
        id=_index(row, position, "cafe_index"),
        name=_text(row.get("place_name")),
        category=VenueCategory.HEALTH_WELLNESS,
        city=_text(row.get("city")),
        neighborhood=_text(row.get("neighborhood")),
        primary_descriptor=_text(_first(row, "facility_category", "facility_type") or "Health & Wellness"),
        rating=_as_float(row.get("total_score")),
    )


ADAPTERS: Dict[VenueCategory, Callable[[Dict[str, Any], int], VenueRecord]] = {
    VenueCategory.RESTAURANTS: _adapt_restaurant,
    VenueCategory.CAFES: _adapt_cafe,
    VenueCategory.SHOPPING: _adapt_shopping,
    VenueCategory.ENTERTAINMENT: _adapt_entertainment,
    VenueCategory.ARTS_CULTURE: _adapt_arts_culture,
    VenueCategory.SPORTS_FITNESS: _adapt_sports_fitness,
    VenueCategory.HEALTH_WELLNESS: _adapt_health_wellness,
}


def adapt_rows(category: VenueCategory, rows: Iterable[Dict[str, Any]]) -> List[VenueRecord]:
    """Project raw JSON rows of one category onto VenueRecord."""
    adapter = ADAPTERS[category]
    records: List[VenueRecord] = []
    for position, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("Skipping non-object %s row at position %d", category.value, position)
            continue
        records.append(adapter(row, position))
    return records


def load_collections(data_dir: Optional[Path] = None) -> Dict[VenueCategory, List[VenueRecord]]:
    """
    Load every category collection from ``<data_dir>/<category>.json``.

    A missing or unreadable file yields an empty collection; the rest of the
    catalog still loads.
    """
    if data_dir is None:
        from settings import settings

        data_dir = settings.VENUE_DATA_DIR
    data_dir = Path(data_dir)

    collections: Dict[VenueCategory, List[VenueRecord]] = {}
    for category in VenueCategory:
        path = data_dir / f"{category.value}.json"
        if not path.exists():
            logger.warning("No venue data for %s at %s", category.value, path)
            collections[category] = []
            continue
        try:
            with path.open("r", encoding="utf-8") as fh:
                rows = json.load(fh)
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read venue data %s", path)
            collections[category] = []
            continue
        collections[category] = adapt_rows(category, rows or [])
        logger.debug("Loaded %d %s venues", len(collections[category]), category.value)
    return collections


def find_record(
    collections: Dict[VenueCategory, List[VenueRecord]],
    category: VenueCategory,
    venue_id: str,
) -> Optional[VenueRecord]:
    for record in collections.get(category, []):
        if record.id == str(venue_id):
            return record
    return None
