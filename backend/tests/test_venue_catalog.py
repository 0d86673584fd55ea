"""
Tests for catalog adapters and loading.
"""
import json

from domain.models import VenueCategory
from services.venue_catalog import adapt_rows, find_record, load_collections


def test_restaurant_rows():
    records = adapt_rows(
        VenueCategory.RESTAURANTS,
        [
            {"restaurant_index": 12, "place_name": "Kolachi", "cuisine": "BBQ", "city": "Karachi", "total_score": "4.5", "original_place_id": "ChIJabc"},
            {"place_name": "No Index", "total_score": "n/a"},
            {"place_name": "Bad Rating", "total_score": float("nan")},
        ],
    )
    kolachi, no_index, bad = records
    assert kolachi.id == "12"
    assert kolachi.primary_descriptor == "BBQ"
    assert kolachi.rating == 4.5
    assert kolachi.external_place_id == "ChIJabc"
    assert no_index.id == "2"
    assert no_index.rating == 0.0
    assert no_index.city == ""
    assert bad.rating == 0.0


def test_cafe_rows_keep_study_score():
    (cafe,) = adapt_rows(
        VenueCategory.CAFES,
        [{"cafe_index": 3, "place_name": "Mocca", "coffee_and_beverages": "Coffee", "cafe_category": "Study Cafe", "wifi_and_study_environment_score": 9}],
    )
    assert cafe.primary_descriptor == "Coffee"
    assert cafe.secondary_descriptor == "Study Cafe"
    assert cafe.attributes["wifi_and_study_environment_score"] == 9.0


def test_shopping_ids_are_positional():
    records = adapt_rows(
        VenueCategory.SHOPPING,
        [
            {"mall_name": "Packages Mall", "place_name": "ignored", "cafe_index": 99},
            {"place_name": "Liberty Market"},
        ],
    )
    assert [(r.id, r.name) for r in records] == [("1", "Packages Mall"), ("2", "Liberty Market")]


def test_facility_descriptor_fallbacks():
    sports = adapt_rows(
        VenueCategory.SPORTS_FITNESS,
        [
            {"facility_name": "Shapes", "facility_category": "Gym"},
            {"place_name": "Jinnah Complex", "facility_type": "Sports Complex"},
            {"place_name": "Unknown Ground"},
        ],
    )
    assert [r.primary_descriptor for r in sports] == ["Gym", "Sports Complex", "Sports & Fitness"]
    assert sports[0].name == "Shapes"

    (spa,) = adapt_rows(VenueCategory.HEALTH_WELLNESS, [{"place_name": "Serenity"}])
    assert spa.primary_descriptor == "Health & Wellness"


def test_non_object_rows_are_skipped():
    records = adapt_rows(VenueCategory.ARTS_CULTURE, [{"place_name": "Lahore Museum", "venue_category": "Museum"}, "junk"])
    assert len(records) == 1
    assert records[0].primary_descriptor == "Museum"


def test_load_collections_tolerates_missing_and_broken_files(tmp_path):
    (tmp_path / "shopping.json").write_text(json.dumps([{"mall_name": "Packages Mall"}]), encoding="utf-8")
    (tmp_path / "cafes.json").write_text("{", encoding="utf-8")

    collections = load_collections(tmp_path)

    assert set(collections) == set(VenueCategory)
    assert [r.name for r in collections[VenueCategory.SHOPPING]] == ["Packages Mall"]
    assert collections[VenueCategory.CAFES] == []
    assert collections[VenueCategory.RESTAURANTS] == []


def test_bundled_data_loads():
    collections = load_collections()
    dolmen = find_record(collections, VenueCategory.SHOPPING, "6")
    assert dolmen is not None
    assert dolmen.name == "DOLMEN MALL - Clifton"
    assert find_record(collections, VenueCategory.SHOPPING, "999") is None
    assert all(collections[c] for c in VenueCategory)
