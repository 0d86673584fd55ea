"""
Tests for venue image resolution and its cache.
"""
import json
from unittest.mock import patch

from domain.models import VenueFolderEntry
from services.image_cache import make_cache_key
from services.image_resolver import (
    VenueImageResolver,
    clear_venue_mapping_cache,
    find_partial_match,
    get_venue_mapping_cache_stats,
    load_folder_index,
    name_tokens,
    resolve_venue_images,
    token_overlap_score,
)
from services.venue_image_mappings import available_folders, available_venue_names

BASE = "https://img.test/venues"
PACKAGES_FOLDER = "Packages_Mall_Lahore_ChIJW57Oe1cdGTkRVnPOWapf8D8"


class TestResolveImages:
    def setup_method(self):
        self.resolver = VenueImageResolver(base_url=BASE)

    def test_exact_mapping_yields_five_candidates(self):
        urls = self.resolver.resolve_images("shopping", None, "Packages Mall")
        assert len(urls) == 5
        assert urls[0] == f"{BASE}/{PACKAGES_FOLDER}/{PACKAGES_FOLDER}_1.jpg"
        assert urls[-1] == f"{BASE}/{PACKAGES_FOLDER}/{PACKAGES_FOLDER}_hero.jpg"
        assert self.resolver.resolve_entry("shopping", None, "Packages Mall").method == "exact"

    def test_fuzzy_containment_match(self):
        resolver = VenueImageResolver(mappings={"shopping": {"Centaurus Mall": "Centaurus_F8"}}, base_url=BASE)
        entry = resolver.resolve_entry("shopping", None, "The Centaurus Mall Islamabad")
        assert entry.method == "fuzzy"
        assert entry.folder == "Centaurus_F8"
        assert entry.primary == f"{BASE}/Centaurus_F8/Centaurus_F8_1.jpg"

    def test_first_qualifying_fuzzy_entry_wins(self):
        # both branches share the "Broadway Pizza" token; table order decides
        mappings = {
            "restaurants": {
                "Broadway Pizza - LuckyOne Mall": "Broadway_LuckyOne",
                "Broadway Pizza - Dolmen Mall Clifton": "Broadway_Dolmen",
            }
        }
        resolver = VenueImageResolver(mappings=mappings, base_url=BASE)
        entry = resolver.resolve_entry("restaurants", None, "Broadway Pizza - Giga Mall")
        assert entry.method == "fuzzy"
        assert entry.folder == "Broadway_LuckyOne"

    def test_spaced_name_reaches_its_own_mapping(self):
        entry = self.resolver.resolve_entry("shopping", None, "Dolmen Mall Clifton")
        assert entry.method == "fuzzy"
        assert entry.folder == "Dolmen_Mall_-_Clifton_Karachi_ChIJb1gSnAk9sz4R9zKPSWSPRo8"

    def test_shared_generic_word_is_not_a_match(self):
        entry = self.resolver.resolve_entry("shopping", None, "Emporium Mall")
        assert entry.method == "none"
        assert entry.urls == []

    def test_generated_guess_needs_id_and_name(self):
        resolver = VenueImageResolver(mappings={}, base_url=BASE)
        entry = resolver.resolve_entry("restaurants", 42, "Nihari Inn!")
        assert entry.method == "generated"
        assert entry.folder == "Nihari_Inn_42"
        assert entry.primary == f"{BASE}/Nihari_Inn_42/Nihari_Inn_42_1.jpg"

        assert resolver.resolve_images("restaurants", "42", None) == []
        assert resolver.resolve_images("restaurants", None, "Nihari Inn") == []

    def test_no_identity_is_not_cached(self):
        assert self.resolver.resolve_images("shopping") == []
        assert self.resolver.cache_stats().size == 0

    def test_urls_are_percent_encoded(self):
        resolver = VenueImageResolver(mappings={"cafes": {"Cafe Nine": "Cafe Nine #9"}}, base_url=BASE)
        assert resolver.primary_image("cafes", None, "Cafe Nine") == f"{BASE}/Cafe%20Nine%20%239/Cafe%20Nine%20%239_1.jpg"

    def test_malformed_mappings_do_not_raise(self):
        resolver = VenueImageResolver(
            mappings={"shopping": ["not", "a", "table"], "cafes": {"Espresso": None}},
            base_url=BASE,
        )
        assert resolver.resolve_images("shopping", None, "Packages Mall") == []
        assert resolver.resolve_images("cafes", None, "Espresso") == []

    def test_resolution_errors_become_empty_results(self):
        with patch.object(self.resolver, "_resolve", side_effect=RuntimeError("boom")):
            assert self.resolver.resolve_images("shopping", None, "Packages Mall") == []
        assert self.resolver.cache_stats().size == 1


class TestResolutionCache:
    def setup_method(self):
        self.resolver = VenueImageResolver(base_url=BASE)

    def test_repeat_lookup_is_a_cache_hit(self):
        first = self.resolver.resolve_images("shopping", None, "Packages Mall")
        second = self.resolver.resolve_images("shopping", None, "Packages Mall")
        stats = self.resolver.cache_stats()

        assert first == second
        assert stats.size == 1
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.keys == [make_cache_key("shopping", "Packages Mall", None)]

    def test_returned_list_is_a_copy(self):
        urls = self.resolver.resolve_images("shopping", None, "Packages Mall")
        urls.clear()
        assert len(self.resolver.resolve_images("shopping", None, "Packages Mall")) == 5

    def test_misses_are_cached(self):
        assert self.resolver.resolve_images("shopping", None, "Nowhere Bazaar") == []
        assert self.resolver.resolve_images("shopping", None, "Nowhere Bazaar") == []
        stats = self.resolver.cache_stats()
        assert stats.size == 1
        assert stats.hits == 1

    def test_clear_cache_empties_everything(self):
        self.resolver.resolve_images("shopping", None, "Packages Mall")
        self.resolver.resolve_images("cafes", None, "Cafe Beirut")
        self.resolver.clear_cache()
        stats = self.resolver.cache_stats()
        assert stats.size == 0
        assert stats.keys == []
        assert stats.hits == 0

    def test_cache_key_format(self):
        assert make_cache_key("shopping", "Packages Mall", None) == "shopping-Packages Mall-no-id"
        assert make_cache_key("cafes", None, "12") == "cafes--12"


class TestFolderIndex:
    def test_place_id_entry_lists_known_images(self):
        index = {
            "P1": VenueFolderEntry(
                place_id="P1",
                place_name="Student Biryani",
                folder="Student_Biryani_P1",
                category="restaurants",
                available_images=("Student_Biryani_P1_1.jpg", "cover 2.jpg"),
            )
        }
        resolver = VenueImageResolver(mappings={}, folder_index=index, base_url=BASE)
        entry = resolver.resolve_entry("restaurants", "P1", "Student Biryani")
        assert entry.method == "place_id"
        assert entry.urls == [
            f"{BASE}/Student_Biryani_P1/Student_Biryani_P1_1.jpg",
            f"{BASE}/Student_Biryani_P1/cover%202.jpg",
        ]

    def test_place_id_entry_ignored_for_other_category(self):
        index = {
            "P1": VenueFolderEntry(
                place_id="P1",
                place_name="Student Biryani",
                folder="Somewhere_Else",
                category="restaurants",
                available_images=("x.jpg",),
            )
        }
        resolver = VenueImageResolver(mappings={}, folder_index=index, base_url=BASE)
        entry = resolver.resolve_entry("cafes", "P1", "Student Biryani")
        assert entry.method == "generated"

    def test_load_folder_index_skips_malformed_entries(self, tmp_path):
        path = tmp_path / "image_folders.json"
        path.write_text(
            json.dumps(
                {
                    "venues": [
                        {"place_id": "P1", "place_name": "A", "s3_folder": "A_P1", "category": "cafes", "available_images": ["A_P1_1.jpg"]},
                        {"place_id": "P2", "place_name": "B"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        index = load_folder_index(path)
        assert list(index) == ["P1"]
        assert index["P1"].available_images == ("A_P1_1.jpg",)

    def test_load_folder_index_missing_file(self, tmp_path):
        assert load_folder_index(tmp_path / "nope.json") == {}


def test_name_tokens_split_case_and_separators():
    assert name_tokens("LuckyOneMall") == ["lucky", "one", "mall"]
    assert name_tokens("DOLMEN MALL - Clifton") == ["dolmenmall", "clifton"]
    assert name_tokens("Emporium Mall") == ["emporiummall"]
    assert name_tokens("Fun_City-Islamabad") == ["fun", "city", "islamabad"]


def test_token_overlap_score():
    assert token_overlap_score(["centaurus", "mall"], ["centaurus", "mall", "garden"]) == 4
    assert token_overlap_score(["pack"], ["packages"]) == 1
    # tokens shorter than three characters never count
    assert token_overlap_score(["f8", "mall"], ["f8", "mall"]) == 2


def test_find_partial_match_edge_cases():
    assert find_partial_match("!!!", ["Packages Mall"]) is None
    assert find_partial_match("Packages", ["", "Packages Mall"]) == "Packages Mall"
    assert find_partial_match("Liberty Market", ["Packages Mall", "Giga Mall"]) is None


def test_module_level_cache_helpers():
    clear_venue_mapping_cache()
    assert resolve_venue_images("shopping", None, "Packages Mall")
    assert get_venue_mapping_cache_stats().size == 1
    clear_venue_mapping_cache()
    assert get_venue_mapping_cache_stats().size == 0


def test_mapping_table_listings():
    assert "Packages Mall" in available_venue_names("shopping")
    assert PACKAGES_FOLDER in available_folders("shopping")
    assert available_venue_names("bakeries") == []
