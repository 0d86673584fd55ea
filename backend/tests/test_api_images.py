from fastapi.testclient import TestClient

from api import database
from api.main import app
from services.image_resolver import VenueImageResolver

BASE = "https://img.test/venues"


class TestImageRoutes:
    def setup_method(self):
        database.install(collections={}, resolver=VenueImageResolver(base_url=BASE))
        self.client = TestClient(app)

    def test_exact_mapping(self):
        resp = self.client.get("/images/shopping", params={"venue_name": "Packages Mall"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["method"] == "exact"
        assert len(body["candidates"]) == 5
        assert body["primary"] == body["candidates"][0]
        assert body["placeholder"] == f"{BASE}/category-placeholders/shopping-default.jpg"

    def test_unresolvable_venue_gets_placeholder_only(self):
        resp = self.client.get("/images/cafes", params={"venue_name": "Nowhere"})
        body = resp.json()
        assert body["candidates"] == []
        assert body["primary"] is None
        assert body["placeholder"].startswith("https://images.unsplash.com/")

    def test_custom_fallback(self):
        resp = self.client.get("/images/cafes", params={"venue_name": "Nowhere", "fallback": "/mine.png"})
        assert resp.json()["placeholder"] == "/mine.png"

    def test_unknown_category(self):
        assert self.client.get("/images/bakeries", params={"venue_name": "X"}).status_code == 404

    def test_cache_stats_and_clear(self):
        self.client.get("/images/shopping", params={"venue_name": "Packages Mall"})
        self.client.get("/images/shopping", params={"venue_name": "Packages Mall"})

        stats = self.client.get("/images/cache/stats").json()
        assert stats["size"] == 1
        assert stats["hits"] == 1

        cleared = self.client.delete("/images/cache").json()
        assert cleared["size"] == 0
        assert cleared["keys"] == []
