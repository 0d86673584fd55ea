import os
from pathlib import Path

# Basic settings helper to read environment configuration.

DEFAULT_IMAGE_BASE_URL = "https://klispots-venue-images.s3.eu-north-1.amazonaws.com/google_places_images1"
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data" / "venues"


def _as_int(val: str | None, default: int | None) -> int | None:
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.VENUE_DATA_DIR: Path = Path(os.getenv("VENUE_DATA_DIR") or DEFAULT_DATA_DIR)
        self.VENUE_IMAGE_BASE_URL: str = (os.getenv("VENUE_IMAGE_BASE_URL") or DEFAULT_IMAGE_BASE_URL).rstrip("/")
        self.VENUE_PLACEHOLDER_IMAGE: str | None = os.getenv("VENUE_PLACEHOLDER_IMAGE") or None
        self.SEARCH_DEFAULT_LIMIT: int | None = _as_int(os.getenv("SEARCH_DEFAULT_LIMIT"), 50)


settings = Settings()
