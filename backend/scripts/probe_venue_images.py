"""Probe which image each venue would actually display.

Usage:
    python scripts/probe_venue_images.py --category shopping
    python scripts/probe_venue_images.py --category cafes --name "Cafe Beirut"

For every venue (or the single named one) the resolved candidate list is
walked with HEAD requests; venues that end on the placeholder are reported.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from domain.models import VenueCategory  # noqa: E402
from services.image_probe import probe_venue  # noqa: E402
from services.image_resolver import get_default_image_resolver  # noqa: E402
from services.venue_catalog import load_collections  # noqa: E402

LOG = logging.getLogger("probe_venue_images")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--category", required=True, choices=[c.value for c in VenueCategory])
    parser.add_argument("--name", help="Probe a single venue by name")
    parser.add_argument("--id", dest="venue_id", help="Venue id (used for generated folder guesses)")
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    resolver = get_default_image_resolver()
    category = VenueCategory(args.category)

    if args.name or args.venue_id:
        targets = [(args.venue_id, args.name)]
    else:
        collections = load_collections(args.data_dir)
        targets = [(r.external_place_id or r.id, r.name) for r in collections.get(category, [])]

    missing = 0
    for venue_id, name in targets:
        report = probe_venue(resolver, category.value, venue_id, name)
        if report.used_placeholder:
            missing += 1
            LOG.warning("%s (%s): placeholder after %d failed candidates [%s]", name, venue_id, len(report.failed), report.method)
        else:
            LOG.info("%s (%s): %s [%s]", name, venue_id, report.displayed, report.method)

    print(f"Probed {len(targets)} venues, {missing} fell back to the placeholder")
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
