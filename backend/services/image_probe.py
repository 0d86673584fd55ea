"""
Offline check of resolved image candidates.

Walks a venue's candidate list exactly as a browser would (first URL, then
the next one on each failure, then the placeholder) using HEAD requests.
Meant for data audits, never for request-time resolution.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from services.image_fallback import ImageCandidateCycle, placeholder_for
from services.image_resolver import VenueImageResolver

logger = logging.getLogger(__name__)
_session = requests.Session()

PROBE_TIMEOUT_SEC = 2.0


@dataclass
class ProbeReport:
    category: str
    venue_id: Optional[str]
    venue_name: Optional[str]
    method: str
    candidates: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    displayed: Optional[str] = None

    @property
    def used_placeholder(self) -> bool:
        return self.displayed is not None and self.displayed not in self.candidates


def image_exists(url: str, session: Optional[requests.Session] = None, timeout: float = PROBE_TIMEOUT_SEC) -> bool:
    """HEAD the URL; any network error or non-2xx counts as missing."""
    sess = session or _session
    try:
        resp = sess.head(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.debug("HEAD %s failed: %s", url, exc)
        return False
    return 200 <= resp.status_code < 300


def probe_venue(
    resolver: VenueImageResolver,
    category: str,
    venue_id: Optional[str] = None,
    venue_name: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> ProbeReport:
    entry = resolver.resolve_entry(category, venue_id, venue_name)
    placeholder = placeholder_for(category, base_url=resolver.base_url)
    cycle = ImageCandidateCycle(entry.urls, placeholder=placeholder)
    report = ProbeReport(
        category=category,
        venue_id=venue_id,
        venue_name=venue_name,
        method=entry.method,
        candidates=list(entry.urls),
    )

    while not cycle.exhausted and cycle.current != placeholder:
        url = cycle.current
        if image_exists(url, session=session):
            report.displayed = url
            return report
        report.failed.append(url)
        cycle.on_error(url)

    report.displayed = cycle.current
    return report
