"""Map a directory URL to the template that knows how to read it."""

from __future__ import annotations

from expo_scraper.models.schemas import PageType

# Checked in order; the first substring found in the URL wins
_HOST_PATTERNS: tuple[tuple[str, PageType], ...] = (
    ("manife.st", PageType.MANIFEST),
    ("mapyourshow.com", PageType.MAPYOURSHOW),
    ("a2zinc.net", PageType.A2Z),
    ("smallworldlabs.com", PageType.SMALLWORLDLABS),
    ("affiliatesummit.com", PageType.AFFILIATESUMMIT),
    ("goeshow.com", PageType.GOESHOW),
    ("wpma.com", PageType.WPMA),
    ("surfexpo.com", PageType.SURFEXPO),
)


def classify(url: str) -> PageType:
    """Return the PageType for *url*; unknown sites are ``PageType.GENERIC``."""
    for pattern, page_type in _HOST_PATTERNS:
        if pattern in url:
            return page_type
    return PageType.GENERIC
