"""WPMA booth maps.

Each booth is a ``div[id^="booth"]`` whose Bootstrap tooltip attributes hold
the booth label (``data-bs-title="Booth #M779"``) and an HTML fragment with
the exhibitor (``data-bs-content``).  Business types are encoded as
``bus-type-<id>`` classes.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import class_list, make_soup, normalize_whitespace
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

_BOOTH_SELECTOR = '#graphic-container div[id^="booth"], div[id^="booth"]'
_BOOTH_NUMBER_RE = re.compile(r"Booth\s*#?M?(\d+)", re.IGNORECASE)
_DESCRIPTION_RE = re.compile(r"Company Description:\s*(.+?)(?:\n|$)", re.IGNORECASE | re.DOTALL)
_REGISTERED_PREFIX_RE = re.compile(r"^This booth is registered to\s*", re.IGNORECASE)
_BUSINESS_TYPE_PREFIX = "bus-type-"

# Booths that are reserved or used by the venue, not exhibitors
_HOLD_NAME = "hold"
_PLACEHOLDER_NAMES = (
    "beer garden",
    "exhibitor services",
    "in our backyard",
    "leonard petroleum",
)


def _is_placeholder(name: str) -> bool:
    lower = name.lower()
    return len(name) < 2 or lower == _HOLD_NAME or any(skip in lower for skip in _PLACEHOLDER_NAMES)


def _booth_number(booth: Tag) -> str:
    match = _BOOTH_NUMBER_RE.search(booth.get("data-bs-title") or "")
    if match:
        return match.group(1)
    return (booth.get("data-val") or "").strip()


def _name_and_location(fragment: BeautifulSoup) -> tuple[str, str]:
    strongs = fragment.find_all("strong")
    name = ""
    for strong in strongs:
        text = strong.get_text().strip()
        if text and "company description" not in text.lower():
            name = text
            break
    location = strongs[1].get_text().strip() if len(strongs) > 1 else ""

    if not name or not location:
        text = _REGISTERED_PREFIX_RE.sub("", fragment.get_text("\n").strip())
        lines = [line.strip() for line in text.split("\n") if line.strip()]
        if not name and lines:
            name = lines[0]
        if not location and len(lines) > 1:
            location = lines[1]
    return name, location


def _description(fragment: BeautifulSoup) -> str:
    match = _DESCRIPTION_RE.search(fragment.get_text())
    return normalize_whitespace(match.group(1)) if match else ""


def _business_types(booth: Tag) -> str:
    types = [cls[len(_BUSINESS_TYPE_PREFIX):] for cls in class_list(booth) if cls.startswith(_BUSINESS_TYPE_PREFIX)]
    return ", ".join(types)


class WPMAAdapter:
    page_type = PageType.WPMA
    ready_selector = _BOOTH_SELECTOR

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        for booth in soup.select(_BOOTH_SELECTOR):
            try:
                content = booth.get("data-bs-content") or ""
                if not content:
                    continue
                fragment = make_soup(content)
                name, location = _name_and_location(fragment)
                if _is_placeholder(name):
                    continue
                number = _booth_number(booth)
                collector.add(
                    name,
                    group=number,
                    booth=f"M{number}" if number else "",
                    location=location,
                    description=_description(fragment),
                    business_types=_business_types(booth),
                )
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping WPMA booth %s: %s", booth.get("id"), exc)

        log.info("Extracted %d exhibitors from WPMA booth map", len(collector))
        return collector.records
