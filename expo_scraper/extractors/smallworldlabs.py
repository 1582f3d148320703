"""SmallWorldLabs exhibitor directories.

Listings are a paginated table: row number, company (``a.generic-option-link``),
booth link.  Header and booth-map rows share the same markup and are dropped
by name.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import element_text, make_soup, normalize_whitespace
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

TABLE_ROW_SELECTOR = "table.table tbody tr, .generic-table-wrapper tbody tr"
_ROW_SELECTORS = ("table.table tbody tr", ".generic-table-wrapper tbody tr", "tbody tr")

_REJECTED_NAMES = (
    re.compile(r"^Booth\s*#?\d+$", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"^Explore$", re.IGNORECASE),
    re.compile(r"^Name$", re.IGNORECASE),
)
_EXCLUDED_LINK_MARKERS = ("a2zinc.net", "smallworldlabs.com", "EventMap")


def _rows(soup: BeautifulSoup) -> list[Tag]:
    for selector in _ROW_SELECTORS:
        rows = soup.select(selector)
        if rows:
            return rows
    return []


def _booth(cell: Tag) -> str:
    link = cell.find("a")
    return normalize_whitespace((link or cell).get_text())


def _row_website(row: Tag) -> str:
    for link in row.select("a[href]"):
        href = (link.get("href") or "").strip()
        if href.startswith("http") and not any(marker in href for marker in _EXCLUDED_LINK_MARKERS):
            return href
    return ""


class SmallWorldLabsAdapter:
    page_type = PageType.SMALLWORLDLABS
    ready_selector = TABLE_ROW_SELECTOR

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        for row in _rows(soup):
            try:
                cells = row.find_all("td")
                if len(cells) < 2:
                    continue
                name_link = cells[1].select_one("a.generic-option-link")
                if name_link is None:
                    continue
                name = element_text(name_link)
                if any(pattern.match(name) for pattern in _REJECTED_NAMES):
                    continue
                booth = _booth(cells[2]) if len(cells) >= 3 else ""
                collector.add(name, booth=booth, website=_row_website(row))
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping SmallWorldLabs row: %s", exc)

        log.info("Extracted %d companies from SmallWorldLabs", len(collector))
        return collector.records
