"""MapYourShow exhibitor galleries."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import element_text, first_text, make_soup
from expo_scraper.utils.logging import get_logger
from expo_scraper.utils.urls import resolve_website

log = get_logger(__name__)

# Most specific first; the first selector that matches anything is used alone
_ITEM_SELECTORS = (
    ".exhibitor-item",
    ".exhibitor-card",
    ".exhibitor-list-item",
    '[class*="exhibitor"]',
    'a[href*="exhibitor"]',
)
_NAME_SELECTOR = "h3, h4, .name, .company-name"


def _first_matching(soup: BeautifulSoup) -> list[Tag]:
    for selector in _ITEM_SELECTORS:
        elements = soup.select(selector)
        if elements:
            log.debug("MapYourShow items matched %r (%d)", selector, len(elements))
            return elements
    return []


def website_from_links(element: Tag, base_url: str) -> str:
    """First link inside *element* that passes website link resolution."""
    for link in element.select("a[href]"):
        website = resolve_website(link.get("href"), base_url, link.get_text())
        if website:
            return website
    return ""


class MapYourShowAdapter:
    page_type = PageType.MAPYOURSHOW
    ready_selector = '[class*="exhibitor"], a[href*="exhibitor"]'

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        for element in _first_matching(soup):
            try:
                name = (
                    element_text(element)
                    or first_text(element, _NAME_SELECTOR)
                    or (element.get("title") or "").strip()
                )
                collector.add(name, website=website_from_links(element, base_url))
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping MapYourShow element: %s", exc)

        log.info("Extracted %d exhibitors from MapYourShow", len(collector))
        return collector.records
