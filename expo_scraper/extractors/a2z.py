"""A2Z (a2zinc.net) exhibitor lists and EventMap booth tables."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import element_text, first_text, make_soup
from expo_scraper.utils.logging import get_logger
from expo_scraper.utils.urls import resolve_website

log = get_logger(__name__)

_BOOTH_ROW_SELECTOR = "tbody tr[data-boothid]"
_FALLBACK_SELECTORS = (
    ".exhibitor-name",
    ".exhibitor-link",
    'a[href*="Exhibitor"]',
    '[id*="exhibitor"]',
)
_NAME_SELECTOR = "h3, h4, .name, .company-name"
_CARD_CLASSES = ("exhibitor-item", "exhibitor-card")


class A2ZAdapter:
    page_type = PageType.A2Z
    ready_selector = f'{_BOOTH_ROW_SELECTOR}, .exhibitor-name, a[href*="Exhibitor"]'

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        rows = soup.select(_BOOTH_ROW_SELECTOR)
        if rows:
            records = self._from_booth_table(rows)
            log.info("Extracted %d exhibitors from A2Z booth table", len(records))
            return records

        log.info("A2Z booth table not found, trying exhibitor list selectors")
        records = self._from_listing(soup, base_url)
        log.info("Extracted %d exhibitors from A2Z list", len(records))
        return records

    def _from_booth_table(self, rows: list[Tag]) -> list[ExhibitorRecord]:
        # The EventMap table carries no websites
        collector = RecordCollector(self.page_type)
        for row in rows:
            try:
                name = first_text(row, "td.companyName a.exhibitorName")
                booth_link = row.select_one("td.boothLabel a.boothLabel")
                booth = ""
                if booth_link is not None:
                    booth = (booth_link.get("data-boothlabels") or element_text(booth_link)).strip()
                booth_id = (row.get("data-boothid") or "").strip()
                collector.add(name, group=booth_id, booth=booth)
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping A2Z booth row: %s", exc)
        return collector.records

    def _from_listing(self, soup: BeautifulSoup, base_url: str) -> list[ExhibitorRecord]:
        collector = RecordCollector(self.page_type)
        elements: list[Tag] = []
        for selector in _FALLBACK_SELECTORS:
            elements = soup.select(selector)
            if elements:
                break

        for element in elements:
            try:
                name = (
                    element_text(element)
                    or first_text(element, _NAME_SELECTOR)
                    or (element.get("title") or "").strip()
                    or (element.get("alt") or "").strip()
                )
                collector.add(name, website=self._website(element, base_url))
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping A2Z element: %s", exc)
        return collector.records

    @staticmethod
    def _website(element: Tag, base_url: str) -> str:
        scopes = [element]
        card = element.find_parent(class_=list(_CARD_CLASSES))
        if card is not None:
            scopes.append(card)
        for scope in scopes:
            for link in scope.select('a[href*="http"]'):
                href = link.get("href") or ""
                if "EventMap" in href:
                    continue
                website = resolve_website(href, base_url, require_relevance=False)
                if website:
                    return website
        return ""
