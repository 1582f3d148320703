"""Surf Expo exhibitor list: ``<h4><strong>Category</strong></h4>`` followed by a
paragraph of ``<br>``-separated company names."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import make_soup, split_on_breaks
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

_HEADER_SELECTOR = ".et_pb_text_inner h4 strong, h4 strong"
_PARAGRAPH_SELECTOR = ".et_pb_text_inner p, .et_pb_text p"


def _company_names(paragraph: Tag) -> list[str]:
    return [name for name in split_on_breaks(paragraph) if 1 < len(name) < 200]


def _add_paragraph(collector: RecordCollector, paragraph: Tag, category: str) -> None:
    for name in _company_names(paragraph):
        collector.add(name, group=category, category=category)


def _preceding_category(paragraph: Tag) -> str | None:
    for sibling in paragraph.find_previous_siblings():
        if sibling.name == "h4":
            strong = sibling.find("strong")
            return strong.get_text().strip() if strong is not None else None
    return None


class SurfExpoAdapter:
    page_type = PageType.SURFEXPO
    ready_selector = _HEADER_SELECTOR

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        self._walk_headers(soup, collector)
        if not collector.records:
            log.info("No category headers with company lists, scanning all paragraphs")
            self._scan_paragraphs(soup, collector)

        log.info("Extracted %d exhibitors from Surf Expo", len(collector))
        return collector.records

    @staticmethod
    def _walk_headers(soup: BeautifulSoup, collector: RecordCollector) -> None:
        for header in soup.select(_HEADER_SELECTOR):
            try:
                category = header.get_text().strip()
                if not category:
                    continue
                heading = header.find_parent("h4") or header.parent
                for sibling in heading.find_next_siblings():
                    if sibling.name == "p":
                        _add_paragraph(collector, sibling, category)
                        break
                    if sibling.name == "h4":
                        break
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping Surf Expo category: %s", exc)

    @staticmethod
    def _scan_paragraphs(soup: BeautifulSoup, collector: RecordCollector) -> None:
        category = ""
        for paragraph in soup.select(_PARAGRAPH_SELECTOR):
            try:
                found = _preceding_category(paragraph)
                if found is not None:
                    category = found
                _add_paragraph(collector, paragraph, category or "Unknown")
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping Surf Expo paragraph: %s", exc)
