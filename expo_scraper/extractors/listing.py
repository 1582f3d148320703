"""Class-pattern directories (Affiliate Summit, GoeShow).

Both templates mark each exhibitor with an ``*exhibitor*`` (or ``*vendor*``)
class and carry at most one outbound link per card.
"""

from __future__ import annotations

from bs4 import Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import element_text, first_text, make_soup
from expo_scraper.utils.logging import get_logger
from expo_scraper.utils.urls import resolve_website

log = get_logger(__name__)


def first_external_link(element: Tag, base_url: str) -> str:
    for link in element.select("a[href]"):
        website = resolve_website(link.get("href"), base_url, require_relevance=False)
        if website:
            return website
    return ""


class ClassPatternAdapter:
    ready_selector = "body"

    def __init__(self, page_type: PageType, item_selector: str, name_selector: str) -> None:
        self.page_type = page_type
        self.item_selector = item_selector
        self.name_selector = name_selector

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        for item in soup.select(self.item_selector):
            try:
                name = element_text(item) or first_text(item, self.name_selector)
                collector.add(name, website=first_external_link(item, base_url))
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping %s item: %s", self.page_type.value, exc)

        log.info("Extracted %d exhibitors from %s", len(collector), self.page_type.value)
        return collector.records


affiliate_summit = ClassPatternAdapter(
    PageType.AFFILIATESUMMIT,
    item_selector='[class*="exhibitor"], [data-exhibitor]',
    name_selector="h1, h2, h3, h4",
)

goeshow = ClassPatternAdapter(
    PageType.GOESHOW,
    item_selector='[class*="exhibitor"], [class*="vendor"]',
    name_selector="h1, h2, h3, h4, .name",
)
