"""Fallback extractor for directories without a dedicated template.

Cascades through structural and attribute selectors and keeps anything that
reads like a company name.  A link is attached only if it leaves the
directory's own host for a plausible company domain.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import make_soup, normalize_whitespace
from expo_scraper.utils.logging import get_logger
from expo_scraper.utils.urls import absolutize, hostname, is_platform_host, is_social_host, strip_www

log = get_logger(__name__)

_CANDIDATE_SELECTORS = (
    'a[href*="exhibitor"]',
    'a[href*="company"]',
    '[class*="exhibitor"]',
    '[class*="company"]',
    '[class*="vendor"]',
    '[class*="booth"]',
    '[id*="exhibitor"]',
    "table td a",
    "ul li a",
    ".card a",
    ".item a",
    "h2 a",
    "h3 a",
    "h4 a",
)
_ROW_SELECTOR = "li, tr, .list-item"

# Navigation and UI labels that show up in the same containers as company names
_STOPWORDS = frozenset({
    "view", "more", "details", "click", "read", "learn", "see", "show",
    "all", "next", "previous", "page", "home", "about", "contact",
    "login", "register", "search", "filter", "sort",
})
_NUMERIC_RE = re.compile(r"^[\d\s\-()]+$")
_PUNCTUATION_RE = re.compile(r"^[\W_]+$")
_SITE_TLDS = (".com", ".net", ".org", ".io", ".co")


def _is_company_text(text: str) -> bool:
    return (
        2 < len(text) < 100
        and text.lower() not in _STOPWORDS
        and not _NUMERIC_RE.match(text)
        and not _PUNCTUATION_RE.match(text)
    )


class GenericAdapter:
    page_type = PageType.GENERIC
    ready_selector = "body"

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)
        own_host = strip_www(hostname(base_url))

        for selector in _CANDIDATE_SELECTORS:
            for item in soup.select(selector):
                try:
                    name = normalize_whitespace(item.get_text())
                    if _is_company_text(name):
                        collector.add(name, website=self._item_link(item, base_url, own_host))
                except ELEMENT_ERRORS as exc:
                    log.debug("Skipping generic candidate for %r: %s", selector, exc)

        if not collector.records:
            log.info("No structured candidates, scanning list items and table rows")
            self._scan_rows(soup, collector, base_url, own_host)

        log.info("Extracted %d candidates with the generic extractor", len(collector))
        return collector.records

    def _scan_rows(self, soup: BeautifulSoup, collector: RecordCollector, base_url: str, own_host: str) -> None:
        for item in soup.select(_ROW_SELECTOR):
            try:
                name = item.get_text().strip().split("\n")[0].strip()
                if _is_company_text(name):
                    link = item.select_one('a[href*="http"]')
                    website = self._external(link.get("href") if link else None, base_url, own_host)
                    collector.add(name, website=website)
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping generic row: %s", exc)

    def _item_link(self, item: Tag, base_url: str, own_host: str) -> str:
        href = item.get("href") if item.name == "a" else None
        url = absolutize(href, base_url)
        if not url or not url.startswith("http"):
            nested = item.select_one('a[href*="http"]')
            url = nested.get("href") if nested is not None else None
        return self._external(url, base_url, own_host)

    @staticmethod
    def _external(href: str | None, base_url: str, own_host: str) -> str:
        url = absolutize(href, base_url)
        if not url or not url.startswith("http"):
            return ""
        host = strip_www(hostname(url))
        if not host or host == own_host or is_platform_host(host) or is_social_host(host):
            return ""
        if not any(tld in host for tld in _SITE_TLDS):
            return ""
        return url
