"""Manifest (manife.st) attendee lists.

Company names sit in ``<p class="company-name">`` blocks separated by
``<br>``, interleaved with alphabet range headers such as ``A - F``.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from expo_scraper.extractors.base import ELEMENT_ERRORS, RecordCollector
from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.html import make_soup, split_on_breaks
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

_PRIMARY_SELECTOR = "p.company-name"
_FALLBACK_SELECTOR = '.company-name, [class*="company-name"], p[class*="name"]'
_COLUMN_SELECTOR = '.col-lg-4, .col-md-4, [class*="col-"]'
_BODY_LINE_LIMIT = 1000

_NUMERIC_RE = re.compile(r"^[#\d\s-]+$")
_RANGE_RE = re.compile(r"^[A-Z]\s*-\s*[A-Z]$")
_INTRO_RE = re.compile(r"^Companies Who Attend Include:$", re.IGNORECASE)
_PROSE_MARKERS = ("companies", "attending", "who attend", "include:")


def _is_block_name(text: str) -> bool:
    return (
        1 < len(text) < 200
        and not _NUMERIC_RE.match(text)
        and not _RANGE_RE.match(text)
        and not _INTRO_RE.match(text)
    )


def _is_loose_line(line: str) -> bool:
    # Column and body-text passes see page prose too, so they are stricter
    lower = line.lower()
    return (
        2 < len(line) < 200
        and not _NUMERIC_RE.match(line)
        and not _RANGE_RE.match(line)
        and not any(marker in lower for marker in _PROSE_MARKERS)
    )


def _candidate_blocks(soup: BeautifulSoup) -> list[Tag]:
    blocks = soup.select(_PRIMARY_SELECTOR)
    if not blocks:
        blocks = soup.select(_FALLBACK_SELECTOR)
    if not blocks:
        blocks = [
            el
            for el in soup.find_all(["p", "div"])
            if el.find("br") is not None and len(el.get_text().strip()) > 10
        ]
    return blocks


class ManifestAdapter:
    page_type = PageType.MANIFEST
    ready_selector = "body"

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]:
        soup = make_soup(html)
        collector = RecordCollector(self.page_type)

        for block in _candidate_blocks(soup):
            try:
                for name in split_on_breaks(block):
                    if _is_block_name(name):
                        collector.add(name)
            except ELEMENT_ERRORS as exc:
                log.debug("Skipping manifest block: %s", exc)

        if not collector.records:
            for column in soup.select(_COLUMN_SELECTOR):
                try:
                    self._add_lines(collector, column.get_text("\n"))
                except ELEMENT_ERRORS as exc:
                    log.debug("Skipping manifest column: %s", exc)

        if not collector.records and soup.body is not None:
            log.info("No structured company list found, falling back to raw body text")
            self._add_lines(collector, soup.body.get_text("\n"), limit=_BODY_LINE_LIMIT)

        log.info("Extracted %d companies from Manifest", len(collector))
        return collector.records

    @staticmethod
    def _add_lines(collector: RecordCollector, text: str, *, limit: int | None = None) -> None:
        lines = [line.strip() for line in text.split("\n")]
        accepted = [line for line in lines if line and _is_loose_line(line)]
        for line in accepted[:limit]:
            collector.add(line)
