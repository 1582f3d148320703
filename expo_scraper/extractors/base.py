"""Shared pieces for the per-template extractors.

Every template gets one adapter object that satisfies ``ExtractionAdapter``.
Adapters work on an HTML snapshot of the rendered page, so they stay pure and
can be exercised without a browser.
"""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import ValidationError

from expo_scraper.models.schemas import ExhibitorRecord, PageType
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

# Raised by bs4 / regex / pydantic on one malformed element; never fatal for the page
ELEMENT_ERRORS = (ValidationError, ValueError, AttributeError, TypeError, KeyError, IndexError)


class ExtractionAdapter(Protocol):
    page_type: PageType
    # Selector the session waits for before snapshotting the page (best effort)
    ready_selector: str | None

    def extract(self, html: str, base_url: str) -> list[ExhibitorRecord]: ...


class RecordCollector:
    """Accumulate records for one page pass, dropping case-insensitive duplicates.

    ``group`` lets templates that list the same company under several
    categories or booths keep one record per group.
    """

    def __init__(self, source: PageType) -> None:
        self.source = source
        self.records: list[ExhibitorRecord] = []
        self._seen: set[str] = set()

    @staticmethod
    def _key(name: str, group: str) -> str:
        return f"{group.strip().lower()}\x1f{name.strip().lower()}"

    def seen(self, name: str, group: str = "") -> bool:
        return self._key(name, group) in self._seen

    def add(self, company_name: str, *, group: str = "", **fields: Any) -> bool:
        name = (company_name or "").strip()
        if not name or self.seen(name, group):
            return False
        try:
            record = ExhibitorRecord(company_name=name, source=self.source, **fields)
        except ValidationError as exc:
            log.debug("Rejected %s candidate %r: %s", self.source.value, name[:60], exc.errors()[0]["msg"])
            return False
        self._seen.add(self._key(name, group))
        self.records.append(record)
        return True

    def __len__(self) -> int:
        return len(self.records)
