"""ExtractionSession — One directory URL in, an ordered event stream out.

Pipeline:
    classify  →  navigate  →  extract  →  paginate  →  emit  →  resolve websites  →  complete

The session owns its Playwright page (acquired through ``open_page`` and
released when the stream ends), the accumulating record list, and a
cancellation token.  Events come out of ``events()`` in order::

    start → (progress | exhibitor)* → complete        (or … → error)

``run()`` is the non-streaming entry point: it drains the same pipeline,
forwards events to the optional callbacks in ``ExtractionOptions``, and
returns the records, raising on fatal errors instead of emitting them.
"""

from __future__ import annotations

import uuid
from contextlib import AbstractAsyncContextManager
from typing import AsyncIterator, Callable
from urllib.parse import urlparse

from playwright.async_api import Page

from expo_scraper.config import settings
from expo_scraper.errors import ScraperError, SessionFatalError
from expo_scraper.extractors import classify, get_adapter
from expo_scraper.models.schemas import (
    CompleteEvent,
    ErrorEvent,
    ExhibitorEvent,
    ExhibitorRecord,
    ExtractionOptions,
    PageType,
    ProgressEvent,
    StartEvent,
    StreamEvent,
)
from expo_scraper.services.pagination import PaginationController
from expo_scraper.services.website_resolver import WebsiteResolver
from expo_scraper.utils.browser import navigate, open_page, wait_for_ready
from expo_scraper.utils.cancellation import CancellationToken
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

PageFactory = Callable[[], AbstractAsyncContextManager[Page]]
ResolverFactory = Callable[[], WebsiteResolver]


def validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise SessionFatalError("Invalid URL provided")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise SessionFatalError(f"Invalid URL provided: {url!r}")
    return url


def should_paginate(page_type: PageType, handle_pagination: bool | None) -> bool:
    """SmallWorldLabs paginates unless disabled; everything else only on request."""
    if page_type == PageType.SMALLWORLDLABS:
        return handle_pagination is not False
    return handle_pagination is True


class ExtractionSession:
    """Run the extraction pipeline for a single directory URL."""

    def __init__(
        self,
        url: str,
        options: ExtractionOptions | None = None,
        *,
        page_factory: PageFactory = open_page,
        resolver_factory: ResolverFactory = WebsiteResolver,
        token: CancellationToken | None = None,
    ) -> None:
        self.id = uuid.uuid4().hex[:12]
        self.url = url
        self.options = options or ExtractionOptions()
        self.token = token or CancellationToken()
        self.records: list[ExhibitorRecord] = []
        self.page_type: PageType | None = None
        self._page_factory = page_factory
        self._resolver_factory = resolver_factory
        self._started = False

    @property
    def find_websites(self) -> bool:
        if self.options.find_websites is None:
            return settings.find_websites_default
        return self.options.find_websites

    @property
    def max_website_searches(self) -> int:
        """Search limit; zero or negative disables searching."""
        if self.options.max_website_searches is None:
            return settings.max_website_searches_default
        return self.options.max_website_searches

    def cancel(self) -> None:
        self.token.cancel()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    async def events(self) -> AsyncIterator[StreamEvent]:
        """Stream the session's events; failures end the stream with an ``error`` event."""
        try:
            async for event in self._execute():
                yield event
        except ScraperError as exc:
            log.error("[%s] Session failed: %s", self.id, exc)
            yield ErrorEvent(error=str(exc) or type(exc).__name__)
        except Exception as exc:
            log.error("[%s] Unexpected session failure: %s", self.id, exc, exc_info=True)
            yield ErrorEvent(error=str(exc) or "Unknown error occurred")

    async def run(self) -> list[ExhibitorRecord]:
        """Drain the pipeline, dispatching callbacks, and return every record."""
        async for event in self._execute():
            if isinstance(event, ProgressEvent) and self.options.on_progress:
                self.options.on_progress(event)
            elif isinstance(event, ExhibitorEvent) and self.options.on_record_found:
                self.options.on_record_found(event.exhibitor)
        return self.records

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    async def _execute(self) -> AsyncIterator[StreamEvent]:
        if self._started:
            raise RuntimeError("ExtractionSession can only be run once")
        self._started = True

        url = validate_url(self.url)
        yield StartEvent(url=url)

        self.page_type = classify(url)
        log.info("[%s] Detected page type: %s", self.id, self.page_type.value)

        async with self._page_factory() as page:
            self.records = await self._extract(page, url)

            with_site = [r for r in self.records if r.website]
            without_site = [r for r in self.records if not r.website]

            if self.find_websites:
                for record in with_site:
                    yield ExhibitorEvent(exhibitor=record)
                async for event in self._discover_websites(with_site, without_site):
                    yield event
            else:
                log.info("[%s] Website discovery disabled (%d exhibitors)", self.id, len(self.records))
                for record in self.records:
                    yield ExhibitorEvent(exhibitor=record)

        log.info("[%s] Completed with %d exhibitors", self.id, len(self.records))
        yield CompleteEvent(count=len(self.records))

    async def _extract(self, page: Page, url: str) -> list[ExhibitorRecord]:
        adapter = get_adapter(self.page_type)

        await navigate(page, url, self.token)
        await self.token.sleep(settings.initial_settle_ms / 1000)
        await wait_for_ready(page, adapter.ready_selector)
        self.token.raise_if_cancelled()

        records = adapter.extract(await page.content(), page.url)
        log.info("[%s] First page: %d exhibitors", self.id, len(records))

        if should_paginate(self.page_type, self.options.handle_pagination):
            controller = PaginationController(page, adapter, token=self.token)
            records = await controller.run(records)
            log.info("[%s] Pagination complete - total exhibitors: %d", self.id, len(records))
        else:
            log.debug("[%s] Pagination skipped for %s", self.id, self.page_type.value)
        return records

    async def _discover_websites(
        self,
        with_site: list[ExhibitorRecord],
        without_site: list[ExhibitorRecord],
    ) -> AsyncIterator[StreamEvent]:
        total = len(self.records)
        yield ProgressEvent(
            message=(
                f"Found {total} exhibitors. {len(with_site)} with websites, "
                f"{len(without_site)} need discovery."
            ),
            total=total,
            with_website=len(with_site),
            need_discovery=len(without_site),
        )
        if not without_site:
            log.info("[%s] All exhibitors already have websites from the page", self.id)
            return

        count = max(0, min(len(without_site), self.max_website_searches))
        yield ProgressEvent(
            message=f"Finding websites for {count} companies...",
            searching=True,
            current=0,
            total=count,
        )
        if count:
            async for event in self._resolve_batch(without_site[:count]):
                yield event

        skipped = without_site[count:]
        if skipped:
            log.info(
                "[%s] Skipped website search for %d companies (maxWebsiteSearches)", self.id, len(skipped)
            )
            for record in skipped:
                yield ExhibitorEvent(exhibitor=record)

    async def _resolve_batch(self, batch: list[ExhibitorRecord]) -> AsyncIterator[StreamEvent]:
        count = len(batch)
        delay_s = settings.website_search_delay_ms / 1000
        async with self._resolver_factory() as resolver:
            for i, record in enumerate(batch, start=1):
                self.token.raise_if_cancelled()
                log.info("[%s] [%d/%d] Searching for: %s", self.id, i, count, record.company_name)
                yield ProgressEvent(
                    message=f"Searching for: {record.company_name}",
                    current=i,
                    total=count,
                )
                try:
                    record.website = await resolver.resolve(record.company_name) or ""
                except Exception as exc:
                    log.warning("[%s] Error finding website for %s: %s", self.id, record.company_name, exc)
                    record.website = ""
                if not record.website:
                    log.info("[%s]   Not found", self.id)
                yield ExhibitorEvent(exhibitor=record)
                await self.token.sleep(delay_s)
