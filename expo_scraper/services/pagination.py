"""PaginationController — Walk a directory's pages on the live Playwright page.

State machine per session: ``IDLE -> ADVANCING -> ... -> EXHAUSTED``.  Each
advance clicks the template's "next" control, waits (bounded) for the new
page to render, and re-runs the template adapter on the fresh HTML.  The
loop stops when no next control is found, a page yields no records, a click
fails, or the template's page cap is reached.

SmallWorldLabs paginates client-side with numbered pager links, so it gets
its own advance strategy; every other template uses a generic "next" probe.
"""

from __future__ import annotations

import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import ElementHandle, Page

from expo_scraper.config import settings
from expo_scraper.extractors.base import ExtractionAdapter
from expo_scraper.extractors.smallworldlabs import TABLE_ROW_SELECTOR
from expo_scraper.models.schemas import ExhibitorRecord, PageType, PaginationState, PaginationStatus
from expo_scraper.utils.browser import is_clickable
from expo_scraper.utils.cancellation import CancellationToken
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

PAGE_CAPS: dict[PageType, int] = {
    PageType.SMALLWORLDLABS: 100,
    PageType.MANIFEST: 20,
}
DEFAULT_PAGE_CAP = 5

_DIGITS_RE = re.compile(r"\d+")

# SmallWorldLabs pager
SWL_PAGINATION = '.pagination.paginator-pagination, .pagination, [class*="pagination"]'
SWL_PAGE_LINKS = 'a.pager-num, a[class*="pager-num"], a.pager-item'
SWL_CURRENT_PAGE = 'span.pager-num, span[class*="pager-num"], span.pager-item'
SWL_ACTIVE_FALLBACK = '.active, [class*="active"], .current, [class*="current"]'
SWL_NEXT_BUTTON = 'a[aria-label*="Next Page" i], a.pager-right-next, a[class*="pager-right-next"]'
SWL_ARROW_BUTTON = "a.pager-right-next.pager-item"

# Resolves once the pager's current-page span shows the expected number
_SWL_PAGE_REACHED_JS = """
(expected) => {
    const pagination = document.querySelector('.pagination.paginator-pagination');
    if (!pagination) return false;
    const current = pagination.querySelector('span.pager-num, span[class*="pager-num"], span.pager-item');
    if (!current) return false;
    const match = (current.textContent || '').trim().match(/\\d+/);
    return !!match && parseInt(match[0], 10) === expected;
}
"""

GENERIC_NEXT = (
    'a[aria-label*="next" i], .next, [class*="next"], '
    'button[aria-label*="next" i], [data-page-next]'
)


def page_cap_for(page_type: PageType) -> int:
    return PAGE_CAPS.get(page_type, DEFAULT_PAGE_CAP)


def _page_number(text: str | None) -> int | None:
    match = _DIGITS_RE.search(text or "")
    return int(match.group(0)) if match else None


class PaginationController:
    def __init__(
        self,
        page: Page,
        adapter: ExtractionAdapter,
        *,
        token: CancellationToken | None = None,
        click_delay_s: float | None = None,
        settle_s: float | None = None,
        wait_timeout_ms: int | None = None,
    ) -> None:
        self.page = page
        self.adapter = adapter
        self.token = token or CancellationToken()
        self.click_delay_s = (
            click_delay_s if click_delay_s is not None else settings.pagination_click_delay_ms / 1000
        )
        self.settle_s = settle_s if settle_s is not None else settings.pagination_settle_ms / 1000
        self.wait_timeout_ms = wait_timeout_ms or settings.pagination_wait_timeout_ms
        self.state = PaginationState(page_cap=page_cap_for(adapter.page_type))

    async def run(self, records: list[ExhibitorRecord]) -> list[ExhibitorRecord]:
        """Append records from every following page to *records* and return it."""
        state = self.state
        log.info(
            "Paginating %s (cap %d pages, %d records on page 1)",
            self.adapter.page_type.value,
            state.page_cap,
            len(records),
        )
        while state.status != PaginationStatus.EXHAUSTED:
            self.token.raise_if_cancelled()
            if state.current_page >= state.page_cap:
                log.info("Reached page cap (%d)", state.page_cap)
                self._exhaust()
                break

            state.status = PaginationStatus.ADVANCING
            try:
                advanced = await self._advance()
            except PlaywrightError as exc:
                log.warning("Pagination click failed: %s", exc)
                advanced = False
            if not advanced:
                log.info("No more pages found after page %d", state.current_page)
                self._exhaust()
                break

            try:
                html = await self.page.content()
            except PlaywrightError as exc:
                log.warning(
                    "Could not read page %d, keeping %d records: %s", state.current_page + 1, len(records), exc
                )
                self._exhaust()
                break
            more = self.adapter.extract(html, self.page.url)
            if not more:
                log.info("Page %d yielded no records, stopping", state.current_page + 1)
                self._exhaust()
                break

            records.extend(more)
            state.current_page += 1
            log.info("Page %d: +%d records (%d total)", state.current_page, len(more), len(records))

        return records

    def _exhaust(self) -> None:
        self.state.has_next = False
        self.state.status = PaginationStatus.EXHAUSTED

    async def _advance(self) -> bool:
        if self.adapter.page_type == PageType.SMALLWORLDLABS:
            return await self._advance_smallworldlabs()
        return await self._advance_generic()

    # ------------------------------------------------------------------
    # SmallWorldLabs
    # ------------------------------------------------------------------
    async def _advance_smallworldlabs(self) -> bool:
        pagination = await self.page.query_selector(SWL_PAGINATION)
        if pagination is None:
            return False

        current = await self._swl_current_page(pagination)
        if current != self.state.current_page:
            log.debug("Pager reports page %d, controller is on %d", current, self.state.current_page)
        target_page = current + 1

        control = await self._swl_next_control(pagination, target_page)
        if control is None:
            return False

        log.info("Navigating to page %d...", target_page)
        # JS click goes through overlays that intercept pointer events
        await control.evaluate("el => el.click()")
        await self.token.sleep(self.click_delay_s)

        try:
            await self.page.wait_for_function(
                _SWL_PAGE_REACHED_JS, arg=target_page, timeout=self.wait_timeout_ms
            )
        except PlaywrightError as exc:
            # Includes TimeoutError
            log.info("Pager did not show page %d (%s), waiting for table...", target_page, type(exc).__name__)
        self.token.raise_if_cancelled()
        try:
            await self.page.wait_for_selector(
                TABLE_ROW_SELECTOR, state="visible", timeout=self.wait_timeout_ms
            )
        except PlaywrightError as exc:
            log.info("Table reload wait failed (%s), continuing anyway...", type(exc).__name__)
        await self.token.sleep(self.settle_s)
        return True

    @staticmethod
    async def _swl_current_page(pagination: ElementHandle) -> int:
        marker = await pagination.query_selector(SWL_CURRENT_PAGE)
        if marker is None:
            marker = await pagination.query_selector(SWL_ACTIVE_FALLBACK)
        if marker is None:
            return 1
        return _page_number(await marker.text_content()) or 1

    @staticmethod
    async def _swl_next_control(pagination: ElementHandle, target_page: int) -> ElementHandle | None:
        for link in await pagination.query_selector_all(SWL_PAGE_LINKS):
            if _page_number(await link.text_content()) == target_page and await is_clickable(link):
                return link

        for selector in (SWL_NEXT_BUTTON, SWL_ARROW_BUTTON):
            button = await pagination.query_selector(selector)
            if await is_clickable(button):
                return button
        return None

    # ------------------------------------------------------------------
    # Everything else
    # ------------------------------------------------------------------
    async def _advance_generic(self) -> bool:
        button = await self.page.query_selector(GENERIC_NEXT)
        if not await is_clickable(button):
            return False

        log.info("Found pagination, clicking next (page %d)...", self.state.current_page + 1)
        await button.click()
        await self.token.sleep(self.click_delay_s)
        try:
            await self.page.wait_for_load_state("networkidle", timeout=self.wait_timeout_ms)
        except PlaywrightError as exc:
            log.debug("Network did not go idle after next click (%s), continuing", type(exc).__name__)
        return True
