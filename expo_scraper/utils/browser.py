"""Playwright helpers: session-scoped pages, navigation, and bounded waits."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import ElementHandle, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from expo_scraper.config import settings
from expo_scraper.errors import NavigationError, SessionFatalError
from expo_scraper.utils.cancellation import CancellationToken
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


@asynccontextmanager
async def open_page() -> AsyncIterator[Page]:
    """Yield a fresh Chromium page owned by the caller's session.

    Every call starts (or connects to) its own browser, so concurrent sessions
    never share a page.  Supports a remote browser via
    ``PLAYWRIGHT_WS_ENDPOINT`` (e.g. Browserless).
    """
    pw = await async_playwright().start()
    try:
        try:
            if settings.playwright_ws_endpoint:
                log.info("Connecting to remote browser: %s", settings.playwright_ws_endpoint)
                browser = await pw.chromium.connect(settings.playwright_ws_endpoint)
            else:
                log.info("Launching local Chromium (headless=%s)", settings.playwright_headless)
                browser = await pw.chromium.launch(
                    headless=settings.playwright_headless, args=_LAUNCH_ARGS
                )
            page = await browser.new_page(user_agent=settings.user_agent)
        except PlaywrightError as exc:
            raise SessionFatalError(f"Failed to launch browser: {exc}") from exc
        try:
            yield page
        finally:
            await page.close()
            await browser.close()
    finally:
        await pw.stop()


async def navigate(page: Page, url: str, token: CancellationToken | None = None) -> None:
    """Load *url*, waiting for network idle and falling back once to DOMContentLoaded."""
    if token:
        token.raise_if_cancelled()
    log.info("Navigating to: %s", url)
    try:
        await page.goto(url, wait_until="networkidle", timeout=settings.navigation_timeout_ms)
        return
    except PlaywrightError as exc:
        log.info("Network idle wait failed (%s), retrying with domcontentloaded", type(exc).__name__)

    if token:
        token.raise_if_cancelled()
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=settings.navigation_timeout_ms)
    except PlaywrightError as exc:
        raise NavigationError(url, str(exc)) from exc


async def wait_for_ready(page: Page, selector: str | None, *, timeout_ms: int | None = None) -> bool:
    """Wait for *selector* to become visible; returns False on timeout or any wait failure."""
    if not selector:
        return True
    try:
        await page.wait_for_selector(
            selector, state="visible", timeout=timeout_ms or settings.ready_timeout_ms
        )
        return True
    except PlaywrightTimeoutError:
        log.info("Content not found for %r, continuing anyway", selector)
        return False
    except PlaywrightError as exc:
        log.warning("Waiting for %r failed (%s), continuing anyway", selector, exc)
        return False


async def is_clickable(element: ElementHandle | None) -> bool:
    """Visible and not disabled by attribute, class, or ARIA state."""
    if element is None or not await element.is_visible():
        return False
    if await element.get_attribute("disabled") is not None:
        return False
    if (await element.get_attribute("aria-disabled") or "").lower() == "true":
        return False
    classes = (await element.get_attribute("class") or "").split()
    return "disabled" not in classes
