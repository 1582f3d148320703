"""Shared async HTTP client factory with sensible defaults."""

from __future__ import annotations

import httpx

from expo_scraper.config import settings

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": _ACCEPT,
        "Accept-Language": "en-US,en;q=0.9",
    }


def build_client(
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Create the client used for website probes and search calls.

    Redirects are followed up to ``PROBE_MAX_REDIRECTS``; *transport* is for
    injecting a mock in tests.
    """
    return httpx.AsyncClient(
        headers=default_headers(),
        timeout=timeout if timeout is not None else settings.probe_timeout_s,
        follow_redirects=True,
        max_redirects=settings.probe_max_redirects,
        transport=transport,
    )
