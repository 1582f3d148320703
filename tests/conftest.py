"""Shared fixtures for the scraper tests.

No network, no real browser: pages are served by ``tests.fakes.FakePage`` and
HTTP goes through ``httpx.MockTransport``.
"""

import os

# Keep test runs from writing ./output/logs/scraper.log
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from expo_scraper.config import settings


@pytest.fixture(autouse=True)
def no_delays(monkeypatch):
    """Zero out every settle and rate-limit delay."""
    for name in (
        "initial_settle_ms",
        "pagination_click_delay_ms",
        "pagination_settle_ms",
        "website_search_delay_ms",
    ):
        monkeypatch.setattr(settings, name, 0)


@pytest.fixture
def no_search_credentials(monkeypatch):
    monkeypatch.setattr(settings, "google_api_key", None)
    monkeypatch.setattr(settings, "google_search_engine_id", None)
