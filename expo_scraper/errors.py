"""Exceptions raised by the extraction pipeline.

Only ``SessionFatalError`` (and its subclasses) and ``SessionCancelled`` end a
session.  Everything local to one element, page, or company is handled where
it happens and never reaches the caller.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for all pipeline errors."""


class SessionFatalError(ScraperError):
    """The session cannot continue (bad input URL, browser unavailable, ...)."""


class NavigationError(SessionFatalError):
    """Initial navigation failed, including the relaxed-wait retry."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load {url}: {reason}")
        self.url = url
        self.reason = reason


class SessionCancelled(ScraperError):
    """The session's cancellation token fired."""

    def __init__(self, message: str = "Session cancelled") -> None:
        super().__init__(message)


class SearchServiceError(ScraperError):
    """The external search API refused or failed a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
