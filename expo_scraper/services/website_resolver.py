"""WebsiteResolver — Best-guess official website for a company name.

Two stages, cheapest first:

1. **Pattern probing** — guess ``<name>.com`` style domains and keep the first
   one that answers a HEAD request with 2xx/3xx.
2. **Scored search** — one Google Custom Search query, results ranked by how
   well their domain, title, and snippet match the company name.

Search failures (quota, auth, network) are logged and reported as "not
found"; they never abort the caller.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from expo_scraper.config import settings
from expo_scraper.errors import SearchServiceError
from expo_scraper.models.schemas import ResolutionCandidate
from expo_scraper.utils.http import build_client
from expo_scraper.utils.logging import get_logger
from expo_scraper.utils.urls import hostname, strip_www

log = get_logger(__name__)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

# Results on these domains are never the company's own site
_SEARCH_DENYLIST: tuple[str, ...] = (
    "facebook.com",
    "twitter.com",
    "linkedin.com",
    "instagram.com",
    "youtube.com",
    "pinterest.com",
    "tiktok.com",
    "reddit.com",
    "wikipedia.org",
    "crunchbase.com",
    "bloomberg.com",
    "google.com",
)
_OFFICIAL_MARKERS = ("official", "homepage")
_COMMON_TLDS = (".com", ".net", ".org")
_RESULTS_PER_QUERY = 5
MIN_ACCEPTED_SCORE = 5


def generate_url_patterns(company_name: str) -> list[str]:
    """Candidate https URLs for *company_name*, in probe order.

    "Acme Widget Co" -> acmewidgetco.com, www.acmewidgetco.com,
    acme-widget-co.com, www.acme-widget-co.com, acme.com, www.acme.com
    """
    clean = _NON_ALNUM_RE.sub("", company_name.lower()).strip()
    if len(clean) < 2:
        return []

    words = clean.split()
    roots: list[str] = []
    for root in ("".join(words), "-".join(words), words[0]):
        if len(root) >= 2 and root not in roots:
            roots.append(root)

    urls: list[str] = []
    for root in roots:
        urls.append(f"https://{root}.com")
        urls.append(f"https://www.{root}.com")
    return urls


def name_tokens(company_name: str) -> list[str]:
    return [word for word in company_name.lower().split() if len(word) > 2]


def _is_denied(domain: str) -> bool:
    return any(domain == denied or domain.endswith("." + denied) for denied in _SEARCH_DENYLIST)


def score_result(tokens: list[str], url: str, title: str = "", snippet: str = "") -> ResolutionCandidate | None:
    """Score one search hit against the company's name tokens.

    Returns ``None`` for unparsable URLs and denylisted domains.
    """
    domain = strip_www(hostname(url))
    if not domain or _is_denied(domain):
        return None
    title = title.lower()
    snippet = snippet.lower()

    score = 0
    for token in tokens:
        if token in domain:
            score += 10
        if token in title:
            score += 5
        if token in snippet:
            score += 2

    if domain.endswith(_COMMON_TLDS):
        score += 3
    # Non-www subdomains are usually blogs, shops, wikis
    if len(domain.split(".")) > 2:
        score -= 2
    # Prefer the root of a site over deep pages
    if len(url.split("/")) > 4:
        score -= 1
    if any(marker in title or marker in snippet for marker in _OFFICIAL_MARKERS):
        score += 5

    return ResolutionCandidate(url=url, score=score, domain=domain)


def pick_best(company_name: str, items: list[dict[str, Any]]) -> str | None:
    """Choose a URL from raw search items.

    The top candidate wins if it scores at least ``MIN_ACCEPTED_SCORE``;
    otherwise the first item that survived the denylist is used.
    """
    tokens = name_tokens(company_name)
    candidates: list[ResolutionCandidate] = []
    for item in items:
        url = item.get("link") or ""
        candidate = score_result(tokens, url, item.get("title") or "", item.get("snippet") or "")
        if candidate is not None:
            log.debug("  candidate score=%d %s", candidate.score, candidate.url)
            candidates.append(candidate)

    if not candidates:
        return None
    best = max(candidates, key=lambda c: c.score)
    if best.score >= MIN_ACCEPTED_SCORE:
        return best.url
    # Denylisted hits are social/reference pages, never a valid ExhibitorRecord.website
    return candidates[0].url


class WebsiteResolver:
    """Resolve company names to websites.  Use as an async context manager."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        api_key: str | None = None,
        search_engine_id: str | None = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.search_engine_id = (
            search_engine_id if search_engine_id is not None else settings.google_search_engine_id
        )

    async def __aenter__(self) -> WebsiteResolver:
        if self._client is None:
            self._client = build_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_client()
        return self._client

    @property
    def search_configured(self) -> bool:
        return bool(self.api_key and self.search_engine_id)

    async def resolve(self, company_name: str) -> str | None:
        name = (company_name or "").strip()
        if len(name) < 2:
            return None

        url = await self.probe_patterns(name)
        if url:
            log.info("  Found via pattern matching: %s", url)
            return url

        url = await self.search(name)
        if url:
            log.info("  Found via search: %s", url)
        return url

    # ------------------------------------------------------------------
    # Stage A: pattern probing
    # ------------------------------------------------------------------
    async def probe_patterns(self, company_name: str) -> str | None:
        for url in generate_url_patterns(company_name):
            if await self.url_exists(url):
                return url
        return None

    async def url_exists(self, url: str) -> bool:
        try:
            resp = await self.client.head(url, timeout=settings.probe_timeout_s)
        except httpx.HTTPError as exc:
            log.debug("Probe %s failed: %s", url, type(exc).__name__)
            return False
        return 200 <= resp.status_code < 400

    # ------------------------------------------------------------------
    # Stage B: scored search
    # ------------------------------------------------------------------
    async def search(self, company_name: str) -> str | None:
        if not self.search_configured:
            log.warning("Search API credentials not configured. Skipping search.")
            return None
        try:
            items = await self._query(f"{company_name} official website")
        except SearchServiceError as exc:
            log.warning("%s", exc)
            return None
        if not items:
            return None
        return pick_best(company_name, items)

    async def _query(self, query: str) -> list[dict[str, Any]]:
        params = {
            "key": self.api_key,
            "cx": self.search_engine_id,
            "q": query,
            "num": _RESULTS_PER_QUERY,
        }
        try:
            resp = await self.client.get(
                settings.google_search_url, params=params, timeout=settings.search_timeout_s
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 429:
                message = "Search API rate limit exceeded. Skipping search."
            elif status == 403:
                message = "Search API access forbidden. Check API key and search engine ID."
            else:
                message = f"Search API error: {status} {exc.response.reason_phrase}"
            raise SearchServiceError(message, status_code=status) from exc
        except httpx.RequestError as exc:
            raise SearchServiceError(f"Search API request failed: {type(exc).__name__}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchServiceError("Search API returned invalid JSON") from exc
        items = data.get("items") if isinstance(data, dict) else None
        return [item for item in items or [] if isinstance(item, dict)]
