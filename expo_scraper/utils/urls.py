"""URL helpers shared by the extractors, the record model, and the resolver."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

# Exhibitor directory platforms: links to these are listing pages, never a company site
PLATFORM_DOMAINS: tuple[str, ...] = (
    "mapyourshow.com",
    "a2zinc.net",
    "smallworldlabs.com",
    "affiliatesummit.com",
    "goeshow.com",
    "manife.st",
    "eventmap",
)

SOCIAL_DOMAINS: tuple[str, ...] = (
    "facebook.com",
    "twitter.com",
    "linkedin.com",
    "instagram.com",
    "youtube.com",
    "pinterest.com",
    "tiktok.com",
)

# Link text that suggests the anchor points at the company's own site
WEBSITE_INDICATORS: tuple[str, ...] = (
    "website",
    "site",
    "visit",
    "www.",
    ".com",
    ".net",
    ".org",
)

CONVENTIONAL_TLDS: tuple[str, ...] = (".com", ".net", ".org")


def hostname(url: str) -> str:
    """Lower-cased hostname of *url*, or an empty string if it has none."""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def is_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_platform_host(host: str) -> bool:
    return any(domain in host for domain in PLATFORM_DOMAINS)


def is_social_host(host: str) -> bool:
    return any(domain in host for domain in SOCIAL_DOMAINS)


def is_blocked_website(url: str) -> bool:
    """True if *url* points at a directory platform or a social network."""
    host = hostname(url)
    return is_platform_host(host) or is_social_host(host)


def absolutize(href: str | None, base_url: str = "") -> str | None:
    """Turn an href into an absolute URL using *base_url*.

    Returns ``None`` for empty, fragment-only, and ``javascript:`` hrefs.
    """
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith("#") or href.lower().startswith("javascript:"):
        return None
    if href.startswith("//"):
        return "https:" + href
    if is_http_url(href):
        return href
    if base_url:
        return urljoin(base_url, href)
    return href


def resolve_website(
    href: str | None,
    base_url: str = "",
    link_text: str = "",
    *,
    require_relevance: bool = True,
) -> str:
    """Promote a candidate href to a company website, or return ``""``.

    The href must resolve to an absolute http(s) URL outside the platform and
    social denylists.  With *require_relevance*, the link text must also carry
    a website indicator or the hostname a conventional TLD.
    """
    url = absolutize(href, base_url)
    if not url or not is_http_url(url):
        return ""
    host = strip_www(hostname(url))
    if not host or is_platform_host(host) or is_social_host(host):
        return ""
    if require_relevance:
        text = (link_text or "").lower()
        looks_like_site = any(token in text for token in WEBSITE_INDICATORS)
        if not looks_like_site and not any(tld in host for tld in CONVENTIONAL_TLDS):
            return ""
    return url
