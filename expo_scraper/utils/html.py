"""HTML helpers for the template extractors."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def extract_text(element_html: str) -> str:
    """Extract visible text from an HTML fragment."""
    if not element_html.strip():
        return ""
    soup = BeautifulSoup(element_html, "lxml")
    return soup.get_text()


def normalize_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def split_on_breaks(tag: Tag) -> list[str]:
    """Split an element's inner HTML on ``<br>`` and return each piece's text, trimmed."""
    inner = tag.decode_contents()
    return [extract_text(piece).strip() for piece in _BR_RE.split(inner)]


def element_text(tag: Tag) -> str:
    """Whitespace-collapsed text content of *tag*."""
    return normalize_whitespace(tag.get_text())


def first_text(tag: Tag, selector: str) -> str:
    """Text of the first descendant matching *selector*, or ``""``."""
    found = tag.select_one(selector)
    return element_text(found) if found is not None else ""


def class_list(tag: Tag) -> list[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)
