"""Test doubles: a BeautifulSoup-backed stand-in for a Playwright page, and
HTML builders for the templates the tests drive through it."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable, Sequence

from bs4 import BeautifulSoup, Tag


class FakeElement:
    """The subset of ``ElementHandle`` the pipeline uses."""

    def __init__(self, page: FakePage, tag: Tag) -> None:
        self.page = page
        self.tag = tag

    async def query_selector(self, selector: str) -> FakeElement | None:
        found = self.tag.select_one(selector)
        return FakeElement(self.page, found) if found is not None else None

    async def query_selector_all(self, selector: str) -> list[FakeElement]:
        return [FakeElement(self.page, tag) for tag in self.tag.select(selector)]

    async def text_content(self) -> str:
        return self.tag.get_text()

    async def get_attribute(self, name: str) -> str | None:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    async def is_visible(self) -> bool:
        style = (self.tag.get("style") or "").replace(" ", "")
        return "display:none" not in style and not self.tag.has_attr("hidden")

    async def click(self) -> None:
        self.page.clicks += 1
        self.page.index += 1

    async def evaluate(self, expression: str, arg=None):
        if "click()" in expression:
            await self.click()


class FakePage:
    """Serves ``pages[i]`` (or ``pages(i)``) and moves to the next one on every click."""

    def __init__(
        self,
        pages: Sequence[str] | Callable[[int], str],
        url: str = "https://example.com/exhibitors",
    ) -> None:
        if callable(pages):
            self._render = pages
        else:
            self._render = lambda i: pages[min(i, len(pages) - 1)]
        self.url = url
        self.index = 0
        self.clicks = 0
        self.goto_calls: list[tuple[str, str]] = []
        self.goto_error: Exception | None = None
        # goto failures for one wait_until mode only, e.g. {"networkidle": TimeoutError(...)}
        self.goto_errors: dict[str, Exception] = {}
        # wait_for_* method name -> error raised on every call
        self.wait_errors: dict[str, Exception] = {}
        self.wait_calls: list[str] = []
        # content() raises once the page index reaches content_error_from
        self.content_error: Exception | None = None
        self.content_error_from = 1

    def _soup(self) -> BeautifulSoup:
        return BeautifulSoup(self._render(self.index), "lxml")

    async def goto(self, url: str, wait_until: str = "load", timeout: int | None = None) -> None:
        self.goto_calls.append((url, wait_until))
        if self.goto_error is not None:
            raise self.goto_error
        if wait_until in self.goto_errors:
            raise self.goto_errors[wait_until]
        self.url = url

    async def content(self) -> str:
        if self.content_error is not None and self.index >= self.content_error_from:
            raise self.content_error
        return self._render(self.index)

    async def query_selector(self, selector: str) -> FakeElement | None:
        found = self._soup().select_one(selector)
        return FakeElement(self, found) if found is not None else None

    async def query_selector_all(self, selector: str) -> list[FakeElement]:
        return [FakeElement(self, tag) for tag in self._soup().select(selector)]

    def _wait(self, method: str) -> None:
        self.wait_calls.append(method)
        if method in self.wait_errors:
            raise self.wait_errors[method]

    async def wait_for_selector(self, selector: str, **kwargs) -> None:
        self._wait("wait_for_selector")

    async def wait_for_function(self, expression: str, **kwargs) -> None:
        self._wait("wait_for_function")

    async def wait_for_load_state(self, state: str = "load", **kwargs) -> None:
        self._wait("wait_for_load_state")


def page_factory(page: FakePage):
    """An ``open_page`` replacement that always hands out *page*."""

    @asynccontextmanager
    async def factory():
        yield page

    return factory


# ---- HTML builders ----
def swl_page(rows: list[tuple[str, str, str]], current: int, last: int, extra_cells: dict[str, str] | None = None) -> str:
    """A SmallWorldLabs directory page with a numbered pager."""
    extra_cells = extra_cells or {}
    body = "".join(
        f'<tr><td>{num}</td><td><a class="generic-option-link" href="/co/{num}">{name}</a></td>'
        f'<td><a href="/booth/{num}">{booth}</a></td>{extra_cells.get(name, "")}</tr>'
        for num, name, booth in rows
    )
    pager = f'<span class="pager-num">{current}</span>'
    if current < last:
        pager += f'<a class="pager-num" href="#">{current + 1}</a>'
        pager += '<a class="pager-right-next pager-item" aria-label="Next Page" href="#">&rsaquo;</a>'
    return (
        '<html><body><table class="table"><tbody>'
        f"{body}"
        "</tbody></table>"
        f'<div class="pagination paginator-pagination">{pager}</div>'
        "</body></html>"
    )


def generic_page(names: list[str], has_next: bool) -> str:
    items = "".join(f'<li><a href="/company/{i}">{name}</a></li>' for i, name in enumerate(names))
    next_link = '<a class="next" href="#">Next</a>' if has_next else ""
    return f"<html><body><ul>{items}</ul>{next_link}</body></html>"
