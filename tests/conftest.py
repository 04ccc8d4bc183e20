"""Shared fixtures: canned chapter pages and an in-memory fetcher."""

import pytest

from config import SiteProfile
from fetcher import FetchError

BASE_URL = "https://novels.test/"


def make_page(
    heading: str | None = "Chapter 1",
    content: str | None = "<p>Hello</p>",
    next_href: str | None = None,
    book_name: str | None = "Moontide",
    extra_links: str = "",
) -> str:
    parts = ["<html><head><title>page</title></head><body>"]
    if book_name is not None:
        parts.append(f'<div id="bookname">{book_name}</div>')
    if heading is not None:
        parts.append(f"<h1>{heading}</h1>")
    if content is not None:
        parts.append(f'<div id="htmlContent">{content}</div>')
    parts.append('<div class="nav"><a href="/index.html">Prev</a>')
    parts.append(extra_links)
    if next_href is not None:
        parts.append(f'<a href="{next_href}">Next</a>')
    parts.append("</div></body></html>")
    return "".join(parts)


class StubFetcher:
    """Serves markup from a dict; missing URLs fail like an HTTP 404."""

    def __init__(self, pages: dict[str, str], failures: dict[str, int] | None = None):
        self.pages = pages
        self.failures = failures or {}
        self.calls: list[str] = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failures:
            raise FetchError(url, status_code=self.failures[url], reason="Server Error")
        if url not in self.pages:
            raise FetchError(url, status_code=404, reason="Not Found")
        return self.pages[url]


@pytest.fixture
def profile():
    return SiteProfile(base_url=BASE_URL)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no NOVEL_* settings leaking in."""
    monkeypatch.chdir(tmp_path)
    for key in ("NOVEL_BASE_URL", "NOVEL_MAX_PAGES", "NOVEL_OUTPUT_DIR"):
        # setenv first so teardown also removes values a .env load adds later
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return tmp_path
