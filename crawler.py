"""crawler.py — Sequential fetch → parse → next-link crawl over a chapter chain."""

from typing import Callable

from config import SiteProfile
from fetcher import FetchError, PageFetcher
from models import Chapter, CrawlResult, CrawlState, CrawlStatus
from parsers import extract_book_title, extract_page, load_document, resolve_next

ProgressSink = Callable[[str], None]


def _step(state: CrawlState, fetch: Callable[[str], str], profile: SiteProfile, emit: ProgressSink) -> None:
    """Process the page at state.current_url and advance the state by one page."""
    url = state.current_url
    emit(f"Fetching page {state.page_number}: {url}")
    markup = fetch(url)
    state.visited.add(url)

    doc = load_document(markup)
    if state.book_title is None:
        state.book_title = extract_book_title(doc, profile)

    page = extract_page(doc, state.page_number, profile)
    state.chapters.append(Chapter(title=page.title, content=page.content))
    emit(f"Page {state.page_number} fetched successfully.")

    state.current_url = resolve_next(
        page.anchors, url, base_url=profile.base_url, exclude_class=profile.exclude_class,
    )
    state.page_number += 1


def crawl(
    start_url: str,
    fetcher: Callable[[str], str] | None = None,
    profile: SiteProfile | None = None,
    on_progress: ProgressSink = print,
    max_pages: int | None = None,
    detect_cycles: bool = True,
) -> CrawlResult:
    """
    Walk next-links from start_url until none remains.

    Returns a COMPLETED result with every chapter in discovery order, or a
    FAILED result carrying the FetchError and no chapters. A next-link back
    to a visited URL, or reaching max_pages, also ends the crawl as COMPLETED
    unless detect_cycles is False / max_pages is None.
    """
    fetch = fetcher if fetcher is not None else PageFetcher().fetch
    profile = profile or SiteProfile()
    state = CrawlState(current_url=start_url)

    while state.status is CrawlStatus.RUNNING:
        try:
            _step(state, fetch, profile, on_progress)
        except FetchError as e:
            on_progress(f"Error: {e}")
            state.status = CrawlStatus.FAILED
            return CrawlResult(status=state.status, book_title=state.book_title, chapters=[], error=e)

        if state.current_url is None:
            state.status = CrawlStatus.COMPLETED
        elif detect_cycles and state.current_url in state.visited:
            on_progress(f"Stopping: {state.current_url} was already visited.")
            state.current_url = None
            state.status = CrawlStatus.COMPLETED
        elif max_pages is not None and len(state.chapters) >= max_pages:
            on_progress(f"Stopping: reached the page limit ({max_pages}).")
            state.current_url = None
            state.status = CrawlStatus.COMPLETED

    return CrawlResult(
        status=state.status,
        book_title=state.book_title,
        chapters=list(state.chapters),
    )
