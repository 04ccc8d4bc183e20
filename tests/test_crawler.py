from conftest import StubFetcher, make_page

from crawler import crawl
from fetcher import FetchError
from models import CrawlStatus

START = "https://novels.test/book/1.html"
PAGE_2 = "https://novels.test/book/2.html"
PAGE_3 = "https://novels.test/book/3.html"


def test_single_page_without_next_link_completes(profile):
    fetcher = StubFetcher({START: make_page()})
    lines = []

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lines.append)

    assert result.status is CrawlStatus.COMPLETED
    assert result.ok
    assert result.book_title == "Moontide"
    assert [(c.title, c.content) for c in result.chapters] == [("Chapter 1", "<p>Hello</p>")]
    assert lines == [
        f"Fetching page 1: {START}",
        "Page 1 fetched successfully.",
    ]


def test_three_page_chain_keeps_fetch_order_and_fallback_title(profile):
    fetcher = StubFetcher({
        START: make_page(heading="The Beginning", next_href="/book/2.html"),
        PAGE_2: make_page(heading=None, content="<p>two</p>", next_href="/book/3.html"),
        PAGE_3: make_page(heading="The End", content="<p>three</p>", book_name="Ignored"),
    })

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lambda line: None)

    assert result.status is CrawlStatus.COMPLETED
    assert fetcher.calls == [START, PAGE_2, PAGE_3]
    assert [c.title for c in result.chapters] == ["The Beginning", "Chapter 2", "The End"]
    assert result.chapters[1].content == "<p>two</p>"
    assert result.book_title == "Moontide"


def test_missing_book_name_uses_default(profile):
    fetcher = StubFetcher({START: make_page(book_name=None)})
    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lambda line: None)
    assert result.book_title == "book"


def test_404_on_start_fails_with_no_chapters(profile):
    fetcher = StubFetcher({})
    lines = []

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lines.append)

    assert result.status is CrawlStatus.FAILED
    assert not result.ok
    assert result.chapters == []
    assert isinstance(result.error, FetchError)
    assert result.error.status_code == 404
    assert lines[-1] == "Error: Failed to fetch: 404 Not Found"


def test_failure_mid_crawl_stops_immediately(profile):
    fetcher = StubFetcher(
        {START: make_page(next_href="/book/2.html"), PAGE_3: make_page()},
        failures={PAGE_2: 500},
    )

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lambda line: None)

    assert result.status is CrawlStatus.FAILED
    assert result.chapters == []
    assert fetcher.calls == [START, PAGE_2]


def test_raise_for_status_reraises_fetch_error(profile):
    result = crawl(START, fetcher=StubFetcher({}), profile=profile, on_progress=lambda line: None)
    try:
        result.raise_for_status()
    except FetchError as e:
        assert e is result.error
    else:
        raise AssertionError("expected FetchError")


def test_cycle_back_to_visited_page_stops(profile):
    fetcher = StubFetcher({
        START: make_page(next_href="/book/2.html"),
        PAGE_2: make_page(heading="Chapter 2", next_href="/book/1.html"),
    })
    lines = []

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lines.append)

    assert result.status is CrawlStatus.COMPLETED
    assert len(result.chapters) == 2
    assert fetcher.calls == [START, PAGE_2]
    assert lines[-1] == f"Stopping: {START} was already visited."


def test_cycle_check_can_be_disabled_and_page_limit_still_applies(profile):
    fetcher = StubFetcher({
        START: make_page(next_href="/book/2.html"),
        PAGE_2: make_page(heading="Chapter 2", next_href="/book/1.html"),
    })

    result = crawl(
        START, fetcher=fetcher, profile=profile, on_progress=lambda line: None,
        detect_cycles=False, max_pages=5,
    )

    assert len(result.chapters) == 5
    assert fetcher.calls == [START, PAGE_2, START, PAGE_2, START]


def test_page_limit_stops_a_longer_chain(profile):
    fetcher = StubFetcher({
        START: make_page(next_href="/book/2.html"),
        PAGE_2: make_page(next_href="/book/3.html"),
        PAGE_3: make_page(),
    })
    lines = []

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lines.append, max_pages=2)

    assert result.status is CrawlStatus.COMPLETED
    assert len(result.chapters) == 2
    assert lines[-1] == "Stopping: reached the page limit (2)."


def test_unparseable_next_href_ends_the_crawl(profile):
    fetcher = StubFetcher({START: make_page(next_href="http://[bad/2.html")})

    result = crawl(START, fetcher=fetcher, profile=profile, on_progress=lambda line: None)

    assert result.status is CrawlStatus.COMPLETED
    assert len(result.chapters) == 1
    assert fetcher.calls == [START]
