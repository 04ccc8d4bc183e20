"""models.py — Shared data types for webnovel2epub."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Chapter:
    title: str       # Heading text, or "Chapter N" when the page has none
    content: str     # Serialized markup fragment, embedded verbatim


@dataclass(frozen=True)
class Anchor:
    text: str
    rel: str
    href: str | None
    classes: tuple[str, ...] = ()


class CrawlStatus(Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class CrawlState:
    current_url: str | None
    page_number: int = 1
    chapters: list[Chapter] = field(default_factory=list)
    book_title: str | None = None
    visited: set[str] = field(default_factory=set)
    status: CrawlStatus = CrawlStatus.RUNNING


@dataclass
class CrawlResult:
    """Terminal outcome of a crawl: completed with chapters, or failed with an error."""
    status: CrawlStatus
    book_title: str | None
    chapters: list[Chapter]
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is CrawlStatus.COMPLETED

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error
