"""parsers/links.py — Find the "next chapter" link on a page."""

from urllib.parse import urljoin, urlsplit

from config import DEFAULT_BASE_URL
from models import Anchor

NEXT_MARKER = "next"


def _is_next(anchor: Anchor) -> bool:
    return anchor.text.strip().lower() == NEXT_MARKER or anchor.rel.strip() == NEXT_MARKER


def absolutize(href: str, current_url: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """
    Anchor a relative href to the site origin, then resolve it against the
    current page. Absolute hrefs are only resolved.
    """
    if base_url and not urlsplit(href).scheme and not href.startswith("//"):
        href = base_url.rstrip("/") + "/" + href.lstrip("/")
    return urljoin(current_url, href)


def resolve_next(
    anchors: list[Anchor],
    current_url: str,
    base_url: str = DEFAULT_BASE_URL,
    exclude_class: str = "none",
) -> str | None:
    """
    Return the absolute URL of the first anchor, in document order, whose text
    is "next" (case-insensitive) or whose rel is "next". None ends the crawl.
    Hrefs that cannot be parsed as URLs never match.
    """
    for anchor in anchors:
        if exclude_class and exclude_class in anchor.classes:
            continue
        if not anchor.href:
            continue
        if _is_next(anchor):
            try:
                return absolutize(anchor.href.strip(), current_url, base_url)
            except ValueError:
                continue
    return None
