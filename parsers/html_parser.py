"""parsers/html_parser.py — Extract chapter title, content and links from a page."""

from bs4 import BeautifulSoup

from config import SiteProfile
from models import Anchor
from parsers.base import ParsedPage, clean_text

UNSAFE_TAGS = ["script", "style", "noscript", "template"]


def load_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, features="lxml")


def _element_text(element) -> str:
    return clean_text(element.get_text(" ")) if element is not None else ""


def extract_title(doc: BeautifulSoup, page_number: int) -> str:
    """First <h1> text, or "Chapter N" if the page has no usable heading."""
    return _element_text(doc.find("h1")) or f"Chapter {page_number}"


def extract_content(doc: BeautifulSoup, content_id: str) -> str:
    """
    Re-serialize the children of the content region as well-formed markup.
    A page without the region yields an empty fragment.
    """
    region = doc.find(id=content_id)
    if region is None:
        return ""
    # bs4 writes script/style text unescaped, which is not valid XHTML
    for tag in region.find_all(UNSAFE_TAGS):
        tag.decompose()
    return region.decode_contents(formatter="minimal").strip()


def extract_anchors(doc: BeautifulSoup) -> list[Anchor]:
    anchors = []
    for a in doc.find_all("a"):
        rel = a.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        anchors.append(Anchor(
            text=_element_text(a),
            rel=" ".join(rel),
            href=a.get("href"),
            classes=tuple(a.get("class") or ()),
        ))
    return anchors


def extract_book_title(doc: BeautifulSoup, profile: SiteProfile) -> str:
    return _element_text(doc.find(id=profile.book_title_id)) or profile.default_book_title


def extract_page(doc: BeautifulSoup, page_number: int, profile: SiteProfile) -> ParsedPage:
    return ParsedPage(
        title=extract_title(doc, page_number),
        content=extract_content(doc, profile.content_id),
        anchors=extract_anchors(doc),
    )


def parse_page(markup: str, page_number: int, profile: SiteProfile | None = None) -> ParsedPage:
    """Main entry point for a single page of markup."""
    return extract_page(load_document(markup), page_number, profile or SiteProfile())
