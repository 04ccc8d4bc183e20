"""parsers/ — HTML page parsing and next-link resolution."""

from parsers.base import ParsedPage
from parsers.html_parser import extract_book_title, extract_page, load_document, parse_page
from parsers.links import absolutize, resolve_next

__all__ = [
    "ParsedPage",
    "absolutize",
    "extract_book_title",
    "extract_page",
    "load_document",
    "parse_page",
    "resolve_next",
]
