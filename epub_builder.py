"""epub_builder.py — Lay out ordered chapters as the files of an EPUB package."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from xml.sax.saxutils import escape, quoteattr

from models import Chapter

MIMETYPE = "application/epub+zip"
CONTAINER_PATH = "META-INF/container.xml"
OPF_PATH = "OEBPS/content.opf"
NCX_PATH = "OEBPS/toc.ncx"
CONTENT_DIR = "OEBPS"
LANGUAGE = "en"


@dataclass
class NavPoint:
    play_order: int  # 1-based
    filename: str
    label: str


def chapter_filename(index: int) -> str:
    """0-based chapter index → chapter<N>.xhtml, N 1-based."""
    return f"chapter{index + 1}.xhtml"


def build_nav_points(chapters: list[Chapter]) -> list[NavPoint]:
    """
    The single source of chapter filenames. Manifest, spine and NCX are all
    generated from this list so they cannot drift apart.
    """
    return [
        NavPoint(play_order=i + 1, filename=chapter_filename(i), label=ch.title)
        for i, ch in enumerate(chapters)
    ]


def book_identifier(title: str) -> str:
    return f"urn:uuid:{uuid.uuid5(uuid.NAMESPACE_URL, title)}"


def format_modified(when: datetime | None = None) -> str:
    """UTC timestamp truncated to whole seconds, e.g. 2024-01-31T12:00:00Z."""
    when = when or datetime.now(timezone.utc)
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime("%Y-%m-%dT%H:%M:%SZ")


def build_container_xml() -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" ?>'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
        "<rootfiles>"
        f'<rootfile full-path="{OPF_PATH}" media-type="application/oebps-package+xml"/>'
        "</rootfiles>"
        "</container>"
    )


def build_content_opf(title: str, nav_points: list[NavPoint], modified: str) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8" ?>',
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="book-id">',
        '  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">',
        f'    <dc:identifier id="book-id">{book_identifier(title)}</dc:identifier>',
        f"    <dc:title>{escape(title)}</dc:title>",
        f"    <dc:language>{LANGUAGE}</dc:language>",
        f'    <meta property="dcterms:modified">{modified}</meta>',
        "  </metadata>",
        "  <manifest>",
    ]
    for point in nav_points:
        lines.append(
            f'    <item id="{point.filename}" href="{point.filename}" media-type="application/xhtml+xml"/>'
        )
    lines += [
        '    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>',
        "  </manifest>",
        '  <spine toc="ncx">',
    ]
    for point in nav_points:
        lines.append(f'    <itemref idref="{point.filename}"/>')
    lines += [
        "  </spine>",
        "</package>",
    ]
    return "\n".join(lines) + "\n"


def build_toc_ncx(title: str, nav_points: list[NavPoint]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8" ?>',
        '<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">',
        "  <head>",
        f"    <meta name=\"dtb:uid\" content={quoteattr(book_identifier(title))}/>",
        '    <meta name="dtb:depth" content="1"/>',
        '    <meta name="dtb:totalPageCount" content="0"/>',
        '    <meta name="dtb:maxPageNumber" content="0"/>',
        "  </head>",
        "  <docTitle><text>Table of Contents</text></docTitle>",
        "  <navMap>",
    ]
    for point in nav_points:
        lines += [
            f'    <navPoint id="navPoint-{point.play_order}" playOrder="{point.play_order}">',
            f"      <navLabel><text>{escape(point.label)}</text></navLabel>",
            f'      <content src="{point.filename}"/>',
            "    </navPoint>",
        ]
    lines += [
        "  </navMap>",
        "</ncx>",
    ]
    return "\n".join(lines) + "\n"


def build_chapter_xhtml(chapter: Chapter) -> str:
    title = escape(chapter.title)
    return (
        '<?xml version="1.0" encoding="UTF-8" ?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">\n'
        f"  <head><title>{title}</title></head>\n"
        f"  <body><h1>{title}</h1>{chapter.content}</body>\n"
        "</html>\n"
    )


def assemble_epub(
    title: str,
    chapters: list[Chapter],
    modified: datetime | None = None,
) -> dict[str, str]:
    """
    Build the EPUB file set: archive path → text content, in archive order.
    Pure apart from the default modification timestamp.
    """
    nav_points = build_nav_points(chapters)
    files = {
        "mimetype": MIMETYPE,
        CONTAINER_PATH: build_container_xml(),
        OPF_PATH: build_content_opf(title, nav_points, format_modified(modified)),
        NCX_PATH: build_toc_ncx(title, nav_points),
    }
    for point, chapter in zip(nav_points, chapters):
        files[f"{CONTENT_DIR}/{point.filename}"] = build_chapter_xhtml(chapter)
    return files
