#!/usr/bin/env python3
"""
webnovel2epub — Crawl a web novel chapter by chapter and package it as an EPUB.

Starting from one chapter URL, each page's heading and content region are
collected and the page's "next" link is followed until no next link remains.
The chapters are then written to <Book Title>.epub.

Quick start:
  1. python webnovel2epub.py "https://www.novelhall.com/some-novel/123.html" --dry-run
  2. python webnovel2epub.py "https://www.novelhall.com/some-novel/123.html"

Retargeting another site with the same page layout:
  python webnovel2epub.py URL --base-url "https://example.org/" --save-base-url
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl a web novel by following its 'next' links and build an EPUB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dry run — crawl and list chapters, no EPUB written:
  python webnovel2epub.py "https://www.novelhall.com/novel/1.html" --dry-run

  # Save to a specific location:
  python webnovel2epub.py URL --output ~/Books/novel.epub

  # Stop after 20 pages:
  python webnovel2epub.py URL --max-pages 20
        """,
    )
    parser.add_argument("start_url", type=str, help="Absolute URL of the first chapter page")
    parser.add_argument(
        "--output", type=Path, default=None, metavar="PATH",
        help="Output file path (default: <output-dir>/<Book Title>.epub)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None, metavar="DIR",
        help="Directory for the EPUB (default: NOVEL_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--base-url", type=str, default=None, metavar="URL",
        help="Origin that relative next-links are anchored to (default: NOVEL_BASE_URL or novelhall)",
    )
    parser.add_argument(
        "--save-base-url", action="store_true", default=False,
        help="Persist --base-url to .env for future runs",
    )
    parser.add_argument(
        "--max-pages", type=positive_int, default=None, metavar="N",
        help="Stop after N pages (default: NOVEL_MAX_PAGES or unlimited)",
    )
    parser.add_argument(
        "--no-cycle-check", action="store_true", default=False,
        help="Keep following next-links even when they point back to a visited page",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, metavar="SECONDS",
        help="Per-request timeout (default: none)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Crawl and list chapters without writing the EPUB",
    )
    return parser.parse_args(argv)


def print_chapter_list(book_title: str, chapters) -> None:
    print(f"Title: {book_title}")
    print(f"\nFound {len(chapters)} chapters:")
    print("-" * 70)
    for i, ch in enumerate(chapters, start=1):
        print(f"  {i:3d}. {ch.title:<50} {len(ch.content):>8} chars")
    print("-" * 70)
    print()


def main(argv: list[str] | None = None, fetcher=None) -> int:
    args = parse_args(argv)
    load_dotenv(Path(".env"))

    # Lazy imports keep --help fast
    from tqdm import tqdm

    from archive_writer import AssemblyError, build_book
    from config import load_max_pages, load_output_dir, load_profile, save_base_url
    from crawler import crawl
    from fetcher import PageFetcher

    profile = load_profile(args.base_url)
    if args.save_base_url:
        if args.base_url:
            save_base_url(args.base_url)
        else:
            print("  Warning: --save-base-url given without --base-url; nothing saved.")

    max_pages = args.max_pages if args.max_pages is not None else load_max_pages()
    output_dir = args.output_dir or load_output_dir()
    fetch = fetcher or PageFetcher(timeout=args.timeout).fetch

    print(f"Start URL: {args.start_url}")
    print(f"Base URL:  {profile.base_url}")
    if max_pages:
        print(f"Page limit: {max_pages}")
    print()

    # Phase 1: crawl
    print("=== Phase 1: Crawling ===\n")
    with tqdm(desc="  Pages", unit="page") as pbar:
        def on_progress(line: str) -> None:
            tqdm.write(line)
            if line.startswith("Page "):
                pbar.update(1)

        result = crawl(
            args.start_url,
            fetcher=fetch,
            profile=profile,
            on_progress=on_progress,
            max_pages=max_pages,
            detect_cycles=not args.no_cycle_check,
        )

    if not result.ok:
        print(f"\nCrawl failed at {result.error.url}. No EPUB written.")
        return 1

    print("All pages fetched successfully.\n")
    print_chapter_list(result.book_title, result.chapters)

    if args.dry_run:
        print("Dry run complete. No EPUB written.")
        return 0

    # Phase 2: assemble
    print("=== Phase 2: Building EPUB ===\n")
    print("Creating the EPUB file...")
    try:
        output_file = build_book(
            result.book_title, result.chapters, output_dir=output_dir, output=args.output,
        )
    except AssemblyError as e:
        print(f"Error creating EPUB: {e}")
        return 1

    print(f"Done! EPUB saved to: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
