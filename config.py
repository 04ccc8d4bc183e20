"""config.py — Site profile and .env-backed settings."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv, set_key

ENV_FILE = Path(".env")

# Origin the source site's relative "next" links are anchored to
DEFAULT_BASE_URL = "https://www.novelhall.com/"
DEFAULT_OUTPUT_DIR = Path("output")


@dataclass(frozen=True)
class SiteProfile:
    """Site-specific extraction heuristics."""
    base_url: str = DEFAULT_BASE_URL
    content_id: str = "htmlContent"
    book_title_id: str = "bookname"
    exclude_class: str = "none"
    default_book_title: str = "book"


def load_profile(base_url: str | None = None) -> SiteProfile:
    """Build a SiteProfile; an explicit base_url beats NOVEL_BASE_URL from .env."""
    load_dotenv(ENV_FILE)
    if base_url is None:
        base_url = os.getenv("NOVEL_BASE_URL", "").strip() or DEFAULT_BASE_URL
    return replace(SiteProfile(), base_url=base_url)


def load_max_pages() -> int | None:
    """Read NOVEL_MAX_PAGES. Returns None (unbounded) if unset or not a positive integer."""
    load_dotenv(ENV_FILE)
    raw = os.getenv("NOVEL_MAX_PAGES", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        print(f"  Warning: ignoring NOVEL_MAX_PAGES={raw!r} (not an integer)")
        return None
    return value if value > 0 else None


def load_output_dir() -> Path:
    load_dotenv(ENV_FILE)
    raw = os.getenv("NOVEL_OUTPUT_DIR", "").strip()
    return Path(raw) if raw else DEFAULT_OUTPUT_DIR


def save_base_url(base_url: str) -> None:
    """Persist NOVEL_BASE_URL to .env for future runs."""
    ENV_FILE.touch(exist_ok=True)
    set_key(str(ENV_FILE), "NOVEL_BASE_URL", base_url)
    print(f"  Saved NOVEL_BASE_URL={base_url} to {ENV_FILE}")
