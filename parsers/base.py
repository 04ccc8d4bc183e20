"""parsers/base.py — Shared parser utilities and types."""

import re
from dataclasses import dataclass, field

from models import Anchor


@dataclass
class ParsedPage:
    """Everything the crawler needs from one chapter page."""
    title: str
    content: str
    anchors: list[Anchor] = field(default_factory=list)


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and trim, approximating rendered text."""
    return re.sub(r"\s+", " ", text).strip()
