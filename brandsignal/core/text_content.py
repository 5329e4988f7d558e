"""Heading and body-text extraction."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from brandsignal.core.ordered_set import OrderedSet

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

MAX_HEADINGS = 10
MAX_BODY_CHARS = 2000

# Exclusive bounds on trimmed heading length.
_MIN_HEADING_LEN = 2
_MAX_HEADING_LEN = 200

_WHITESPACE_RUN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text).strip()


def extract_headings(soup: BeautifulSoup, limit: int = MAX_HEADINGS) -> list[str]:
    """h1-h3 text in document order, length-filtered and deduplicated."""
    headings = OrderedSet()
    for heading in soup.select("h1, h2, h3"):
        text = heading.get_text().strip()
        if _MIN_HEADING_LEN < len(text) < _MAX_HEADING_LEN:
            headings.add(text)
            if len(headings) >= limit:
                break
    return headings.first(limit)


def extract_body_excerpt(soup: BeautifulSoup, limit: int = MAX_BODY_CHARS) -> str:
    """Whitespace-collapsed visible text of <body>, truncated to ``limit`` chars.

    Strings are concatenated without a separator, as in DOM ``textContent``.

    Script, stylesheet and template strings are not part of ``get_text`` output
    for the html.parser builder, nor are comments.
    """
    root = soup.body or soup
    text = collapse_whitespace(root.get_text())
    return text[:limit].rstrip()
