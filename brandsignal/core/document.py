"""Document model builder.

Parses raw markup into a read-only BeautifulSoup tree. Extractors rely only
on ``select_one``/``select``, attribute reads, ``get_text`` and ``str(tag)``.
"""

from __future__ import annotations

from typing import Any

import structlog
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

logger = structlog.get_logger(__name__)


def build_document(markup: str | None) -> BeautifulSoup:
    """Parse markup best-effort. Never raises; unparseable input yields an empty tree."""
    try:
        return BeautifulSoup(markup or "", "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("markup_rejected_by_parser", error=str(exc))
        return BeautifulSoup("", "html.parser")


def attr_text(tag: Any, name: str) -> str:
    """Read an attribute as a string, joining multi-valued attributes like ``class``."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return str(value)


def first_attr(tag: Any, *names: str) -> str | None:
    """Return the first non-empty attribute value among ``names``."""
    for name in names:
        value = attr_text(tag, name).strip()
        if value:
            return value
    return None


def meta_content(soup: BeautifulSoup, key: str) -> str | None:
    """Content of the first ``<meta>`` whose name or property equals ``key`` (case-insensitive)."""
    for attr in ("name", "property"):
        tag = soup.select_one(f'meta[{attr}="{key}" i]')
        if tag is not None:
            content = attr_text(tag, "content").strip()
            if content:
                return content
    return None
