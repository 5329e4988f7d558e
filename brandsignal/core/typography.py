"""Font-family extraction from style blocks and hosted font links."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlparse

from brandsignal.core.document import attr_text
from brandsignal.core.ordered_set import OrderedSet

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

MAX_FONTS = 10

GENERIC_FONT_KEYWORDS: frozenset[str] = frozenset(
    {"sans-serif", "serif", "monospace", "inherit", "initial"}
)

FONT_SERVICE_HOSTS: tuple[str, ...] = ("fonts.googleapis.com", "fonts.bunny.net")

_FONT_FAMILY_PATTERN = re.compile(r"font-family\s*:\s*([^;}]+)", re.IGNORECASE)
_IMPORTANT_PATTERN = re.compile(r"!\s*important\s*$", re.IGNORECASE)


def _clean_family(token: str) -> str:
    return token.strip().strip("'\"").strip()


def parse_font_family_value(value: str) -> list[str]:
    """Split a font-family declaration value into family names, generics removed."""
    value = _IMPORTANT_PATTERN.sub("", value.strip())
    families: list[str] = []
    for token in value.split(","):
        family = _clean_family(token)
        if not family or "(" in family:
            continue
        if family.lower() in GENERIC_FONT_KEYWORDS:
            continue
        families.append(family)
    return families


def extract_fonts_from_css(css: str) -> list[str]:
    families: list[str] = []
    for match in _FONT_FAMILY_PATTERN.finditer(css):
        families.extend(parse_font_family_value(match.group(1)))
    return families


def is_font_service_url(href: str) -> bool:
    try:
        host = (urlparse(href if "//" in href else f"//{href}").hostname or "").lower()
    except ValueError:
        return False
    return host in FONT_SERVICE_HOSTS


def extract_fonts_from_service_url(href: str) -> list[str]:
    """Family names from a hosted-font stylesheet URL.

    ``family=Open+Sans:400,700|Roboto&family=Inter:wght@400`` yields
    ``["Open Sans", "Roboto", "Inter"]``.
    """
    try:
        query = urlparse(href).query
    except ValueError:
        return []
    families: list[str] = []
    # parse_qs decodes "+" to space and percent-escapes.
    for value in parse_qs(query).get("family", []):
        for family in value.split("|"):
            name = family.split(":")[0].strip()
            if name:
                families.append(name)
    return families


def extract_fonts(soup: BeautifulSoup, limit: int = MAX_FONTS) -> list[str]:
    """Fonts from <style> blocks first, then hosted font links."""
    fonts = OrderedSet(key=str.casefold)

    for style in soup.find_all("style"):
        for family in extract_fonts_from_css(style.get_text()):
            fonts.add(family)

    for link in soup.find_all("link", href=True):
        href = attr_text(link, "href")
        if is_font_service_url(href):
            for family in extract_fonts_from_service_url(href):
                fonts.add(family)

    return fonts.first(limit)
