"""Color palette extraction from style blocks and inline style attributes.

Hex colors are kept only in their 3- and 6-digit forms. ``rgb()``/``rgba()``
triples are converted to 6-digit hex with the alpha channel dropped.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from brandsignal.core.ordered_set import OrderedSet

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

MAX_COLORS = 30

_HEX_COLOR_PATTERN = re.compile(r"#[0-9a-fA-F]{3,8}\b")
_RGB_COLOR_PATTERN = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.IGNORECASE)

# Length including the leading "#".
_ALLOWED_HEX_LENGTHS = (4, 7)


def _channel_to_hex(raw: str) -> str:
    return format(min(int(raw), 255), "02x")


def extract_colors_from_text(text: str) -> list[str]:
    """Return normalized colors from one CSS text: hex matches first, then rgb()."""
    found: list[str] = []
    for match in _HEX_COLOR_PATTERN.finditer(text):
        hex_color = match.group(0).lower()
        if len(hex_color) in _ALLOWED_HEX_LENGTHS:
            found.append(hex_color)
    for match in _RGB_COLOR_PATTERN.finditer(text):
        found.append("#" + "".join(_channel_to_hex(channel) for channel in match.groups()))
    return found


def extract_colors(soup: BeautifulSoup, limit: int = MAX_COLORS) -> list[str]:
    """Scan <style> blocks, then inline style attributes, in document order."""
    colors = OrderedSet()

    for style in soup.find_all("style"):
        for color in extract_colors_from_text(style.get_text()):
            colors.add(color)

    for element in soup.find_all(style=True):
        style_attr = element.get("style")
        if isinstance(style_attr, str):
            for color in extract_colors_from_text(style_attr):
                colors.add(color)

    return colors.first(limit)
