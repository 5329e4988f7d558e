"""Brand image harvesting.

Collects brand-representative images from several markup zones, in order:

  1. og:image
  2. twitter:image
  3. <img> inside hero/banner/carousel/feature/product regions
  4. background-image URLs in inline style attributes
  5. every remaining <img> with a raster extension or inline data

Each zone's candidates pass a size and noise filter before insertion.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from brandsignal.core.document import attr_text, first_attr, meta_content
from brandsignal.core.ordered_set import OrderedSet
from brandsignal.core.urls import is_inline_reference, resolve_url

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bs4 import BeautifulSoup

MAX_BRAND_IMAGES = 12
MIN_IMAGE_DIMENSION = 80

NOISE_PATTERNS: tuple[str, ...] = (
    "icon",
    "favicon",
    "logo",
    "pixel",
    "tracking",
    "badge",
    "button",
    "arrow",
    "sprite",
    "spacer",
    "blank",
    "transparent",
    "1x1",
)

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp", ".avif", ".gif")

_REGION_KEYWORDS: tuple[str, ...] = ("hero", "banner", "carousel", "feature", "product")

_REGION_IMAGE_SELECTORS: str = ", ".join(
    f'[class*="{kw}" i] img, [id*="{kw}" i] img' for kw in _REGION_KEYWORDS
)

_BACKGROUND_URL_PATTERN = re.compile(r"""url\(\s*(['"]?)(.*?)\1\s*\)""", re.IGNORECASE)
_LEADING_INT_PATTERN = re.compile(r"^\s*(\d+)")

_IMAGE_SOURCE_ATTRS = ("src", "data-src", "data-lazy-src")


def _declared_dimension(tag: Any, name: str) -> int | None:
    match = _LEADING_INT_PATTERN.match(attr_text(tag, name))
    return int(match.group(1)) if match else None


def is_too_small(tag: Any, min_dimension: int = MIN_IMAGE_DIMENSION) -> bool:
    """True when a declared width or height is below ``min_dimension``."""
    for name in ("width", "height"):
        value = _declared_dimension(tag, name)
        if value is not None and value < min_dimension:
            return True
    return False


def is_noise(*texts: str) -> bool:
    """True when any text contains an iconography/tracking keyword."""
    combined = " ".join(texts).lower()
    return any(pattern in combined for pattern in NOISE_PATTERNS)


def has_image_extension(url: str) -> bool:
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        return False
    return path.endswith(IMAGE_EXTENSIONS)


def parse_background_urls(style: str) -> list[str]:
    """Extract the ``url(...)`` targets from a style attribute value."""
    return [match.group(2).strip() for match in _BACKGROUND_URL_PATTERN.finditer(style) if match.group(2).strip()]


def _noise_text(src: str) -> str:
    # Inline data is opaque; only its media type is meaningful.
    return src.split(",", 1)[0] if is_inline_reference(src) else src


class _Harvest:
    """Ordered set of resolved image URLs plus the <img> tags already seen."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.images = OrderedSet()
        self.seen_tags: set[int] = set()

    def add_url(self, raw: str | None) -> None:
        if not raw or is_noise(_noise_text(raw)):
            return
        resolved = resolve_url(self.base_url, raw)
        if resolved:
            self.images.add(resolved)

    def add_img(self, img: Any, require_extension: bool = False) -> None:
        if id(img) in self.seen_tags:
            return
        self.seen_tags.add(id(img))
        src = first_attr(img, *_IMAGE_SOURCE_ATTRS)
        if not src or is_too_small(img):
            return
        if is_noise(
            _noise_text(src),
            attr_text(img, "class"),
            attr_text(img, "alt"),
            attr_text(img, "id"),
        ):
            return
        resolved = resolve_url(self.base_url, src)
        if not resolved:
            return
        if require_extension and not (is_inline_reference(resolved) or has_image_extension(resolved)):
            return
        self.images.add(resolved)

    def add_imgs(self, imgs: Iterable[Any], require_extension: bool = False) -> None:
        for img in imgs:
            self.add_img(img, require_extension=require_extension)


def collect_brand_images(
    soup: BeautifulSoup,
    base_url: str,
    exclude: str | None = None,
    limit: int = MAX_BRAND_IMAGES,
) -> list[str]:
    """Harvest brand images in zone order.

    ``exclude`` is the selected logo's pre-rewrite URL; it is removed before
    the cap is applied. Returned URLs are absolute or inline, not yet proxied.
    """
    harvest = _Harvest(base_url)

    harvest.add_url(meta_content(soup, "og:image"))
    harvest.add_url(meta_content(soup, "twitter:image"))

    harvest.add_imgs(soup.select(_REGION_IMAGE_SELECTORS))

    for element in soup.find_all(style=re.compile("background", re.IGNORECASE)):
        for url in parse_background_urls(attr_text(element, "style")):
            harvest.add_url(url)

    harvest.add_imgs(soup.find_all("img"), require_extension=True)

    if exclude:
        harvest.images.discard(exclude)
    return harvest.images.first(limit)
