"""Logo candidate chain.

Builds the ordered list of logo candidates for a page. Priority order is
data: ``LOGO_CANDIDATE_SOURCES`` lists one finder per tier, highest
confidence first:

  1. Third-party logo lookup service keyed by domain
  2. SVG icon <link> declared in the document head
  3. Inline <svg> inside a logo-labeled header region (inline data URI)
  4. JSON-LD schema.org Organization logo
  5. <img> whose src/alt/ancestor class or id names a logo or brand
  6. Apple touch icon
  7. Sized icon <link>, any icon <link>, or /favicon.ico
  8. Third-party favicon lookup service keyed by domain

Finders are pure functions of the parsed document; selection (which needs
the network) lives in ``brandsignal.services.logo_resolver``.
"""

from __future__ import annotations

import base64
import json
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from brandsignal.core.document import attr_text, first_attr
from brandsignal.core.urls import extract_hostname, is_inline_reference, resolve_url

if TYPE_CHECKING:
    from collections.abc import Callable

    from bs4 import BeautifulSoup

DEFAULT_LOGO_LOOKUP_TEMPLATE = "https://logo.clearbit.com/{domain}?size=400"
DEFAULT_FAVICON_LOOKUP_TEMPLATE = "https://www.google.com/s2/favicons?domain={domain}&sz=128"

FALLBACK_FAVICON_PATH = "/favicon.ico"

_SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class CandidateSource(StrEnum):
    """Where a logo candidate came from."""

    LOGO_SERVICE = "logo_service"
    SVG_ICON_LINK = "svg_icon_link"
    INLINE_SVG = "inline_svg"
    JSONLD_LOGO = "jsonld_logo"
    LOGO_IMAGE = "logo_image"
    TOUCH_ICON = "touch_icon"
    FAVICON = "favicon"
    FAVICON_SERVICE = "favicon_service"


@dataclass(frozen=True)
class Candidate:
    url: str
    source: CandidateSource
    rank: int

    @property
    def is_inline(self) -> bool:
        return is_inline_reference(self.url)


@dataclass(frozen=True)
class ChainContext:
    """Per-call inputs shared by every finder."""

    base_url: str
    domain: str
    logo_lookup_template: str = DEFAULT_LOGO_LOOKUP_TEMPLATE
    favicon_lookup_template: str = DEFAULT_FAVICON_LOOKUP_TEMPLATE


# ---------------------------------------------------------------------------
# Third-party logo filtering
# ---------------------------------------------------------------------------

# URL fragments of badges and platform marks that are never the site's own logo.
_SKIP_URL_PATTERNS: list[str] = [
    "google-logo",
    "google-rating",
    "app-store-badge",
    "appstore-badge",
    "google-play-badge",
    "trustpilot",
    "g2-badge",
    "capterra",
    "ycombinator",
    "yc-logo",
]

_SKIP_ALT_PATTERNS: list[str] = [
    "google review",
    "google rating",
    "app store",
    "google play",
    "play store",
    "trustpilot",
]

# Headings near a logo grid mean partner/investor/client logos.
_THIRD_PARTY_SECTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"backed\s+by",
        r"funded\s+by",
        r"our\s+investors?",
        r"trusted\s+by",
        r"used\s+by",
        r"loved\s+by",
        r"our\s+customers?",
        r"our\s+clients?",
        r"as\s+seen\s+(?:in|on)",
        r"featured\s+in",
        r"our\s+partners?",
        r"works\s+with",
    ]
]

_LOGO_GRID_CLASS_PATTERNS: list[str] = [
    "partner-logo",
    "client-logo",
    "investor-logo",
    "customer-logo",
    "logo-grid",
    "logo-slider",
    "logo-carousel",
    "logo-strip",
    "logo-wall",
    "social-proof",
    "trust-badge",
]

_SECTION_TEXT_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "span"]


def is_third_party_logo(url: str, alt: str = "") -> bool:
    """Check if a URL or alt text indicates a third-party logo."""
    url_lower = url.lower()
    alt_lower = alt.lower()
    if any(pattern in url_lower for pattern in _SKIP_URL_PATTERNS):
        return True
    return any(pattern in alt_lower for pattern in _SKIP_ALT_PATTERNS)


def is_inside_third_party_section(tag: Any, max_levels: int = 5) -> bool:
    """Check if a tag sits in a partner/investor/client logo section.

    Walks up at most ``max_levels`` ancestors looking at class/id names and
    at the direct heading/paragraph text of each container.
    """
    parent = tag.parent
    levels_checked = 0
    while parent is not None and parent.name and levels_checked < max_levels:
        combined_attrs = f"{attr_text(parent, 'class')} {attr_text(parent, 'id')}".lower()
        if any(p in combined_attrs for p in _LOGO_GRID_CLASS_PATTERNS):
            return True

        direct_text = " ".join(
            child.get_text(strip=True)
            for child in parent.find_all(_SECTION_TEXT_TAGS, recursive=False)
        )
        if direct_text and any(pat.search(direct_text) for pat in _THIRD_PARTY_SECTION_PATTERNS):
            return True

        parent = parent.parent
        levels_checked += 1

    return False


# ---------------------------------------------------------------------------
# Inline SVG serialization
# ---------------------------------------------------------------------------

# html.parser lowercases names; SVG rendered as an image is parsed as XML
# and needs its camelCase names back.
_SVG_CAMEL_CASE_NAMES: dict[str, str] = {
    name.lower(): name
    for name in (
        "viewBox",
        "preserveAspectRatio",
        "gradientUnits",
        "gradientTransform",
        "patternUnits",
        "patternContentUnits",
        "patternTransform",
        "clipPathUnits",
        "maskUnits",
        "maskContentUnits",
        "markerWidth",
        "markerHeight",
        "markerUnits",
        "refX",
        "refY",
        "pathLength",
        "textLength",
        "lengthAdjust",
        "stdDeviation",
        "baseProfile",
        "linearGradient",
        "radialGradient",
        "clipPath",
        "textPath",
        "foreignObject",
        "feGaussianBlur",
        "feColorMatrix",
        "feOffset",
        "feBlend",
        "feMerge",
        "feMergeNode",
        "feFlood",
        "feComposite",
    )
}

_SVG_NAME_PATTERN = re.compile(
    r"(?<=[<\s/])(" + "|".join(sorted(_SVG_CAMEL_CASE_NAMES, key=len, reverse=True)) + r")(?=[\s=/>])"
)


def serialize_svg(svg: Any) -> str:
    """Serialize an <svg> subtree to standalone XML-compatible markup."""
    markup = _SVG_NAME_PATTERN.sub(lambda m: _SVG_CAMEL_CASE_NAMES[m.group(1)], str(svg))
    if not svg.get("xmlns"):
        markup = markup.replace("<svg", f'<svg xmlns="{_SVG_NAMESPACE}"', 1)
    return markup


def svg_to_data_uri(svg: Any) -> str:
    encoded = base64.b64encode(serialize_svg(svg).encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


# ---------------------------------------------------------------------------
# Finders, one per tier
# ---------------------------------------------------------------------------

_SVG_ICON_LINK_SELECTORS: tuple[str, ...] = (
    'link[rel~="icon" i][type="image/svg+xml" i]',
    'link[rel~="icon" i][href$=".svg" i]',
)

_INLINE_SVG_SELECTORS: tuple[str, ...] = (
    'header svg[class*="logo"]',
    ".logo svg",
    "#logo svg",
    '[class*="logo"] svg',
    'a[class*="logo"] svg',
    "header a:first-child svg",
)

_LOGO_IMAGE_SELECTORS: tuple[str, ...] = (
    'img[src*="logo" i]',
    'img[alt*="logo" i]',
    "a.logo img",
    ".logo img",
    "#logo img",
    '[class*="logo"] img',
    '[id*="logo"] img',
    "a.navbar-brand img",
    ".navbar-brand img",
    "header a img",
    'img[class*="brand" i]',
)

_TOUCH_ICON_SELECTORS: tuple[str, ...] = (
    'link[rel~="apple-touch-icon" i]',
    'link[rel~="apple-touch-icon-precomposed" i]',
)

_FAVICON_SELECTORS: tuple[str, ...] = (
    'link[rel~="icon" i][sizes="192x192"]',
    'link[rel~="icon" i][sizes="128x128"]',
    'link[rel~="icon" i][sizes="96x96"]',
    'link[rel~="icon" i]',
)

_JSONLD_ORGANIZATION_TYPES = ("Organization", "Corporation", "LocalBusiness")


def _first_link_href(soup: BeautifulSoup, selectors: tuple[str, ...], base_url: str) -> str | None:
    for selector in selectors:
        for link in soup.select(selector):
            resolved = resolve_url(base_url, first_attr(link, "href"))
            if resolved:
                return resolved
    return None


def _lookup_service_url(template: str, domain: str) -> str | None:
    if not template or not domain:
        return None
    return template.replace("{domain}", domain)


def find_logo_service(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    return _lookup_service_url(ctx.logo_lookup_template, ctx.domain)


def find_svg_icon_link(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    return _first_link_href(soup, _SVG_ICON_LINK_SELECTORS, ctx.base_url)


def find_inline_svg(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    for selector in _INLINE_SVG_SELECTORS:
        svg = soup.select_one(selector)
        if svg is not None:
            return svg_to_data_uri(svg)
    return None


def extract_logo_from_jsonld(data: Any) -> str | None:
    """Recursively search JSON-LD data for an Organization logo."""
    if isinstance(data, dict):
        schema_type = data.get("@type", "")
        type_values = schema_type if isinstance(schema_type, list) else [schema_type]

        if any(t in _JSONLD_ORGANIZATION_TYPES for t in type_values):
            logo = data.get("logo")
            if isinstance(logo, str) and logo:
                return logo
            if isinstance(logo, dict):
                url = logo.get("url") or logo.get("contentUrl")
                if isinstance(url, str) and url:
                    return url

        for value in data.values():
            result = extract_logo_from_jsonld(value)
            if result:
                return result

    elif isinstance(data, list):
        for item in data:
            result = extract_logo_from_jsonld(item)
            if result:
                return result

    return None


def find_jsonld_logo(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.get_text()
        if not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError):
            continue
        logo_url = extract_logo_from_jsonld(data)
        if logo_url and not is_third_party_logo(logo_url):
            resolved = resolve_url(ctx.base_url, logo_url)
            if resolved:
                return resolved
    return None


def find_logo_image(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    """First logo-like <img>, skipping third-party marks and logo walls."""
    for selector in _LOGO_IMAGE_SELECTORS:
        for img in soup.select(selector):
            src = first_attr(img, "src", "data-src")
            if not src or is_third_party_logo(src, attr_text(img, "alt")):
                continue
            if is_inside_third_party_section(img):
                continue
            resolved = resolve_url(ctx.base_url, src)
            if resolved:
                return resolved
    return None


def find_touch_icon(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    return _first_link_href(soup, _TOUCH_ICON_SELECTORS, ctx.base_url)


def find_favicon(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    """Sized icon link, then any icon link, then the conventional /favicon.ico."""
    href = _first_link_href(soup, _FAVICON_SELECTORS, ctx.base_url)
    return href or resolve_url(ctx.base_url, FALLBACK_FAVICON_PATH)


def find_favicon_service(soup: BeautifulSoup, ctx: ChainContext) -> str | None:
    return _lookup_service_url(ctx.favicon_lookup_template, ctx.domain)


LOGO_CANDIDATE_SOURCES: list[tuple[CandidateSource, Callable[[BeautifulSoup, ChainContext], str | None]]] = [
    (CandidateSource.LOGO_SERVICE, find_logo_service),
    (CandidateSource.SVG_ICON_LINK, find_svg_icon_link),
    (CandidateSource.INLINE_SVG, find_inline_svg),
    (CandidateSource.JSONLD_LOGO, find_jsonld_logo),
    (CandidateSource.LOGO_IMAGE, find_logo_image),
    (CandidateSource.TOUCH_ICON, find_touch_icon),
    (CandidateSource.FAVICON, find_favicon),
    (CandidateSource.FAVICON_SERVICE, find_favicon_service),
]


def build_chain_context(
    base_url: str,
    logo_lookup_template: str = DEFAULT_LOGO_LOOKUP_TEMPLATE,
    favicon_lookup_template: str = DEFAULT_FAVICON_LOOKUP_TEMPLATE,
) -> ChainContext:
    return ChainContext(
        base_url=base_url,
        domain=extract_hostname(base_url),
        logo_lookup_template=logo_lookup_template,
        favicon_lookup_template=favicon_lookup_template,
    )


def build_logo_candidates(soup: BeautifulSoup, ctx: ChainContext) -> list[Candidate]:
    """Run every finder in priority order and rank the results.

    A URL found by more than one tier keeps its highest-priority rank.
    """
    candidates: list[Candidate] = []
    seen: set[str] = set()
    for source, finder in LOGO_CANDIDATE_SOURCES:
        url = finder(soup, ctx)
        if not url or url in seen:
            continue
        seen.add(url)
        candidates.append(Candidate(url=url, source=source, rank=len(candidates)))
    return candidates


def resolve_favicon(soup: BeautifulSoup, base_url: str) -> str | None:
    """The favicon field: icon links or /favicon.ico, never validated."""
    return find_favicon(soup, build_chain_context(base_url))
