"""Title, description and social-preview image extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from brandsignal.core.document import meta_content
from brandsignal.core.urls import resolve_url

if TYPE_CHECKING:
    from bs4 import BeautifulSoup


@dataclass(frozen=True)
class PageMetadata:
    title: str
    description: str
    og_image: str | None


def extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    if tag is None:
        return ""
    return tag.get_text().strip()


def extract_description(soup: BeautifulSoup) -> str:
    """Description meta tag, falling back to og:description."""
    return meta_content(soup, "description") or meta_content(soup, "og:description") or ""


def extract_og_image(soup: BeautifulSoup, base_url: str) -> str | None:
    """og:image resolved against the base URL (not yet proxied)."""
    return resolve_url(base_url, meta_content(soup, "og:image"))


def extract_metadata(soup: BeautifulSoup, base_url: str) -> PageMetadata:
    return PageMetadata(
        title=extract_title(soup),
        description=extract_description(soup),
        og_image=extract_og_image(soup, base_url),
    )
