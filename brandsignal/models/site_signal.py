"""SiteSignal: the assembled brand-extraction result for one site."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from brandsignal.core.brand_images import MAX_BRAND_IMAGES
from brandsignal.core.palette import MAX_COLORS
from brandsignal.core.text_content import MAX_BODY_CHARS, MAX_HEADINGS
from brandsignal.core.typography import MAX_FONTS
from brandsignal.core.urls import is_absolute_http_url, is_inline_reference

_HEX_COLOR = re.compile(r"#(?:[0-9a-f]{3}|[0-9a-f]{6})")


def _require_unique(values: tuple[str, ...], field: str, key: Any = None) -> None:
    normalized = [key(v) for v in values] if key else list(values)
    if len(set(normalized)) != len(normalized):
        msg = f"{field} must not contain duplicates"
        raise ValueError(msg)


def _is_safe_reference(value: str) -> bool:
    """Inline data or a same-origin path; never a raw cross-origin URL."""
    if is_inline_reference(value):
        return True
    return value.startswith("/") and not value.startswith("//")


class SiteSignal(BaseModel):
    """Immutable brand signal extracted from one markup document.

    Serializes with camelCase keys (``logoUrl``, ``bodyExcerpt`` ...).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = ""
    description: str = ""
    logo_url: str | None = None
    favicon_url: str | None = None
    og_image: str | None = None
    colors: tuple[str, ...] = Field(default=(), max_length=MAX_COLORS)
    fonts: tuple[str, ...] = Field(default=(), max_length=MAX_FONTS)
    headings: tuple[str, ...] = Field(default=(), max_length=MAX_HEADINGS)
    body_excerpt: str = Field(default="", max_length=MAX_BODY_CHARS)
    brand_images: tuple[str, ...] = Field(default=(), max_length=MAX_BRAND_IMAGES)
    base_url: str

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Base URL must be an absolute http(s) URL."""
        if not is_absolute_http_url(value):
            msg = "base_url must be an absolute http(s) URL"
            raise ValueError(msg)
        return value

    @field_validator("logo_url", "favicon_url", "og_image")
    @classmethod
    def validate_asset_reference(cls, value: str | None) -> str | None:
        """Asset fields hold inline data or proxied references only."""
        if value is not None and not _is_safe_reference(value):
            msg = "asset references must be inline data or same-origin proxied URLs"
            raise ValueError(msg)
        return value

    @field_validator("brand_images")
    @classmethod
    def validate_brand_images(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not all(_is_safe_reference(v) for v in value):
            msg = "brand_images must hold inline data or same-origin proxied URLs"
            raise ValueError(msg)
        _require_unique(value, "brand_images")
        return value

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Colors are lowercase #rgb or #rrggbb with no duplicates."""
        for color in value:
            if not _HEX_COLOR.fullmatch(color):
                msg = f"invalid color {color!r}: expected lowercase #rgb or #rrggbb"
                raise ValueError(msg)
        _require_unique(value, "colors")
        return value

    @field_validator("fonts")
    @classmethod
    def validate_fonts(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        _require_unique(value, "fonts", key=str.casefold)
        return value

    @field_validator("headings")
    @classmethod
    def validate_headings(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        _require_unique(value, "headings")
        return value

    def merged(self, **updates: Any) -> SiteSignal:
        """Return a new, re-validated signal with ``updates`` applied.

        Callers that need extra fields build their own record from
        ``to_dict()`` instead.
        """
        unknown = set(updates) - set(SiteSignal.model_fields)
        if unknown:
            msg = f"unknown SiteSignal fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        data = self.model_dump()
        data.update(updates)
        return SiteSignal.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
