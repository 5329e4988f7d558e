"""Unit tests for brand image harvesting."""

from __future__ import annotations

from brandsignal.core.brand_images import (
    MAX_BRAND_IMAGES,
    collect_brand_images,
    has_image_extension,
    is_noise,
    is_too_small,
    parse_background_urls,
)
from brandsignal.core.document import build_document

BASE_URL = "https://acme.com/"


class TestFilters:
    """Tests for the size, noise and extension filters."""

    def test_small_declared_width(self) -> None:
        img = build_document('<img src="/a.jpg" width="40">').find("img")
        assert is_too_small(img) is True

    def test_pixel_units_parsed(self) -> None:
        img = build_document('<img src="/a.jpg" width="300px" height="79px">').find("img")
        assert is_too_small(img) is True

    def test_undeclared_size_is_kept(self) -> None:
        img = build_document('<img src="/a.jpg">').find("img")
        assert is_too_small(img) is False

    def test_percentage_width_not_small(self) -> None:
        img = build_document('<img src="/a.jpg" width="100%">').find("img")
        assert is_too_small(img) is False

    def test_noise_keywords(self) -> None:
        assert is_noise("/img/Arrow-Right.png") is True
        assert is_noise("/img/hero.jpg", "", "Sprite sheet") is True
        assert is_noise("/img/hero.jpg", "cover", "Launch day") is False

    def test_extension_check_ignores_query(self) -> None:
        assert has_image_extension("https://acme.com/a.JPG?w=800") is True
        assert has_image_extension("https://acme.com/a.svg") is False
        assert has_image_extension("https://acme.com/render?format=png") is False


class TestParseBackgroundUrls:
    """Tests for parse_background_urls()."""

    def test_quote_styles(self) -> None:
        style = "background: url('/a.jpg'), url(\"/b.png\"), url( /c.webp )"
        assert parse_background_urls(style) == ["/a.jpg", "/b.png", "/c.webp"]

    def test_empty_url_skipped(self) -> None:
        assert parse_background_urls("background-image: url('')") == []

    def test_no_url(self) -> None:
        assert parse_background_urls("background-color: red") == []


class TestCollectBrandImages:
    """Tests for collect_brand_images()."""

    def test_sample_page_zones_in_order(self, sample_brand_html: str, sample_base_url: str) -> None:
        images = collect_brand_images(build_document(sample_brand_html), sample_base_url)
        assert images == [
            "https://acme.com/images/og-cover.jpg",
            "https://cdn.acme.com/twitter-card.png",
            "https://acme.com/images/hero.jpg",
            "https://acme.com/images/promo-bg.webp",
            "https://acme.com/images/team.png",
        ]

    def test_small_icon_in_hero_excluded(self) -> None:
        html = '<div class="hero"><img src="/check.jpg" width="40" height="40"></div>'
        assert collect_brand_images(build_document(html), BASE_URL) == []

    def test_region_image_needs_no_extension(self) -> None:
        html = '<div id="product-shot"><img src="/render/42"></div><img src="/render/43">'
        assert collect_brand_images(build_document(html), BASE_URL) == ["https://acme.com/render/42"]

    def test_lazy_loaded_image(self) -> None:
        html = '<div class="carousel"><img data-lazy-src="/slides/one.jpg"></div>'
        assert collect_brand_images(build_document(html), BASE_URL) == ["https://acme.com/slides/one.jpg"]

    def test_noise_in_og_image_dropped(self) -> None:
        html = '<meta property="og:image" content="/static/logo-share.png">'
        assert collect_brand_images(build_document(html), BASE_URL) == []

    def test_inline_data_image_kept(self) -> None:
        data_uri = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"
        html = f'<img src="{data_uri}" alt="Cover">'
        assert collect_brand_images(build_document(html), BASE_URL) == [data_uri]

    def test_duplicates_collapse_to_first_zone(self) -> None:
        html = (
            '<meta property="og:image" content="/cover.jpg">'
            '<div class="banner"><img src="/cover.jpg"></div>'
            '<img src="https://acme.com/cover.jpg">'
        )
        assert collect_brand_images(build_document(html), BASE_URL) == ["https://acme.com/cover.jpg"]

    def test_capped_under_volume(self) -> None:
        imgs = "".join(f'<img src="/hero/{i}.jpg">' for i in range(30))
        html = f'<section class="hero">{imgs}</section>'
        images = collect_brand_images(build_document(html), BASE_URL)
        assert len(images) == MAX_BRAND_IMAGES
        assert images[0] == "https://acme.com/hero/0.jpg"
        assert images[-1] == "https://acme.com/hero/11.jpg"

    def test_excluded_url_removed_before_cap(self) -> None:
        imgs = "".join(f'<img src="/hero/{i}.jpg">' for i in range(13))
        html = f'<section class="hero">{imgs}</section>'
        images = collect_brand_images(
            build_document(html), BASE_URL, exclude="https://acme.com/hero/0.jpg"
        )
        assert len(images) == MAX_BRAND_IMAGES
        assert "https://acme.com/hero/0.jpg" not in images
        assert images[-1] == "https://acme.com/hero/12.jpg"

    def test_unresolvable_sources_skipped(self) -> None:
        html = '<div class="hero"><img src="javascript:void(0)"><img src="/ok.jpg"></div>'
        assert collect_brand_images(build_document(html), BASE_URL) == ["https://acme.com/ok.jpg"]

    def test_empty_document(self) -> None:
        assert collect_brand_images(build_document(""), BASE_URL) == []
