"""Unit tests for the SiteSignal and Config models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from brandsignal.models.config import Config
from brandsignal.models.site_signal import SiteSignal

BASE_URL = "https://acme.com/"


def _signal(**kwargs: object) -> SiteSignal:
    return SiteSignal(base_url=BASE_URL, **kwargs)


class TestSiteSignal:
    """Tests for SiteSignal validation and serialization."""

    def test_defaults(self) -> None:
        signal = _signal()
        assert signal.title == ""
        assert signal.logo_url is None
        assert signal.colors == ()
        assert signal.body_excerpt == ""

    def test_frozen(self) -> None:
        signal = _signal(title="Acme")
        with pytest.raises(ValidationError):
            signal.title = "Other"

    def test_relative_base_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="base_url"):
            SiteSignal(base_url="/about")

    def test_proxied_and_inline_assets_accepted(self) -> None:
        signal = _signal(
            logo_url="data:image/svg+xml;base64,PHN2Zz4=",
            favicon_url="/api/proxy-image?url=https%3A%2F%2Facme.com%2Ffavicon.ico",
        )
        assert signal.logo_url.startswith("data:")

    def test_raw_remote_asset_rejected(self) -> None:
        with pytest.raises(ValidationError, match="asset references"):
            _signal(og_image="https://acme.com/og.jpg")

    def test_protocol_relative_asset_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _signal(favicon_url="//cdn.acme.com/favicon.ico")

    def test_raw_brand_image_rejected(self) -> None:
        with pytest.raises(ValidationError, match="brand_images"):
            _signal(brand_images=("https://acme.com/a.jpg",))

    def test_duplicate_brand_images_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicates"):
            _signal(brand_images=("/api/proxy-image?url=a", "/api/proxy-image?url=a"))

    def test_uppercase_color_rejected(self) -> None:
        with pytest.raises(ValidationError, match="invalid color"):
            _signal(colors=("#FFF",))

    def test_alpha_color_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _signal(colors=("#ffffff80",))

    def test_fonts_unique_ignoring_case(self) -> None:
        with pytest.raises(ValidationError, match="fonts"):
            _signal(fonts=("Inter", "inter"))

    def test_duplicate_headings_rejected(self) -> None:
        with pytest.raises(ValidationError, match="headings"):
            _signal(headings=("Welcome", "Welcome"))

    def test_caps_enforced(self) -> None:
        with pytest.raises(ValidationError):
            _signal(headings=tuple(f"Heading {i}" for i in range(11)))
        with pytest.raises(ValidationError):
            _signal(body_excerpt="x" * 2001)

    def test_to_dict_uses_camel_case_keys(self) -> None:
        data = _signal(title="Acme", colors=("#fff",)).to_dict()
        assert set(data) == {
            "title",
            "description",
            "logoUrl",
            "faviconUrl",
            "ogImage",
            "colors",
            "fonts",
            "headings",
            "bodyExcerpt",
            "brandImages",
            "baseUrl",
        }
        assert data["colors"] == ["#fff"]
        assert data["logoUrl"] is None

    def test_accepts_camel_case_input(self) -> None:
        signal = SiteSignal.model_validate({"baseUrl": BASE_URL, "bodyExcerpt": "Hello"})
        assert signal.body_excerpt == "Hello"

    def test_merged_returns_new_validated_signal(self) -> None:
        original = _signal(title="Acme")
        updated = original.merged(description="Rockets")
        assert updated.description == "Rockets"
        assert updated.title == "Acme"
        assert original.description == ""

    def test_merged_revalidates(self) -> None:
        with pytest.raises(ValidationError):
            _signal().merged(colors=("red",))

    def test_merged_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValueError, match="unknown SiteSignal fields: extra"):
            _signal().merged(extra="x")

    def test_equal_signals_compare_equal(self) -> None:
        assert _signal(title="Acme") == _signal(title="Acme")


class TestConfig:
    """Tests for Config defaults and validators."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("GATEWAY_BASE_URL", "RACE_WINDOW", "LOG_LEVEL", "PROBE_TIMEOUT_SECONDS"):
            monkeypatch.delenv(f"BRANDSIGNAL_{name}", raising=False)
        config = Config(_env_file=None)
        assert config.gateway_base_url == "http://localhost:3000"
        assert config.proxy_path == "/api/proxy-image"
        assert config.fetch_path == "/api/fetch-site"
        assert config.probe_timeout_seconds == 3.0
        assert config.race_window == 1
        assert "{domain}" in config.logo_lookup_template

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BRANDSIGNAL_GATEWAY_BASE_URL", "https://gw.example.com/")
        monkeypatch.setenv("BRANDSIGNAL_RACE_WINDOW", "3")
        monkeypatch.setenv("BRANDSIGNAL_LOG_LEVEL", "debug")
        config = Config(_env_file=None)
        assert config.gateway_base_url == "https://gw.example.com"
        assert config.race_window == 3
        assert config.log_level == "DEBUG"

    def test_race_window_zero_rejected(self) -> None:
        with pytest.raises(ValidationError, match="race_window"):
            Config(race_window=0)

    def test_validate_gateway_base_url(self) -> None:
        with pytest.raises(ValueError, match="absolute"):
            Config.validate_gateway_base_url("localhost:3000")

    def test_validate_path(self) -> None:
        assert Config.validate_path("/p") == "/p"
        with pytest.raises(ValueError, match="start with"):
            Config.validate_path("api/proxy")

    def test_protocol_relative_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="single"):
            Config.validate_path("//proxy")
        with pytest.raises(ValidationError, match="proxy_path"):
            Config(proxy_path="//proxy")

    def test_validate_probe_timeout(self) -> None:
        assert Config.validate_probe_timeout(0.5) == 0.5
        with pytest.raises(ValueError):
            Config.validate_probe_timeout(0)
        with pytest.raises(ValueError):
            Config.validate_probe_timeout(31)

    def test_validate_fetch_timeout(self) -> None:
        with pytest.raises(ValueError):
            Config.validate_fetch_timeout(-1)

    def test_validate_lookup_template(self) -> None:
        assert Config.validate_lookup_template("") == ""
        assert Config.validate_lookup_template("https://x/{domain}") == "https://x/{domain}"
        with pytest.raises(ValueError, match="domain"):
            Config.validate_lookup_template("https://x/logo")

    def test_validate_user_agent(self) -> None:
        with pytest.raises(ValueError):
            Config.validate_user_agent("   ")

    def test_validate_log_level(self) -> None:
        assert Config.validate_log_level("warning") == "WARNING"
        with pytest.raises(ValueError, match="log_level"):
            Config.validate_log_level("VERBOSE")
