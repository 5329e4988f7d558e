"""Engine configuration model using pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from brandsignal.core.logo_candidates import (
    DEFAULT_FAVICON_LOOKUP_TEMPLATE,
    DEFAULT_LOGO_LOOKUP_TEMPLATE,
)
from brandsignal.core.urls import DEFAULT_PROXY_PATH, is_absolute_http_url

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class Config(BaseSettings):
    """Configuration loaded from BRANDSIGNAL_* environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="BRANDSIGNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    gateway_base_url: str = "http://localhost:3000"
    proxy_path: str = DEFAULT_PROXY_PATH
    fetch_path: str = "/api/fetch-site"
    probe_timeout_seconds: float = 3.0
    fetch_timeout_seconds: float = 20.0
    race_window: int = 1
    logo_lookup_template: str = DEFAULT_LOGO_LOOKUP_TEMPLATE
    favicon_lookup_template: str = DEFAULT_FAVICON_LOOKUP_TEMPLATE
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"

    @field_validator("gateway_base_url")
    @classmethod
    def validate_gateway_base_url(cls, value: str) -> str:
        """Gateway base URL must be absolute; trailing slashes are dropped."""
        if not is_absolute_http_url(value):
            msg = "gateway_base_url must be an absolute http(s) URL"
            raise ValueError(msg)
        return value.rstrip("/")

    @field_validator("proxy_path", "fetch_path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        """Gateway paths must be root-relative, never protocol-relative."""
        if not value.startswith("/") or value.startswith("//"):
            msg = "gateway paths must start with a single '/'"
            raise ValueError(msg)
        return value

    @field_validator("probe_timeout_seconds")
    @classmethod
    def validate_probe_timeout(cls, value: float) -> float:
        """Probe timeout must be in (0, 30] seconds."""
        if value <= 0 or value > 30:
            msg = "probe_timeout_seconds must be greater than 0 and at most 30"
            raise ValueError(msg)
        return value

    @field_validator("fetch_timeout_seconds")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Fetch timeout must be in (0, 120] seconds."""
        if value <= 0 or value > 120:
            msg = "fetch_timeout_seconds must be greater than 0 and at most 120"
            raise ValueError(msg)
        return value

    @field_validator("race_window")
    @classmethod
    def validate_race_window(cls, value: int) -> int:
        """Race window must be between 1 and 8."""
        if value < 1 or value > 8:
            msg = "race_window must be between 1 and 8"
            raise ValueError(msg)
        return value

    @field_validator("logo_lookup_template", "favicon_lookup_template")
    @classmethod
    def validate_lookup_template(cls, value: str) -> str:
        """Lookup templates are empty (disabled) or contain a {domain} placeholder."""
        if value and "{domain}" not in value:
            msg = "lookup templates must contain '{domain}' or be empty"
            raise ValueError(msg)
        return value

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        if not value.strip():
            msg = "user_agent must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            msg = f"log_level must be one of {', '.join(sorted(valid_levels))}"
            raise ValueError(msg)
        return upper_value
