"""Pydantic data models for the brand signal engine."""

from brandsignal.models.config import Config
from brandsignal.models.site_signal import SiteSignal

__all__ = [
    "Config",
    "SiteSignal",
]
