"""Shared test fixtures for the brand signal engine."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

import pytest

from brandsignal.models.config import Config

if TYPE_CHECKING:
    from collections.abc import Iterable

    from brandsignal.core.deadline import ProbeDeadline


class ScriptedProber:
    """Fake prober: URLs in ``reachable`` succeed, everything else fails.

    Records every probed URL. ``delays`` maps a URL to seconds to sleep
    before answering, to simulate slow candidates in race mode.
    """

    def __init__(
        self,
        reachable: Iterable[str] = (),
        delays: dict[str, float] | None = None,
    ) -> None:
        self.reachable = set(reachable)
        self.delays = delays or {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def is_reachable(self, url: str, deadline: ProbeDeadline) -> bool:
        with self._lock:
            self.calls.append(url)
        delay = self.delays.get(url)
        if delay:
            time.sleep(delay)
        return url in self.reachable


@pytest.fixture
def make_prober() -> type[ScriptedProber]:
    """Factory for scripted fake probers."""
    return ScriptedProber


@pytest.fixture
def offline_config() -> Config:
    """Config with both third-party lookup services disabled."""
    return Config(logo_lookup_template="", favicon_lookup_template="")


@pytest.fixture
def default_config() -> Config:
    """Config with default lookup services and sequential probing."""
    return Config(race_window=1)


@pytest.fixture
def sample_brand_html() -> str:
    """A homepage exercising every extractor."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>  Acme Rockets | Home  </title>
    <meta name="description" content="Rockets for everyone.">
    <meta property="og:description" content="OG description">
    <meta property="og:image" content="/images/og-cover.jpg">
    <meta name="twitter:image" content="https://cdn.acme.com/twitter-card.png">
    <link rel="icon" type="image/svg+xml" href="/icon.svg">
    <link rel="apple-touch-icon" href="/apple-touch-icon.png">
    <link rel="icon" sizes="192x192" href="/icon-192.png">
    <link href="https://fonts.googleapis.com/css?family=Open+Sans:400,700|Roboto+Slab" rel="stylesheet">
    <style>
        body { font-family: "Inter", Helvetica, sans-serif; color: #333333; background: #FFF; }
        .cta { background-color: rgb(18, 52, 86); border-color: #12345678; }
    </style>
</head>
<body>
    <header>
        <a href="/" class="logo"><svg viewBox="0 0 10 10"><circle cx="5" cy="5" r="4"/></svg></a>
        <nav><a href="/pricing">Pricing</a></nav>
    </header>
    <section class="hero-banner">
        <h1>Launch faster</h1>
        <img src="/images/hero.jpg" width="1200" height="600" alt="Rocket on pad">
        <img src="/images/icon-check.png" width="40" height="40" class="icon">
    </section>
    <div class="promo" style="background-image: url('/images/promo-bg.webp'); color: #e63946">
        <h2>Go further</h2>
    </div>
    <main>
        <h2>Hi</h2>
        <h3>Built for engineers</h3>
        <img src="/images/team.png" alt="Our team">
        <img src="/images/diagram" alt="Diagram">
        <img src="https://track.example.com/pixel.gif" width="1" height="1">
        <p>We   build
           rockets.</p>
    </main>
    <script>var x = "hidden script text";</script>
</body>
</html>"""


@pytest.fixture
def sample_base_url() -> str:
    return "https://acme.com/about"
