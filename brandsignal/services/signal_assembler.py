"""Assembles a SiteSignal from one markup document.

Runs every extractor over a single parsed tree, resolves the logo through
the probing chain, and rewrites every URL-valued field into a same-origin
proxied reference before building the immutable result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from brandsignal.core.brand_images import collect_brand_images
from brandsignal.core.document import build_document
from brandsignal.core.logo_candidates import (
    build_chain_context,
    build_logo_candidates,
    resolve_favicon,
)
from brandsignal.core.metadata import extract_metadata
from brandsignal.core.palette import extract_colors
from brandsignal.core.text_content import extract_body_excerpt, extract_headings
from brandsignal.core.typography import extract_fonts
from brandsignal.core.urls import is_absolute_http_url, proxy_url
from brandsignal.models.config import Config
from brandsignal.models.site_signal import SiteSignal
from brandsignal.services.logo_resolver import LogoResolver
from brandsignal.services.reachability import HttpReachabilityProber
from brandsignal.services.site_gateway import SiteGatewayClient

if TYPE_CHECKING:
    from brandsignal.services.protocols import ReachabilityProberProtocol

logger = structlog.get_logger(__name__)


class SiteAnalyzer:
    """Turns markup plus a base URL into a SiteSignal.

    Holds no per-document state, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        prober: ReachabilityProberProtocol | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or Config()
        self.prober = prober or HttpReachabilityProber(
            self.config.gateway_base_url,
            proxy_path=self.config.proxy_path,
            user_agent=self.config.user_agent,
        )
        self.resolver = LogoResolver(
            self.prober,
            probe_timeout_seconds=self.config.probe_timeout_seconds,
            race_window=self.config.race_window,
        )

    def _rewrite(self, url: str | None) -> str | None:
        return proxy_url(url, self.config.proxy_path)

    def analyze(self, markup: str | None, base_url: str) -> SiteSignal:
        """Extract the brand signal.

        Raises ValueError only when ``base_url`` is not an absolute http(s)
        URL; every per-field problem degrades to an empty value instead.
        """
        if not is_absolute_http_url(base_url):
            msg = f"base_url must be an absolute http(s) URL, got {base_url!r}"
            raise ValueError(msg)

        soup = build_document(markup)

        metadata = extract_metadata(soup, base_url)
        colors = extract_colors(soup)
        fonts = extract_fonts(soup)
        headings = extract_headings(soup)
        body_excerpt = extract_body_excerpt(soup)

        ctx = build_chain_context(
            base_url,
            logo_lookup_template=self.config.logo_lookup_template,
            favicon_lookup_template=self.config.favicon_lookup_template,
        )
        candidates = build_logo_candidates(soup, ctx)
        chosen = self.resolver.select(candidates)
        logo_url = chosen.url if chosen else None

        favicon_url = resolve_favicon(soup, base_url)
        brand_images = collect_brand_images(soup, base_url, exclude=logo_url)

        signal = SiteSignal(
            title=metadata.title,
            description=metadata.description,
            logo_url=self._rewrite(logo_url),
            favicon_url=self._rewrite(favicon_url),
            og_image=self._rewrite(metadata.og_image),
            colors=tuple(colors),
            fonts=tuple(fonts),
            headings=tuple(headings),
            body_excerpt=body_excerpt,
            brand_images=tuple(img for img in (self._rewrite(url) for url in brand_images) if img),
            base_url=base_url,
        )

        logger.info(
            "site_signal_assembled",
            base_url=base_url,
            logo_source=str(chosen.source) if chosen else None,
            candidates=len(candidates),
            colors=len(signal.colors),
            fonts=len(signal.fonts),
            headings=len(signal.headings),
            brand_images=len(signal.brand_images),
        )
        return signal


def analyze_markup(
    markup: str | None,
    base_url: str,
    prober: ReachabilityProberProtocol | None = None,
    config: Config | None = None,
) -> SiteSignal:
    """Analyze already-fetched markup."""
    return SiteAnalyzer(prober=prober, config=config).analyze(markup, base_url)


def analyze_site(
    url: str,
    config: Config | None = None,
    prober: ReachabilityProberProtocol | None = None,
    gateway: SiteGatewayClient | None = None,
) -> SiteSignal:
    """Fetch ``url`` through the gateway, then analyze it against its final URL.

    Raises SiteFetchError when no markup can be obtained.
    """
    config = config or Config()
    gateway = gateway or SiteGatewayClient(
        config.gateway_base_url,
        fetch_path=config.fetch_path,
        timeout=config.fetch_timeout_seconds,
    )
    page = gateway.fetch_site(url)
    return analyze_markup(page.html, page.final_url, prober=prober, config=config)
