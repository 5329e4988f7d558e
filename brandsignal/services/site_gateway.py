"""Client for the fetch gateway that returns a page's markup and final URL."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests
import structlog

from brandsignal.core.urls import is_absolute_http_url, normalize_input_url

logger = structlog.get_logger(__name__)

DEFAULT_FETCH_PATH = "/api/fetch-site"
_REQUEST_TIMEOUT = 20.0


class SiteFetchError(Exception):
    """The gateway could not provide markup for the requested site."""


@dataclass(frozen=True)
class FetchedPage:
    html: str
    final_url: str


class SiteGatewayClient:
    """Fetches site markup through the gateway's fetch endpoint.

    The gateway follows redirects and reports the final URL, which becomes
    the base URL for every relative reference in the document.
    """

    def __init__(
        self,
        gateway_base_url: str,
        fetch_path: str = DEFAULT_FETCH_PATH,
        timeout: float = _REQUEST_TIMEOUT,
    ) -> None:
        self.gateway_base_url = gateway_base_url.rstrip("/")
        self.fetch_path = fetch_path
        self.timeout = timeout

    def fetch_site(self, url: str) -> FetchedPage:
        """Fetch markup for ``url`` (bare domains are treated as https).

        Raises SiteFetchError when no markup can be obtained.
        """
        target = normalize_input_url(url)
        if not is_absolute_http_url(target):
            msg = f"Not a fetchable URL: {url!r}"
            raise SiteFetchError(msg)

        try:
            response = requests.get(
                f"{self.gateway_base_url}{self.fetch_path}",
                params={"url": target},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload: Any = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("site_fetch_failed", url=target, error=str(exc))
            msg = f"Failed to fetch website {target}: {exc}"
            raise SiteFetchError(msg) from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("html"), str):
            logger.error("site_fetch_invalid_payload", url=target)
            msg = f"Gateway returned no markup for {target}"
            raise SiteFetchError(msg)

        final_url = payload.get("finalUrl")
        if not isinstance(final_url, str) or not is_absolute_http_url(final_url):
            final_url = target

        logger.info("site_fetched", url=target, final_url=final_url, bytes=len(payload["html"]))
        return FetchedPage(html=payload["html"], final_url=final_url)
