"""Asset reachability probing through the proxy gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests

from brandsignal.core.urls import DEFAULT_PROXY_PATH, proxy_url
from brandsignal.models.config import DEFAULT_USER_AGENT
from brandsignal.utils.logger import get_logger

if TYPE_CHECKING:
    from brandsignal.core.deadline import ProbeDeadline

logger = get_logger(__name__)


class HttpReachabilityProber:
    """Issues a HEAD request for an asset via the gateway's proxy endpoint.

    Only a 2xx answer counts as reachable. Timeouts, transport errors,
    non-2xx statuses and expired or cancelled deadlines all mean unreachable.
    """

    def __init__(
        self,
        gateway_base_url: str,
        proxy_path: str = DEFAULT_PROXY_PATH,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.gateway_base_url = gateway_base_url.rstrip("/")
        self.proxy_path = proxy_path
        self.user_agent = user_agent

    def probe_url(self, url: str) -> str:
        """Absolute gateway URL that proxies ``url``."""
        return f"{self.gateway_base_url}{proxy_url(url, self.proxy_path)}"

    def is_reachable(self, url: str, deadline: ProbeDeadline) -> bool:
        remaining = deadline.remaining()
        if deadline.cancelled or remaining <= 0:
            logger.debug("probe_skipped_deadline_expired", url=url, cancelled=deadline.cancelled)
            return False

        try:
            response = requests.head(
                self.probe_url(url),
                timeout=remaining,
                headers={"User-Agent": self.user_agent, "Accept": "image/*,*/*"},
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            logger.debug("probe_request_failed", url=url, error=str(exc))
            return False

        if deadline.cancelled:
            logger.debug("probe_result_discarded_cancelled", url=url)
            return False

        reachable = 200 <= response.status_code < 300
        if not reachable:
            logger.debug("probe_unsuccessful_status", url=url, status_code=response.status_code)
        return reachable


class OfflineProber:
    """Treats every remote asset as unreachable. Used when probing is disabled."""

    def is_reachable(self, url: str, deadline: ProbeDeadline) -> bool:
        return False
