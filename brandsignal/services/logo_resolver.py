"""Logo selection over a ranked candidate chain.

Inline data candidates are accepted without a probe. Remote candidates are
accepted when the reachability prober confirms them within the probe
deadline. Nothing reachable is a normal outcome and yields None.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

import structlog

from brandsignal.core.deadline import CancellationToken, ProbeDeadline

if TYPE_CHECKING:
    from collections.abc import Sequence

    from brandsignal.core.logo_candidates import Candidate
    from brandsignal.services.protocols import ReachabilityProberProtocol

logger = structlog.get_logger(__name__)

DEFAULT_PROBE_TIMEOUT_SECONDS = 3.0


class LogoResolver:
    """Picks the highest-ranked usable logo candidate.

    With ``race_window == 1`` candidates are probed one at a time and nothing
    after the winner is probed. With a larger window, up to ``race_window``
    remote candidates are probed concurrently; results are read in rank
    order, so a lower rank always beats a higher one that answered first.
    """

    def __init__(
        self,
        prober: ReachabilityProberProtocol,
        probe_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        race_window: int = 1,
    ) -> None:
        if race_window < 1:
            msg = "race_window must be at least 1"
            raise ValueError(msg)
        self.prober = prober
        self.probe_timeout_seconds = probe_timeout_seconds
        self.race_window = race_window

    def select(self, candidates: Sequence[Candidate]) -> Candidate | None:
        ordered = sorted(candidates, key=lambda c: c.rank)
        if self.race_window == 1:
            chosen = self._select_sequential(ordered)
        else:
            chosen = self._select_racing(ordered)

        if chosen is None:
            logger.info("logo_chain_exhausted", candidates=len(ordered))
        else:
            logger.info(
                "logo_selected",
                source=str(chosen.source),
                rank=chosen.rank,
                inline=chosen.is_inline,
            )
        return chosen

    def _probe(self, candidate: Candidate, deadline: ProbeDeadline) -> bool:
        """Run one probe; any failure counts as unreachable for this candidate only."""
        try:
            return self.prober.is_reachable(candidate.url, deadline)
        except Exception as exc:
            logger.debug(
                "logo_candidate_probe_failed",
                source=str(candidate.source),
                rank=candidate.rank,
                error=str(exc),
            )
            return False

    def _select_sequential(self, candidates: Sequence[Candidate]) -> Candidate | None:
        for candidate in candidates:
            if candidate.is_inline:
                return candidate
            deadline = ProbeDeadline(self.probe_timeout_seconds)
            if self._probe(candidate, deadline):
                return candidate
            logger.debug(
                "logo_candidate_unreachable",
                source=str(candidate.source),
                rank=candidate.rank,
            )
        return None

    def _next_window(self, candidates: Sequence[Candidate], start: int) -> list[Candidate]:
        """Up to ``race_window`` candidates from ``start``, ending at the first inline one."""
        window: list[Candidate] = []
        for candidate in candidates[start : start + self.race_window]:
            window.append(candidate)
            if candidate.is_inline:
                break
        return window

    def _select_racing(self, candidates: Sequence[Candidate]) -> Candidate | None:
        start = 0
        while start < len(candidates):
            window = self._next_window(candidates, start)
            start += len(window)

            remote = [c for c in window if not c.is_inline]
            token = CancellationToken()
            executor = ThreadPoolExecutor(max_workers=max(1, len(remote)))
            try:
                futures: dict[int, Future[bool]] = {
                    c.rank: executor.submit(
                        self._probe, c, ProbeDeadline(self.probe_timeout_seconds, token)
                    )
                    for c in remote
                }
                for candidate in window:
                    if candidate.is_inline or futures[candidate.rank].result():
                        return candidate
            finally:
                token.cancel()
                executor.shutdown(wait=False, cancel_futures=True)
        return None
