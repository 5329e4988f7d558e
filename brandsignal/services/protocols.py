"""Service protocols defining interfaces for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from brandsignal.core.deadline import ProbeDeadline


class ReachabilityProberProtocol(Protocol):
    """Protocol for asset reachability checks.

    Implementations return False for every kind of failure and never raise.
    """

    def is_reachable(self, url: str, deadline: ProbeDeadline) -> bool: ...
