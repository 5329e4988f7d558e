"""Insertion-ordered, deduplicating collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator


def _identity(value: str) -> str:
    return value


class OrderedSet:
    """Sequence plus membership index.

    Values are compared through ``key`` (identity by default). The first
    value seen for a key is the one kept, and iteration follows discovery
    order.
    """

    def __init__(
        self,
        values: Iterable[str] = (),
        key: Callable[[str], str] = _identity,
    ) -> None:
        self._key = key
        self._items: list[str] = []
        self._index: set[str] = set()
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Add a value. Returns True if it was not already present."""
        normalized = self._key(value)
        if normalized in self._index:
            return False
        self._index.add(normalized)
        self._items.append(value)
        return True

    def discard(self, value: str) -> None:
        normalized = self._key(value)
        if normalized not in self._index:
            return
        self._index.remove(normalized)
        self._items = [item for item in self._items if self._key(item) != normalized]

    def first(self, limit: int) -> list[str]:
        """Return the first ``limit`` values in discovery order."""
        return self._items[:limit]

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and self._key(value) in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"
