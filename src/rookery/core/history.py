"""Append-only log of canonical position keys for repetition counting."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator


class PositionHistory:
    """Ordered record of every position reached after a completed move.

    Keys are opaque strings (board placement + side to move); the log is
    never truncated during a game.
    """

    __slots__ = ("_keys", "_counts")

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: list[str] = []
        self._counts: Counter[str] = Counter()
        for key in keys:
            self.append(key)

    def append(self, key: str) -> None:
        self._keys.append(key)
        self._counts[key] += 1

    def count(self, key: str) -> int:
        """How many times *key* has been recorded."""
        return self._counts[key]

    @property
    def last(self) -> str | None:
        return self._keys[-1] if self._keys else None

    def copy(self) -> PositionHistory:
        return PositionHistory(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"PositionHistory({len(self._keys)} positions)"
