"""A thread-safe set of hashable values."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterable, Iterator


class BasicSet:
    """A set guarded by a lock so that it can be shared between threads.

    Values keep the order in which they were first added.
    """

    def __init__(self, values: Iterable[Hashable] | None = None) -> None:
        self._data: dict[Hashable, None] = {}
        self._lock = threading.Lock()
        if values is not None:
            self.add_all(values)

    def add(self, value: Hashable) -> None:
        """Add a value; adding one that is already present does nothing."""
        with self._lock:
            self._data[value] = None

    def add_all(self, values: Iterable[Hashable]) -> None:
        """Add every value of an iterable."""
        for value in values:
            self.add(value)

    def remove(self, value: Hashable) -> None:
        """Remove a value if present; a missing value is ignored."""
        with self._lock:
            self._data.pop(value, None)

    def __contains__(self, value: object) -> bool:
        with self._lock:
            return value in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.values())

    def is_empty(self) -> bool:
        """Return True when the set holds no values."""
        with self._lock:
            return not self._data

    def values(self) -> list[Hashable]:
        """Return a snapshot of the values as a list."""
        with self._lock:
            return list(self._data)

    def string_values(self) -> list[str]:
        """Return the values formatted as strings, sorted."""
        return sorted(str(value) for value in self.values())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.values()!r})"


def string_set(values: Iterable[str]) -> BasicSet:
    """Build a set from a sequence of strings."""
    return BasicSet(values)