"""Helpers for comparing and searching sequences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def slices_are_equal(a: Sequence | None, b: Sequence | None) -> bool:
    """Return True when both sequences hold equal items in the same order.

    A missing sequence (None) only equals another missing sequence.
    """
    if (a is None) != (b is None):
        return False
    if a is None or b is None:
        return True
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def string_values_equal_after_sort(
    a: Sequence[str] | None, b: Sequence[str] | None
) -> bool:
    """Return True when both sequences hold the same strings in any order."""
    if (a is None) != (b is None):
        return False
    if a is None or b is None:
        return True
    return len(a) == len(b) and sorted(a) == sorted(b)


def first_duplicate(values: Iterable[str]) -> str | None:
    """Return the first value seen a second time, or None if all are unique."""
    seen: set[str] = set()
    for value in values:
        if value in seen:
            return value
        seen.add(value)
    return None


def slice_contains(values: Iterable[str], find: str) -> bool:
    """Return True when ``find`` is one of the values."""
    return any(value == find for value in values)