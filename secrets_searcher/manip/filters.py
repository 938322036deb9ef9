"""Filters that decide which values are included."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any

from secrets_searcher.manip.regexp_set import RegexpSet
from secrets_searcher.manip.sets import BasicSet, string_set


def _remove_excluded(includes: Any, items: Any) -> None:
    for item in list(items):
        if not includes(item):
            items.remove(item)


class RegexpFilter:
    """Include values whose string form matches include patterns and no exclude pattern."""

    def __init__(
        self, include: RegexpSet | None = None, exclude: RegexpSet | None = None
    ) -> None:
        self.include = include if include is not None else RegexpSet()
        self.exclude = exclude if exclude is not None else RegexpSet()

    @classmethod
    def from_strings(
        cls, include: Iterable[str] = (), exclude: Iterable[str] = ()
    ) -> RegexpFilter:
        """Build a filter from pattern strings."""
        return cls(RegexpSet.from_strings(include), RegexpSet.from_strings(exclude))

    def includes_anything(self) -> bool:
        """Return True when both include and exclude patterns are set."""
        return not self.include.is_empty() and not self.exclude.is_empty()

    def includes(self, value: Any) -> bool:
        """Return True when the value's string form passes the filter."""
        text = str(value)
        if self.exclude.match_any(text):
            return False
        return self.include.is_empty() or self.include.match_any(text)

    def includes_all_of(self, items: Iterable[Any]) -> bool:
        """Return True when every item is included."""
        return all(self.includes(item) for item in items)

    def includes_any_of(self, items: Iterable[Any]) -> bool:
        """Return True when at least one item is included."""
        return any(self.includes(item) for item in items)

    def filter_set(self, items: Any) -> None:
        """Remove from ``items`` every value that is not included."""
        _remove_excluded(self.includes, items)

    def can_provide_exact_values(self) -> bool:
        """Patterns never give an exact list of values."""
        return False

    def exact_values(self) -> BasicSet:
        """Patterns have no exact list of values, so this always raises."""
        if not self.can_provide_exact_values():
            raise ValueError(
                "a pattern filter can't provide exact items, "
                "use can_provide_exact_values() to check first"
            )
        return BasicSet()


def _as_set(values: Iterable[Hashable] | None) -> BasicSet:
    if values is None:
        return BasicSet()
    if isinstance(values, BasicSet):
        return values
    return BasicSet(values)


class SliceFilter:
    """Include values found in the include set (or any, if it is empty) but not excluded."""

    def __init__(
        self,
        include: Iterable[Hashable] | None = None,
        exclude: Iterable[Hashable] | None = None,
    ) -> None:
        self.include = _as_set(include)
        self.exclude = _as_set(exclude)

    @classmethod
    def from_strings(
        cls, include: Iterable[str] = (), exclude: Iterable[str] = ()
    ) -> SliceFilter:
        """Build a filter from lists of strings."""
        return cls(string_set(include), string_set(exclude))

    def includes_anything(self) -> bool:
        """Return True when the filter sets no limits at all."""
        return self.include.is_empty() and self.exclude.is_empty()

    def includes(self, value: Hashable) -> bool:
        """Return True when the value passes the filter."""
        if value in self.exclude:
            return False
        return self.include.is_empty() or value in self.include

    def includes_all_of(self, items: Iterable[Any]) -> bool:
        """Return True when every item is included."""
        return all(self.includes(item) for item in items)

    def includes_any_of(self, items: Iterable[Any]) -> bool:
        """Return True when at least one item is included."""
        return any(self.includes(item) for item in items)

    def filter_set(self, items: Any) -> None:
        """Remove from ``items`` every value that is not included."""
        _remove_excluded(self.includes, items)

    def can_provide_exact_values(self) -> bool:
        """Return True when the included values can be listed exactly."""
        return not self.include.is_empty()

    def exact_values(self) -> BasicSet:
        """Return the included values that are not excluded."""
        if not self.can_provide_exact_values():
            raise ValueError(
                "can't provide exact items, use can_provide_exact_values() to check first"
            )
        return BasicSet(item for item in self.include if item not in self.exclude)