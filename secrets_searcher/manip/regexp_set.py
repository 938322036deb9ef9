"""An ordered, thread-safe collection of compiled regular expressions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from secrets_searcher.manip.sets import BasicSet


class RegexpSet:
    """A set of compiled patterns, tried in the order they were added."""

    def __init__(self, patterns: Iterable[re.Pattern] | None = None) -> None:
        self._patterns = BasicSet()
        for pattern in patterns or ():
            self.add(pattern)

    @classmethod
    def from_strings(cls, patterns: Iterable[str]) -> RegexpSet:
        """Compile each pattern string; an invalid one raises ``re.error``."""
        return cls(re.compile(pattern) for pattern in patterns)

    def find_submatch_any(self, text: str) -> list[str] | None:
        """Return the whole match and its groups for the first matching pattern.

        Groups that took no part in the match are given as empty strings.
        Returns None when no pattern matches.
        """
        for pattern in self:
            match = pattern.search(text)
            if match is not None:
                return [match.group(0), *match.groups(default="")]
        return None

    def first_matching(self, text: str) -> re.Pattern | None:
        """Return the first pattern that matches anywhere in text, or None."""
        return next((pattern for pattern in self if pattern.search(text)), None)

    def find_submatch_span(
        self, text: str
    ) -> tuple[list[tuple[int, int]], re.Pattern] | None:
        """Return the spans of the match and its groups, with the pattern used.

        Groups that took no part in the match have the span ``(-1, -1)``.
        Returns None when no pattern matches.
        """
        for pattern in self:
            match = pattern.search(text)
            if match is not None:
                spans = [match.span(index) for index in range(pattern.groups + 1)]
                return spans, pattern
        return None

    def match_any(self, text: str) -> bool:
        """Return True when any pattern matches anywhere in text."""
        return any(pattern.search(text) for pattern in self)

    def add(self, pattern: re.Pattern) -> None:
        """Add a compiled pattern."""
        if not isinstance(pattern, re.Pattern):
            raise TypeError(f"expected a compiled pattern, got {type(pattern).__name__}")
        self._patterns.add(pattern)

    def remove(self, pattern: re.Pattern) -> None:
        """Remove a pattern if present."""
        self._patterns.remove(pattern)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[re.Pattern]:
        return iter(self._patterns)

    def string_values(self) -> list[str]:
        """Return the pattern sources, sorted."""
        return sorted(pattern.pattern for pattern in self)

    def is_empty(self) -> bool:
        """Return True when the set holds no patterns."""
        return self._patterns.is_empty()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({[p.pattern for p in self]!r})"