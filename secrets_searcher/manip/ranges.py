"""Character ranges within a line and ranges spanning lines of a file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineRange:
    """A half-open span of character indexes ``[start_index, end_index)``."""

    start_index: int
    end_index: int

    def __post_init__(self) -> None:
        if self.end_index < self.start_index:
            raise ValueError(
                "end index must be equal or greater than start index "
                f"({self.start_index} >= {self.end_index})"
            )

    def shifted(self, by: int) -> LineRange:
        """Return the same range moved by ``by`` characters."""
        return LineRange(self.start_index + by, self.end_index + by)

    def with_value(self, value: str) -> LineRangeValue:
        """Pair this range with a value."""
        return LineRangeValue(line_range=self, value=value)

    def extract_value(self, text: str) -> LineRangeValue:
        """Pair this range with the part of ``text`` that it covers."""
        return self.with_value(text[self.start_index : self.end_index])

    def __len__(self) -> int:
        return self.end_index - self.start_index

    def has_content(self) -> bool:
        """Return True when the range covers at least one character."""
        return self.start_index < self.end_index

    def overlaps(self, other: LineRange) -> bool:
        """Return True when both ranges have content and touch or overlap."""
        return (
            self.has_content()
            and other.has_content()
            and self.end_index >= other.start_index
            and other.end_index >= self.start_index
        )


@dataclass(frozen=True)
class LineRangeValue:
    """A range together with the text it refers to."""

    line_range: LineRange
    value: str


@dataclass(frozen=True)
class FileRange:
    """A span from one line and column of a file to another (lines from 1)."""

    start_line_num: int
    start_index: int
    end_line_num: int
    end_index: int

    def __post_init__(self) -> None:
        if self.end_line_num < self.start_line_num:
            raise ValueError("end line num must be equal or greater than start line num")
        if self.end_line_num == self.start_line_num and self.end_index < self.start_index:
            raise ValueError("end index must be equal or greater than start index")

    @classmethod
    def from_line_range(cls, line_range: LineRange, line_num: int) -> FileRange:
        """Build a single-line file range from a line range."""
        return cls(line_num, line_range.start_index, line_num, line_range.end_index)

    def overlaps(self, other: FileRange) -> bool:
        """Return True when the two ranges share any position."""
        if not self.lines_overlap(other):
            return False

        single_same_line = (
            self.start_line_num == self.end_line_num
            and other.start_line_num == other.end_line_num
            and self.start_line_num == other.start_line_num
        )
        if single_same_line:
            return LineRange(self.start_index, self.end_index).overlaps(
                LineRange(other.start_index, other.end_index)
            )
        if other.start_line_num == self.end_line_num:
            return other.start_index <= self.end_index
        if other.end_line_num == self.start_line_num:
            return other.end_index >= self.start_index
        return True

    def lines_overlap(self, other: FileRange) -> bool:
        """Return True when the two ranges share at least one line."""
        return (
            self.end_line_num >= other.start_line_num
            and other.end_line_num >= self.start_line_num
        )


def find_line_range(text: str, sub: str) -> LineRange | None:
    """Return the range of the first occurrence of ``sub``, or None."""
    index = text.find(sub)
    if index == -1:
        return None
    return LineRange(index, index + len(sub))


def _joined_length(lines: list[str]) -> int:
    """Length of the lines with one line break after each."""
    return sum(len(line) for line in lines) + len(lines)


def line_range_from_file_range(file_range: FileRange, content: str) -> LineRange:
    """Convert a file range to character indexes within ``content``."""
    if file_range.start_line_num == 1 and file_range.end_line_num == 1:
        return LineRange(file_range.start_index, file_range.end_index)

    lines = content.split("\n")
    start = file_range.start_line_num
    end = file_range.end_line_num

    before_len = _joined_length(lines[: start - 1])
    start_line_len = len(lines[start - 1]) + 1

    if start == end:
        return LineRange(
            before_len + file_range.start_index, before_len + file_range.end_index
        )

    middle_len = _joined_length(lines[start : end - 1])
    return LineRange(
        before_len + file_range.start_index,
        before_len + start_line_len + middle_len + file_range.end_index,
    )