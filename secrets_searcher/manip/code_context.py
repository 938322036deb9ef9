"""Find the surrounding non-whitespace text of a piece of code."""

from __future__ import annotations

import re

from secrets_searcher.manip.ranges import LineRange

_WHITESPACE = "\t\n\f\r "
_LEADING_TOKEN_RE = re.compile(r"[^\t\n\f\r ]*")


def _trailing_token_start(text: str) -> int:
    """Index where the run of non-whitespace at the end of text begins."""
    return max(text.rfind(char) for char in _WHITESPACE) + 1


def create_code_context(contents: str, code_range: LineRange, limit: int = -1) -> LineRange:
    """Grow ``code_range`` to the adjoining non-whitespace text.

    A ``limit`` above -1 caps how far to look before the code; one above 1
    caps how far to look after it.
    """
    before_range = LineRange(0, code_range.start_index)
    before_offset = 0
    if limit > -1 and len(before_range) > limit:
        before_offset = len(before_range) - limit
        before_range = LineRange(before_range.end_index - limit, before_range.end_index)
    before_code = before_range.extract_value(contents).value

    after_range = LineRange(code_range.end_index, len(contents))
    if limit > 1 and len(after_range) > limit:
        after_range = LineRange(after_range.start_index, after_range.start_index + limit)
    after_code = after_range.extract_value(contents).value

    start = before_offset + _trailing_token_start(before_code)
    match = _LEADING_TOKEN_RE.match(after_code)
    end = code_range.end_index + (match.end() if match else 0)

    return LineRange(start, end)


def code_context(
    contents: str,
    code_range: LineRange,
    context_range: LineRange | None = None,
    limit: int = -1,
) -> tuple[LineRange, LineRange]:
    """Return the context ranges before and after the code.

    Without a ``context_range`` its start is found the same way as its end.
    """
    generated = create_code_context(contents, code_range, limit)
    if context_range is None:
        context = generated
    else:
        context = LineRange(context_range.start_index, generated.end_index)

    if code_range.start_index < context.start_index:
        raise ValueError("context must start with or before code")
    if code_range.end_index > context.end_index:
        raise ValueError("context must end with or after code")

    before = LineRange(context.start_index, code_range.start_index)
    after = LineRange(code_range.end_index, context.end_index)
    return before, after