# secrets_searcher

Building blocks for tools that search source code for secrets and report on
what they find.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

### `secrets_searcher.manip`

- `sets.BasicSet` and `sets.string_set`: a thread-safe set with sorted string
  views of its values.
- `slices`: `slices_are_equal`, `string_values_equal_after_sort`,
  `first_duplicate` and `slice_contains`.
- `text`: `count_runes`, `truncate` and `make_one_line`.
- `ranges`: `LineRange`, `LineRangeValue` and `FileRange` for character spans
  and line/column spans. This module also provides `find_line_range` and
  `line_range_from_file_range`.
- `code_context`: `create_code_context` widens a code span to the
  non-whitespace text around it. `code_context` splits that context into a
  "before" span and an "after" span.
- `regexp_set.RegexpSet`: a set of compiled patterns that can be matched
  together.
- `filters`: `SliceFilter` filters on exact values. `RegexpFilter` filters on
  patterns. Both take include and exclude rules.
- `params`: `Param` and `StructParams` describe the dotted path names of fields
  in nested configuration objects. Tag-driven renaming and squashing are
  supported.

### `secrets_searcher.reporter`

- `model`: data classes for a report (`SecretData`, `FindingData`,
  `ExtraData`, `LinkData` and `ReportData`). This module also has helpers that
  assemble the data, group it and filter it.
- `writer.Reporter`: writes the HTML report and one directory per secret. Each
  secret directory holds the raw value and a YAML metadata file. The reporter
  can also archive a copy of the report directory with a timestamp.

## Example

```python
from secrets_searcher.manip.ranges import find_line_range
from secrets_searcher.manip.code_context import create_code_context

contents = ' "code" '
code_range = find_line_range(contents, "code")
context = create_code_context(contents, code_range, -1)
print(context.extract_value(contents).value)  # "code" with its quotes
```