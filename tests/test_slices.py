import pytest

from secrets_searcher.manip.slices import (
    first_duplicate,
    slice_contains,
    slices_are_equal,
    string_values_equal_after_sort,
)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ([1, "x"], [1, "x"], True),
        ([1, 2], [2, 1], False),
        ([1], [1, 2], False),
        (None, None, True),
        (None, [], False),
        ([], None, False),
        ([], [], True),
    ],
)
def test_slices_are_equal(a, b, expected):
    assert slices_are_equal(a, b) is expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (["b", "a"], ["a", "b"], True),
        (["a", "a"], ["a", "b"], False),
        (["a"], ["a", "b"], False),
        (None, None, True),
        (None, ["a"], False),
    ],
)
def test_string_values_equal_after_sort(a, b, expected):
    assert string_values_equal_after_sort(a, b) is expected


def test_string_values_equal_after_sort_leaves_inputs_alone():
    a = ["c", "b", "a"]
    b = ["a", "c", "b"]
    assert string_values_equal_after_sort(a, b) is True
    assert a == ["c", "b", "a"]
    assert b == ["a", "c", "b"]


def test_first_duplicate_found():
    assert first_duplicate(["x", "y", "z", "y", "x"]) == "y"


def test_first_duplicate_none_when_unique():
    assert first_duplicate(["x", "y", "z"]) is None
    assert first_duplicate([]) is None


def test_slice_contains():
    values = ["alpha", "beta"]
    assert slice_contains(values, "beta") is True
    assert slice_contains(values, "gamma") is False
    assert slice_contains([], "alpha") is False