"""
Tests for underbar/collection/sorting.py

These tests verify sort_by() against Python's sorted() on random inputs, its
handling of field names, mappings and undefined keys, and that elements with
equal keys stay grouped in input order.
"""

import numpy as np

from underbar.collection.kernel import MISSING
from underbar.collection.sorting import sort_by


def test_sort_by_field_name():
    """sort_by([{a:3},{a:1},{a:2}], "a") orders by the field."""
    result = sort_by([{"a": 3}, {"a": 1}, {"a": 2}], "a", rng=np.random.default_rng(0))
    assert result == [{"a": 1}, {"a": 2}, {"a": 3}]


def test_sort_by_identity_matches_sorted_on_large_random_input():
    """Sorting 1000 random numbers by identity equals the builtin sort."""
    data_rng = np.random.default_rng(42)
    values = [int(v) for v in data_rng.integers(-500, 500, size=1000)]

    result = sort_by(values, lambda x: x, rng=np.random.default_rng(1))

    assert result == sorted(values)
    # Input untouched
    assert len(values) == 1000


def test_sort_by_key_function():
    """A key function is applied to each element."""
    words = ["banana", "kiwi", "apple", "fig"]
    assert sort_by(words, len, rng=np.random.default_rng(3)) == ["fig", "kiwi", "apple", "banana"]


def test_sort_by_mapping_sorts_values():
    """A mapping is sorted by its values."""
    ages = {"moe": 40, "larry": 50, "curly": 60, "shemp": 30}
    assert sort_by(ages, lambda x: x, rng=np.random.default_rng(5)) == [30, 40, 50, 60]


def test_sort_by_small_inputs():
    """Zero or one value comes back as is."""
    assert sort_by([], "a") == []
    assert sort_by([{"a": 1}], "a") == [{"a": 1}]


def test_sort_by_keeps_equal_keys_in_input_order():
    """Elements with equal keys appear grouped, in their original order."""
    people = [
        {"name": "a", "age": 30},
        {"name": "b", "age": 20},
        {"name": "c", "age": 30},
        {"name": "d", "age": 20},
        {"name": "e", "age": 30},
    ]
    for seed in range(10):
        result = sort_by(people, "age", rng=np.random.default_rng(seed))
        assert [p["name"] for p in result] == ["b", "d", "a", "c", "e"]


def test_sort_by_undefined_keys_sort_last():
    """Missing fields and None keys go after every defined key."""
    items = [{"a": 2}, {}, {"a": 1}, {"a": None}, {"a": 3}]
    for seed in range(10):
        result = sort_by(items, "a", rng=np.random.default_rng(seed))
        assert result[:3] == [{"a": 1}, {"a": 2}, {"a": 3}]
        assert result[3:] == [{}, {"a": None}]


def test_sort_by_nan_keys_terminate_and_sort_last():
    """NaN keys cannot be ordered; they are treated as undefined."""
    values = [3.0, float("nan"), 1.0, 2.0]
    result = sort_by(values, lambda x: x, rng=np.random.default_rng(11))
    assert result[:3] == [1.0, 2.0, 3.0]
    assert np.isnan(result[3])


def test_sort_by_all_undefined_keys():
    """When every key is undefined the input order is kept."""
    items = [{"x": 1}, {"x": 2}]
    assert sort_by(items, "a", rng=np.random.default_rng(0)) == items


def test_sort_by_does_not_modify_input():
    """The input list keeps its order."""
    values = [3, 1, 2]
    sort_by(values, lambda x: x)
    assert values == [3, 1, 2]


def test_sort_by_get_field_missing_marker():
    """An explicit MISSING key routes to the end like an absent field."""
    result = sort_by([5, 1], lambda x: MISSING if x == 5 else x, rng=np.random.default_rng(2))
    assert result == [1, 5]
