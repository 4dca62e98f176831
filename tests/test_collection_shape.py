"""
Tests for underbar/collection/shape.py

These tests verify zip(), flatten(), intersection(), difference() and shuffle()
on small hand-crafted arrays, including the documented edge cases.
"""

from collections import Counter

import numpy as np
import pytest

from underbar.collection.kernel import MISSING
from underbar.collection.shape import difference, flatten, intersection, shuffle, zip


def test_zip_pads_short_inputs_with_missing():
    """zip(['a','b','c','d'], [1,2,3]) pads the last row with MISSING."""
    assert zip(["a", "b", "c", "d"], [1, 2, 3]) == [
        ["a", 1],
        ["b", 2],
        ["c", 3],
        ["d", MISSING],
    ]


def test_zip_three_inputs_and_edge_cases():
    """Rows follow argument order; no inputs give []."""
    assert zip([1, 2], ["a", "b"], [True, False]) == [[1, "a", True], [2, "b", False]]
    assert zip() == []
    assert zip([], []) == []
    assert zip([], [1]) == [[MISSING, 1]]


def test_flatten_nested_lists():
    """flatten([1,[2,[3,[4]],5]]) == [1,2,3,4,5]."""
    assert flatten([1, [2, [3, [4]], 5]]) == [1, 2, 3, 4, 5]


def test_flatten_edge_cases():
    """Non-arrays pass through; empty arrays vanish; strings are leaves."""
    assert flatten(5) == 5
    assert flatten([]) == []
    assert flatten([1, [], [[]]]) == [1]
    assert flatten(["ab", ("c", ["d"])]) == ["ab", "c", "d"]
    assert flatten([{"a": [1]}]) == [{"a": [1]}]


def test_flatten_does_not_modify_input():
    """The nested input keeps its structure."""
    nested = [1, [2, [3]]]
    flatten(nested)
    assert nested == [1, [2, [3]]]


def test_intersection_three_arrays():
    """intersection([1,2,3],[2,3,4],[3,4,5]) == [3]."""
    assert intersection([1, 2, 3], [2, 3, 4], [3, 4, 5]) == [3]


def test_intersection_keeps_first_array_order_and_duplicates():
    """Order and duplicates come from the first array."""
    assert intersection([3, 1, 3, 2], [1, 2, 3]) == [3, 1, 3, 2]
    assert intersection(["moe", "curly", "larry"], ["moe", "groucho"]) == ["moe"]
    assert intersection() == []
    assert intersection([1, 2]) == [1, 2]


def test_intersection_strict_equality():
    """Equal-looking lists do not intersect; shared objects do."""
    shared = [0]
    assert intersection([shared, [1]], [shared, [1]]) == [shared]


def test_difference():
    """difference([1,2,3,4],[2,4]) == [1,3]."""
    assert difference([1, 2, 3, 4], [2, 4]) == [1, 3]
    assert difference([1, 2, 3, 4, 5], [5, 2, 10], [1]) == [3, 4]
    assert difference([1, 1, 2]) == [1, 1, 2]


def test_shuffle_returns_permutation_and_leaves_input():
    """shuffle returns the same multiset and leaves the original unchanged."""
    original = [1, 2, 2, 3, 4, 5, 6, 7, 8, 9]
    snapshot = list(original)

    shuffled = shuffle(original, rng=np.random.default_rng(123))

    assert shuffled is not original
    assert original == snapshot
    assert Counter(shuffled) == Counter(original)


def test_shuffle_small_inputs():
    """Empty and single-element arrays come back as copies."""
    assert shuffle([]) == []
    single = [1]
    result = shuffle(single)
    assert result == [1]
    assert result is not single


def test_shuffle_seed_reproducibility():
    """The same seed produces the same permutation."""
    values = list(range(20))
    first = shuffle(values, rng=np.random.default_rng(9))
    second = shuffle(values, rng=np.random.default_rng(9))
    assert first == second


def test_shuffle_reaches_every_permutation_of_three():
    """All 6 orderings of [1,2,3] occur, including the identity."""
    rng = np.random.default_rng(2024)
    seen = {tuple(shuffle([1, 2, 3], rng=rng)) for _ in range(600)}
    assert len(seen) == 6
    assert (1, 2, 3) in seen


@pytest.mark.parametrize(
    "arrays, expected",
    [
        ((np.array([1, 2, 3]), [2, 3]), [2, 3]),
        (([1, 2, 3], np.array([3, 1])), [1, 3]),
        ((range(5), (3, 4, 9)), [3, 4]),
        (("abc", "cab", ["b"]), ["b"]),
    ],
)
def test_intersection_over_non_list_sequences(arrays, expected):
    """intersection matches elements of arrays, ranges, tuples and strings by value."""
    assert intersection(*arrays) == expected


@pytest.mark.parametrize(
    "array, others, expected",
    [
        (np.array([1, 2, 3]), ([2],), [1, 3]),
        ([1, 2, 3], (np.array([1, 3]),), [2]),
        (range(4), ((0, 3),), [1, 2]),
        ("abcd", ("bd",), ["a", "c"]),
    ],
)
def test_difference_over_non_list_sequences(array, others, expected):
    """difference matches elements of arrays, ranges, tuples and strings by value."""
    assert difference(array, *others) == expected
