"""
Sorting a collection's values by an extracted key.

**Conceptual**: sort_by() is a randomized quicksort with a three-way partition.
At each step it picks a pivot uniformly at random, extracts the pivot's key, and
splits the values into three buckets: keys below the pivot key, keys equal to
it, and keys above it. The outer buckets are sorted recursively and the three
are concatenated. Random pivots make the expected recursion depth logarithmic
whatever the input order, so already-sorted input is not a worst case.

**Undefined keys**: a key that is MISSING, None or NaN is "undefined". Such keys
cannot be meaningfully compared with < or >, so they are routed explicitly:
  - if the pivot key is undefined, every defined key goes to the less bucket;
  - otherwise an undefined element key goes to the greater bucket.
The net effect is that elements with undefined keys sort after all others.

**Ordering of equal keys**: every bucket is filled in input order, so elements
with equal keys keep their relative input order. This follows from the
partition scheme; callers should rely on equal keys being grouped, not on a
formal stability guarantee.

**Teaching note**: keys are recomputed at every partition step rather than
cached. For cheap key functions (field access) this is simpler and fast enough;
an expensive key function pays O(n log n) calls on average.
"""

import math
import numbers
from typing import Any, Callable

import numpy as np

from underbar.collection.kernel import (
    MISSING,
    each,
    field_accessor,
    is_array,
    strict_equals,
    values_of,
)
from underbar.utils.rng import random_index


def _is_undefined(key: Any) -> bool:
    # NaN is unordered against everything, itself included.
    return key is MISSING or key is None or (isinstance(key, numbers.Real) and math.isnan(key))


def _keys_equal(left: Any, right: Any) -> bool:
    if _is_undefined(left) or _is_undefined(right):
        return _is_undefined(left) and _is_undefined(right)
    return strict_equals(left, right) or left == right


def sort_by(
    collection: Any,
    key_or_fn: Any,
    *,
    rng: np.random.Generator | None = None,
) -> list:
    """
    Sort a collection's values by a key function or field name.

    **Functionally**:
    - Input: a sequence, or a mapping (its values are sorted, in each() order).
    - key_or_fn: a one-argument callable, or a field name that is projected with
      get_field (dict key, attribute, or list index).
    - Output: a new list; the input is not modified.
    - Keys are compared with their natural ordering (<, >, ==). Mixed key types
      that Python cannot order raise TypeError.

    **Edge cases**:
    - Zero or one value: returned as a list unchanged.
    - All keys equal: one partition step, input order kept.
    - Undefined keys (MISSING, None, NaN) sort last.

    Args:
        collection: Sequence or mapping of values to sort.
        key_or_fn: Key function or field name.
        rng: numpy Generator for pivot choice (default: the shared generator).

    Returns:
        The sorted list of values.

    Example:
        >>> sort_by([{"a": 3}, {"a": 1}, {"a": 2}], "a")
        [{'a': 1}, {'a': 2}, {'a': 3}]
    """
    values = list(collection) if is_array(collection) else values_of(collection)
    key = key_or_fn if callable(key_or_fn) else field_accessor(key_or_fn)
    return _quicksort(values, key, rng)


def _quicksort(values: list, key: Callable[[Any], Any], rng: np.random.Generator | None) -> list:
    if len(values) <= 1:
        return values

    pivot = key(values[random_index(len(values) - 1, rng)])
    less, equal, greater = [], [], []

    def partition(value, index, source):
        extracted = key(value)
        if _keys_equal(extracted, pivot):
            equal.append(value)
        elif _is_undefined(pivot):
            less.append(value)
        elif _is_undefined(extracted):
            greater.append(value)
        elif extracted < pivot:
            less.append(value)
        else:
            greater.append(value)

    each(values, partition)
    return _quicksort(less, key, rng) + equal + _quicksort(greater, key, rng)
