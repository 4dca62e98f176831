"""
Operations that combine or reshape whole arrays.

zip() lines several arrays up by index, flatten() collapses nesting, and
intersection()/difference() treat arrays as (ordered, duplicate-preserving)
sets under strict equality. shuffle() returns a random permutation.

All of them return new lists and leave their inputs untouched. Membership
tests use some()/every() from the reduce module, so they scan fully rather than
stopping at the first match; that is quadratic in the worst case and fine for
the small arrays this kernel targets.
"""

from typing import Any

import numpy as np

from underbar.collection.kernel import MISSING, each, is_array, strict_equals
from underbar.collection.reduce import every, reduce, some
from underbar.collection.transforms import filter, map
from underbar.utils.log import get_logger
from underbar.utils.rng import random_index

logger = get_logger(__name__)


def zip(*arrays: Any) -> list:
    """
    Group elements of several arrays by index.

    **Functionally**:
    - Result length is the length of the longest input.
    - Row i holds the i-th element of every input, in argument order.
    - Inputs shorter than row i contribute MISSING, not an error.
    - No inputs: [].

    Example:
        >>> zip(["a", "b", "c", "d"], [1, 2, 3])
        [['a', 1], ['b', 2], ['c', 3], ['d', MISSING]]
    """
    if not arrays:
        return []
    max_length = reduce(map(arrays, lambda array, index, source: len(array)), max)
    rows = []
    for row in range(max_length):
        rows.append(map(
            arrays,
            lambda array, index, source: array[row] if row < len(array) else MISSING,
        ))
    return rows


def flatten(nested: Any) -> Any:
    """
    Collapse arbitrarily nested lists/tuples into one flat list.

    **Functionally**:
    - Depth-first, left-to-right: flatten([1, [2, [3, [4]], 5]]) == [1, 2, 3, 4, 5].
    - A value that is not a list/tuple is returned unchanged: flatten(5) == 5.
    - Strings and dicts are leaves, not arrays.

    **Edge cases**:
    - Empty arrays vanish: flatten([1, [], [[]]]) == [1].
    - A self-referential list recurses until Python's recursion limit
      (RecursionError); there is no cycle detection.
    """
    if not is_array(nested):
        return nested

    def concat(accumulator, value):
        flattened = flatten(value)
        if is_array(value):
            accumulator.extend(flattened)
        else:
            accumulator.append(flattened)
        return accumulator

    return reduce(nested, concat, [])


def _contains_strictly(array: Any, target: Any) -> bool:
    return some(array, lambda item: strict_equals(item, target))


def intersection(*arrays: Any) -> list:
    """
    Elements of the first array present in every array.

    Order and duplicates come from the first array; no implicit de-duplication:
    intersection([1, 1, 2], [1]) == [1, 1]. No arguments: [].
    """
    if not arrays:
        return []
    return filter(
        arrays[0],
        lambda item, index, source: every(arrays, lambda array: _contains_strictly(array, item)),
    )


def difference(array: Any, *others: Any) -> list:
    """
    Elements of array that appear in none of the other arrays.

    Order and duplicates come from array: difference([1, 2, 3, 4], [2, 4]) == [1, 3].
    With no other arrays, a copy of array.
    """
    return filter(
        array,
        lambda item, index, source: every(
            others, lambda other: not _contains_strictly(other, item)
        ),
    )


def shuffle(array: Any, *, rng: np.random.Generator | None = None) -> list:
    """
    Uniformly random permutation of an array, as a new list.

    **Conceptual**: Fisher-Yates. Walk i from the last index down to 1; at each
    step swap position i with a position j drawn uniformly from [0, i], both ends
    included. Including i itself is what makes every permutation equally likely
    (excluding it would only ever produce single-cycle permutations).

    **Edge cases**:
    - Empty or single-element array: a copy, unchanged.
    - The input array is never modified.

    Args:
        array: Sequence to permute.
        rng: numpy Generator for the swap indices (default: the shared generator).

    Returns:
        A new list containing the same elements in random order.
    """
    shuffled = []
    each(array, lambda value, index, source: shuffled.append(value))
    for i in range(len(shuffled) - 1, 0, -1):
        j = random_index(i, rng)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    logger.debug("Shuffled %d elements", len(shuffled))
    return shuffled
