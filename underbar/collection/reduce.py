"""
Folding a collection into one value, and the boolean queries built on it.

reduce() is a left fold driven by each(). contains(), every() and some() are
expressed in terms of reduce() (and some() in terms of every(), via De Morgan),
so none of them re-implements traversal.

**Teaching note**: none of these short-circuit. contains() keeps scanning after
a match and every() keeps folding after the first failure. That costs time on
long inputs but never changes a result. every() stops calling its predicate
once the fold has turned False; it still visits the remaining elements.
"""

from typing import Any, Callable

from underbar.collection.kernel import MISSING, each, identity, strict_equals
from underbar.utils.errors import EmptyCollectionError


def reduce(collection: Any, iterator: Callable[[Any, Any], Any], initial: Any = MISSING) -> Any:
    """
    Fold a collection left-to-right into a single value.

    **Conceptual**: Start from an accumulator and repeatedly replace it with
    iterator(accumulator, value) for each value visited by each(). The key is
    not passed to the iterator.

    **Functionally**:
    - With initial: every value is folded, starting from initial.
    - Without initial: the first visited value (first element of a sequence,
      value at the first key of a mapping) seeds the accumulator and folding
      continues from the second value. So reduce([1, 2, 3], add) == 6.

    **Edge cases**:
    - Empty collection with initial: returns initial, iterator never called.
    - Empty collection without initial: raises EmptyCollectionError.
    - Single element without initial: returns that element, iterator never called.

    Args:
        collection: Sequence or mapping.
        iterator: Callable (accumulator, value) -> new accumulator.
        initial: Starting accumulator; omit to seed from the first value.

    Returns:
        The final accumulator.

    Raises:
        EmptyCollectionError: If the collection is empty and initial is omitted.
    """
    accumulator = initial
    seeded = initial is not MISSING

    def fold(value, key, source):
        nonlocal accumulator, seeded
        if not seeded:
            accumulator = value
            seeded = True
        else:
            accumulator = iterator(accumulator, value)

    each(collection, fold)

    if not seeded:
        raise EmptyCollectionError(
            "reduce() of an empty collection with no initial value"
        )
    return accumulator


def contains(collection: Any, target: Any) -> bool:
    """True if any value of the collection is strictly equal to target."""
    return reduce(
        collection,
        lambda was_found, item: True if was_found else strict_equals(item, target),
        False,
    )


def every(collection: Any, predicate: Callable[[Any], Any] | None = None) -> bool:
    """
    True if predicate(value) is truthy for every value (True for empty input).

    The predicate defaults to identity, testing the values' own truthiness. The
    result is always a bool, never the raw truthy/falsy value.
    """
    if predicate is None:
        predicate = identity
    return reduce(
        collection,
        lambda result_so_far, item: bool(result_so_far and predicate(item)),
        True,
    )


def some(collection: Any, predicate: Callable[[Any], Any] | None = None) -> bool:
    """
    True if predicate(value) is truthy for at least one value (False for empty input).

    Defined as not every(collection, not predicate).
    """
    if predicate is None:
        predicate = identity
    return not every(collection, lambda item: not predicate(item))
