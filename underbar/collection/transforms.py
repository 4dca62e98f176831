"""
Element-wise transforms: projections, filters, maps and de-duplication.

Every function here builds a fresh list through each() and leaves its input
untouched. Results follow each() order: index order for sequences, key order
for mappings (filter/reject/map/pluck/invoke accept both).

**Teaching note**: map() is the workhorse. pluck() is map() with a field
projection and invoke() is map() with a method call. Once each() exists, most
of this module is a one-line accumulation over it.
"""

from typing import Any, Callable, Iterable

from underbar.collection.kernel import MISSING, each, get_field, strict_equals
from underbar.collection.reduce import some


def first(array: Any, n: int | None = None) -> Any:
    """
    First element of an array, or a list of the first n elements.

    **Edge cases**:
    - Empty array with n omitted: MISSING.
    - n larger than the array: the whole array (as a list).
    - n == 0: [].
    """
    if n is None:
        return array[0] if len(array) > 0 else MISSING
    return list(array[:max(n, 0)])


def last(array: Any, n: int | None = None) -> Any:
    """
    Last element of an array, or a list of the last n elements.

    **Edge cases**:
    - Empty array with n omitted: MISSING.
    - n < 1: [] (a plain array[-0:] would return everything).
    - n larger than the array: the whole array (as a list).
    """
    if n is None:
        return array[len(array) - 1] if len(array) > 0 else MISSING
    if n < 1:
        return []
    return list(array[-n:])


def index_of(array: Any, target: Any) -> int:
    """Index of the first element strictly equal to target, or -1."""
    result = -1

    def visit(item, index, source):
        nonlocal result
        if result == -1 and strict_equals(item, target):
            result = index

    each(array, visit)
    return result


def filter(collection: Any, test: Callable[[Any, Any, Any], Any]) -> list:
    """Values for which test(value, key, source) is truthy, in each() order."""
    result = []

    def visit(value, key, source):
        if test(value, key, source):
            result.append(value)

    each(collection, visit)
    return result


def reject(collection: Any, test: Callable[[Any, Any, Any], Any]) -> list:
    """Values for which test(value, key, source) is falsy; the complement of filter()."""
    return filter(collection, lambda value, key, source: not test(value, key, source))


def map(collection: Any, iterator: Callable[[Any, Any, Any], Any]) -> list:
    """
    Apply iterator(value, key, source) to every element and collect the results.

    **Functionally**:
    - Output length equals input length.
    - Output order follows each() order.
    - iterator may ignore the key/source arguments, but must accept them:
      a one-argument function should be wrapped, or use pluck()/invoke().
    """
    result = []
    each(collection, lambda value, key, source: result.append(iterator(value, key, source)))
    return result


def pluck(collection: Any, field: Any) -> list:
    """
    Project one field out of every element.

    E.g. pluck(people, "age") takes a list of people and returns a list of just
    their ages. Dict elements are read by key, other objects by attribute, and
    list/tuple elements by integer index. Absent fields give MISSING.
    """
    return map(collection, lambda value, key, source: get_field(value, field))


def invoke(collection: Any, function_or_name: Any, args: Iterable[Any] = ()) -> list:
    """
    Call a function or a named method on every element.

    **Functionally**:
    - Callable function_or_name: function_or_name(value, *args). The element
      takes the receiver position, i.e. the first positional argument, which is
      where Python puts self.
    - Anything else is a method name: getattr(value, name)(*args).

    Raises:
        AttributeError: If an element has no attribute of that name.
        TypeError: If the attribute is not callable.
    """
    forwarded = tuple(args)
    if callable(function_or_name):
        return map(collection, lambda value, key, source: function_or_name(value, *forwarded))
    return map(
        collection,
        lambda value, key, source: getattr(value, function_or_name)(*forwarded),
    )


def uniq(array: Any) -> list:
    """
    Duplicate-free copy of an array, keeping first occurrences in order.

    An element is dropped if and only if an earlier element is strictly equal to
    it: uniq([1, 2, 1, 3, 2]) == [1, 2, 3], while two distinct lists with the
    same contents are both kept. NaN is strictly equal to nothing, so every NaN
    is kept.
    """
    def is_first_occurrence(value, index, source):
        return not some(first(source, index), lambda prior: strict_equals(prior, value))

    return filter(array, is_first_occurrence)
