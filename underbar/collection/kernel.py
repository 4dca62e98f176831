"""
The iteration kernel: one traversal primitive for sequences and mappings.

**Conceptual**: Every collection operation in this package (filter, map, reduce,
extend, sort_by, ...) visits elements through a single function, each(). It is
the only place that decides whether a value is an ordered sequence or a keyed
mapping. The decision is made once, by as_collection(), and recorded as an
explicit variant (SequenceCollection or MappingCollection) so that each()
branches on the variant instead of probing the raw value again.

**Dispatch rule** (the Python rendition of "has a length -> sequence"):
  1. An already-wrapped variant passes through unchanged.
  2. Any collections.abc.Mapping (dict, OrderedDict, MappingProxyType, ...) is a
     MappingCollection. This check comes first because Python mappings also
     have a length.
  3. Any other value with a length (list, tuple, str, range, numpy arrays, ...)
     is a SequenceCollection, addressed by integer index 0..len-1.
  4. Anything else fails with TypeError, Python's natural error for
     "this is not a collection".

This module also holds the small vocabulary the other operations share: the
MISSING marker, strict (===-style) equality, field projection and the
nested-array test.
"""

import numbers
from collections.abc import Mapping, Sequence, Sized
from dataclasses import dataclass
from typing import Any, Callable, Union

import numpy as np

Visitor = Callable[[Any, Any, Any], Any]


class _Missing:
    """Type of the MISSING singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()
"""
Marker for "no value here".

Returned by out-of-range reads (zip() rows of a short input, first()/last() of
an empty list) and by get_field() for absent fields. Falsy, compares equal only
to itself, and distinct from None so that a stored None is still a value.
"""


@dataclass(frozen=True)
class SequenceCollection:
    """Ordered, length-bearing, index-addressable collection."""
    items: Any


@dataclass(frozen=True)
class MappingCollection:
    """Key/value collection traversed in the mapping's own key order."""
    items: Mapping


Collection = Union[SequenceCollection, MappingCollection]


def as_collection(value: Any) -> Collection:
    """
    Classify a raw value as a SequenceCollection or MappingCollection.

    Args:
        value: A mapping, a sized sequence-like object, or an already-wrapped variant.

    Returns:
        The matching variant wrapping value.

    Raises:
        TypeError: If value is neither a mapping nor has a length.
    """
    if isinstance(value, (SequenceCollection, MappingCollection)):
        return value
    if isinstance(value, Mapping):
        return MappingCollection(value)
    if isinstance(value, Sized):
        return SequenceCollection(value)
    raise TypeError(
        f"Expected a sequence or a mapping, got {type(value).__name__}"
    )


def each(collection: Any, visitor: Visitor) -> None:
    """
    Call visitor(value, key, source) for every element of a collection.

    **Conceptual**: This is the traversal primitive the rest of the package is
    built from. It has no return value; it only runs the visitor.

    **Functionally**:
    - SequenceCollection: visits indices 0..len-1 in order, passing
      (items[i], i, items).
    - MappingCollection: visits every key once in the mapping's iteration order
      (insertion order for dict), passing (items[key], key, items).
    - Empty input: zero visits, no error.
    - The third argument is the raw underlying object, not the variant wrapper.

    **Edge cases**:
    - The sequence length is read once, before the first visit. A visitor that
      appends to the sequence does not extend the traversal; one that removes
      elements makes later index reads fail with IndexError.

    Args:
        collection: Raw sequence/mapping or a Collection variant.
        visitor: Callable taking (value, key_or_index, source).
    """
    variant = as_collection(collection)
    items = variant.items
    if isinstance(variant, SequenceCollection):
        for index in range(len(items)):
            visitor(items[index], index, items)
    else:
        for key in list(items):
            visitor(items[key], key, items)


def identity(value: Any) -> Any:
    """Return value unchanged (the default iterator for every/some)."""
    return value


def values_of(collection: Any) -> list:
    """List of a collection's values, in each() order."""
    result = []
    each(collection, lambda value, key, source: result.append(value))
    return result


def is_array(value: Any) -> bool:
    """
    True for list and tuple values.

    Used where nested arrays must be told apart from leaves (flatten) and where a
    sequence is already in list form (sort_by). Strings are sized but are not
    arrays: flattening "abc" would otherwise never terminate.
    """
    return isinstance(value, (list, tuple))


_BOOLEANS = (bool, np.bool_)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Identity-style equality, the analogue of JavaScript's ===.

    **Rules**:
    - Primitives (None, bools, numbers, str, bytes) compare by value.
    - Numbers are anything registered as numbers.Number, numpy scalars
      included, and compare across types (1 equals 1.0 equals np.int64(1)).
    - A bool (Python or numpy) only equals another bool: True does not equal 1.
    - NaN equals nothing, itself included.
    - Everything else (lists, dicts, objects) compares by identity only, so two
      lists with the same contents are not strictly equal.

    Reading an element of a numpy array creates a new scalar object on every
    read, so numeric elements must never fall back to identity.
    """
    if isinstance(left, _BOOLEANS) or isinstance(right, _BOOLEANS):
        return (
            isinstance(left, _BOOLEANS)
            and isinstance(right, _BOOLEANS)
            and bool(left) == bool(right)
        )
    if isinstance(left, numbers.Number) and isinstance(right, numbers.Number):
        # NaN != NaN already, so no special case is needed here.
        return bool(left == right)
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, bytes) and isinstance(right, bytes):
        return left == right
    return left is right


def get_field(obj: Any, name: Any) -> Any:
    """
    Read a named field from an element, MISSING when absent.

    - Mappings: obj.get(name, MISSING).
    - Sequences with an integer name: obj[name] for 0 <= name < len(obj), else
      MISSING. Negative indices are absent fields, not reads from the end.
    - Anything else: getattr(obj, name, MISSING) for string names.

    Used by pluck() and by sort_by() when given a field name.
    """
    if isinstance(obj, Mapping):
        return obj.get(name, MISSING)
    if isinstance(name, int) and not isinstance(name, bool) and isinstance(obj, Sequence):
        if 0 <= name < len(obj):
            return obj[name]
        return MISSING
    if isinstance(name, str):
        return getattr(obj, name, MISSING)
    return MISSING


def field_accessor(name: Any) -> Callable[[Any], Any]:
    """Wrap a field name into a one-argument key function."""
    def accessor(obj: Any) -> Any:
        return get_field(obj, name)
    return accessor
