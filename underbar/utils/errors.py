"""
Error classes raised by the kernel.

The kernel prefers well-defined edge-case behavior over exceptions (out-of-range
reads give MISSING, empty inputs give empty results). The few errors it raises
itself derive from UnderbarError so callers can catch them as a family. Malformed
input (a value that is neither a sequence nor a mapping, an unhashable memoize
argument, a missing method in invoke) is left to Python's own TypeError,
KeyError or AttributeError.
"""


class UnderbarError(Exception):
    """Base class for errors raised by the underbar package."""


class EmptyCollectionError(UnderbarError, ValueError):
    """
    Raised by reduce() on an empty collection when no initial value is given.

    There is no first element to seed the accumulator with, so there is no
    meaningful result. Subclasses ValueError so callers treating it as a bad
    argument still catch it.
    """
