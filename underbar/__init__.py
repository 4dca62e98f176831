"""
underbar – a small functional-utility kernel.

Generic operations for iterating, transforming, filtering, reducing and
reshaping collections (sequences or mappings), plus function decorators that
change how a callable is invoked. Everything is exposed here as one flat
namespace:

    import underbar as _

    _.each({"a": 1}, lambda value, key, source: print(key, value))
    _.sort_by(people, "age")
    throttled = _.throttle(refresh, 100)

Note that filter, map and zip are exported under their plain names and shadow
the builtins if star-imported.
"""

from underbar.collection.kernel import (
    MISSING,
    Collection,
    MappingCollection,
    SequenceCollection,
    as_collection,
    each,
    get_field,
    identity,
    is_array,
    strict_equals,
)
from underbar.collection.merge import defaults, extend
from underbar.collection.reduce import contains, every, reduce, some
from underbar.collection.shape import difference, flatten, intersection, shuffle, zip
from underbar.collection.sorting import sort_by
from underbar.collection.transforms import (
    filter,
    first,
    index_of,
    invoke,
    last,
    map,
    pluck,
    reject,
    uniq,
)
from underbar.functions.decorators import delay, memoize, once
from underbar.functions.throttle import throttle
from underbar.utils.errors import EmptyCollectionError, UnderbarError
from underbar.utils.time import (
    Clock,
    FrozenClock,
    RealClock,
    Scheduler,
    TimerScheduler,
    VirtualScheduler,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "Collection",
    "SequenceCollection",
    "MappingCollection",
    "as_collection",
    "each",
    "identity",
    "get_field",
    "is_array",
    "strict_equals",
    "first",
    "last",
    "index_of",
    "filter",
    "reject",
    "map",
    "pluck",
    "invoke",
    "uniq",
    "reduce",
    "contains",
    "every",
    "some",
    "extend",
    "defaults",
    "once",
    "memoize",
    "delay",
    "throttle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
    "shuffle",
    "UnderbarError",
    "EmptyCollectionError",
    "Clock",
    "Scheduler",
    "RealClock",
    "FrozenClock",
    "TimerScheduler",
    "VirtualScheduler",
]
