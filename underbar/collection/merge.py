"""
Shallow merging of key/value objects.

**Side effect warning**: unlike the rest of the package, extend() and defaults()
mutate their first argument in place and return that same object, not a copy.
Pass a fresh dict as the target to merge without touching existing ones:

    merged = extend({}, base, overrides)

Sources are traversed with each(), so a source may also be a list or tuple, in
which case its indices become keys.
"""

from typing import Any, MutableMapping

from underbar.collection.kernel import each


def extend(target: MutableMapping, *sources: Any) -> MutableMapping:
    """
    Copy every key/value pair of each source onto target.

    Sources are applied left to right, so a later source overwrites keys set by
    an earlier one (and keys already in target).

    Example:
        settings = {"key1": "something"}
        extend(settings, {"key2": "new", "key3": "else"}, {"bla": "more"})
        # settings now has key1, key2, key3 and bla

    Returns:
        target itself, mutated.
    """
    def assign(value, key, source):
        target[key] = value

    each(sources, lambda source, position, all_sources: each(source, assign))
    return target


def defaults(target: MutableMapping, *sources: Any) -> MutableMapping:
    """
    Fill in keys that target does not have yet.

    Same traversal as extend(), but a key is only written if it is absent from
    target at the time of the check. target's own keys are never overwritten and
    the first source to supply a missing key wins.

    Returns:
        target itself, mutated.
    """
    def assign_if_absent(value, key, source):
        if key not in target:
            target[key] = value

    each(sources, lambda source, position, all_sources: each(source, assign_if_absent))
    return target
