"""
Tests for underbar/functions/decorators.py

These tests verify once() and memoize() call counting and caching, and that
delay() hands exactly one deferred call to the scheduler without blocking.
Timing is driven by a VirtualScheduler, so nothing here sleeps.
"""

import pytest

from underbar.functions.decorators import delay, memoize, once
from underbar.utils.time import VirtualScheduler


def test_once_calls_function_exactly_once():
    """Three calls with different arguments run the function once."""
    calls = []

    def add(a, b):
        calls.append((a, b))
        return a + b

    add_once = once(add)

    assert add_once(1, 2) == 3
    assert add_once(10, 20) == 3
    assert add_once(100, 200) == 3
    assert calls == [(1, 2)]


def test_once_caches_none_result():
    """A None result still counts as the first call."""
    calls = []
    wrapped = once(lambda: calls.append(1))

    assert wrapped() is None
    assert wrapped() is None
    assert calls == [1]


def test_once_retries_after_exception():
    """A raising first call leaves the wrapper uncalled."""
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("first attempt fails")
        return "ok"

    wrapped = once(flaky)
    with pytest.raises(RuntimeError):
        wrapped()
    assert wrapped() == "ok"
    assert wrapped() == "ok"
    assert len(attempts) == 2


def test_once_forwards_receiver_and_kwargs():
    """Used as a method, the instance reaches the wrapped function."""

    class Counter:
        def __init__(self):
            self.value = 0

        @once
        def bump(self, amount=1):
            self.value += amount
            return self.value

    counter = Counter()
    assert counter.bump(amount=5) == 5
    assert counter.bump(amount=7) == 5
    assert counter.value == 5


def test_once_wrappers_do_not_share_state():
    """Wrapping the same function twice gives independent wrappers."""
    first = once(lambda x: x)
    second = once(lambda x: x)
    assert first(1) == 1
    assert second(2) == 2


def test_once_preserves_metadata():
    """functools.wraps keeps the wrapped function's name and docstring."""

    def documented():
        """Docs."""

    wrapped = once(documented)
    assert wrapped.__name__ == "documented"
    assert wrapped.__doc__ == "Docs."


def test_memoize_calls_function_once_per_argument():
    """Repeated calls with the same argument hit the cache."""
    calls = []

    def square(n):
        calls.append(n)
        return n * n

    fast_square = memoize(square)

    assert fast_square(4) == 16
    assert fast_square(4) == 16
    assert fast_square(5) == 25
    assert calls == [4, 5]


def test_memoize_fibonacci():
    """A recursive memoized function computes each value once."""
    calls = []

    @memoize
    def fib(n):
        calls.append(n)
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    assert fib(30) == 832040
    assert sorted(calls) == list(range(31))


def test_memoize_caches_none_and_falsy_results():
    """A cached None is still a hit."""
    calls = []

    def nothing(x):
        calls.append(x)
        return None

    wrapped = memoize(nothing)
    wrapped("a")
    wrapped("a")
    assert calls == ["a"]


def test_memoize_unhashable_argument_raises():
    """Lists cannot be cache keys."""
    with pytest.raises(TypeError):
        memoize(len)([1, 2])


def test_delay_runs_once_after_wait():
    """delay() runs the function with its arguments after the wait, once."""
    timeline = VirtualScheduler()
    calls = []

    result = delay(lambda a, b: calls.append((a, b)), 100, "a", "b", scheduler=timeline)

    assert result is None
    assert calls == []
    assert timeline.pending == 1

    timeline.advance(99)
    assert calls == []

    timeline.advance(1)
    assert calls == [("a", "b")]

    timeline.advance(1000)
    assert calls == [("a", "b")]


def test_delay_zero_wait_still_defers():
    """Even a zero wait does not run inline."""
    timeline = VirtualScheduler()
    calls = []
    delay(calls.append, 0, "x", scheduler=timeline)
    assert calls == []
    assert timeline.run_pending() == 1
    assert calls == ["x"]
