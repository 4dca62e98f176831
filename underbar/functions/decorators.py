"""
Result-caching and deferring decorators: once, memoize, delay.

**Conceptual**: A function decorator takes a callable and returns a new callable
with different invocation semantics, leaving the original untouched. once() and
memoize() each keep private state (a small dataclass) captured by the wrapper
they return. The state lives exactly as long as the wrapper does, and no two
wrappers ever share state, even when they wrap the same function.

**Teaching note**: the wrappers forward *args and **kwargs verbatim. When a
wrapper is stored on a class and called as a method, Python passes the instance
as the first positional argument, so the wrapped function sees the same self it
would have seen undecorated. Note that a once()-wrapped method is once per
wrapper, i.e. once per class, not once per instance.
"""

import functools
from dataclasses import dataclass, field
from typing import Any, Callable

from underbar.utils.log import get_logger
from underbar.utils.time import Scheduler, get_default_scheduler

logger = get_logger(__name__)


@dataclass
class _OnceState:
    already_called: bool = False
    result: Any = None


@dataclass
class _MemoState:
    results: dict = field(default_factory=dict)


def once(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Return a wrapper that calls func at most one time.

    **State machine**:
      NeverCalled --call--> Called(result)
      Called --call--> Called(result)   (func not invoked, arguments ignored)

    **Edge cases**:
    - If the first call raises, the exception propagates and the wrapper stays in
      NeverCalled, so the next call tries again.
    - A first call returning None still counts: later calls return None.

    Example:
        >>> initialize = once(create_connection)
        >>> initialize("a") is initialize("b")   # create_connection ran once
        True
    """
    state = _OnceState()

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not state.already_called:
            state.result = func(*args, **kwargs)
            state.already_called = True
        return state.result

    return wrapper


def memoize(func: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Return a wrapper that caches func's result per argument.

    **Functionally**:
    - Intended for functions of exactly one primitive (hashable) argument.
    - Miss: call func(argument), store and return the result.
    - Hit: return the stored result without calling func.
    - The cache grows without bound; there is no eviction.

    **Edge cases**:
    - Unhashable arguments (lists, dicts) raise TypeError from the dict lookup.
    - Arguments that compare and hash equal share an entry: 1, 1.0 and True all
      hit the same cached result.
    - If func raises, nothing is cached.
    """
    state = _MemoState()

    @functools.wraps(func)
    def wrapper(argument):
        if argument not in state.results:
            logger.debug("memoize miss for %s(%r)", getattr(func, "__name__", func), argument)
            state.results[argument] = func(argument)
        return state.results[argument]

    return wrapper


def delay(
    func: Callable[..., Any],
    wait_ms: float,
    *args: Any,
    scheduler: Scheduler | None = None,
) -> None:
    """
    Call func(*args) once, wait_ms milliseconds from now, without blocking.

    **Functionally**:
    - Returns None immediately; the deferred call happens on the scheduler.
    - The deferred call's return value is discarded.
    - There is no way to cancel the deferred call.

    Example:
        delay(send_reminder, 500, "a", "b")   # send_reminder("a", "b") after 500 ms

    Args:
        func: Callable to run later.
        wait_ms: Delay in milliseconds.
        *args: Positional arguments for func.
        scheduler: Where to schedule the call (default: the process-wide
                   TimerScheduler from get_default_scheduler()).
    """
    scheduler = scheduler or get_default_scheduler()
    logger.debug("delay: %s scheduled in %s ms", getattr(func, "__name__", func), wait_ms)
    scheduler.call_later(wait_ms, lambda: func(*args))
