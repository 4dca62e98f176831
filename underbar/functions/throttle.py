"""
Throttling: at most one real call per time window, plus a trailing call.

**Conceptual**: throttle(func, wait_ms) returns a wrapper g. Calls to g that
arrive faster than once per wait_ms are collapsed: the first call in a window
runs func immediately, and if more calls arrive before the window ends, exactly
one extra call is deferred to the end of the window (the "trailing" call).
Every call to g returns the result of the most recent real call to func.

**Protocol** for a call to g with arguments A at time T:
  1. If g has never called func, or T - time_last_called >= wait_ms:
     call func(*A) now, set time_last_called = T, remember and return the result.
  2. Else, if no deferred call is pending: schedule a re-invocation of g itself
     (not func) with the same arguments A, due wait_ms - (T - time_last_called)
     from now; mark it pending; return the remembered result.
  3. Else (a deferred call is already pending): return the remembered result.
When the deferred call fires it first clears the pending flag and then runs the
protocol from step 1 like any other call.

**Why re-invoke g rather than func?** A manual call may win the race against
the timer. In this timeline (wait_ms = 100):

    t=0    g()  -> func runs (window starts at 0)
    t=50   g()  -> trailing call scheduled for t=100
    t=102  g()  -> func runs if the timer is late (window starts at 102)
    t=102+ timer fires late, re-enters g: now inside the new window, so it
           schedules itself again for t=202 instead of calling func at once

func runs at about 0, 102 and 202, never twice in one window. If the timer is
on time it runs at 0, 100 and 200 instead. Either way it is three calls,
about one window apart.

**Guarantees**:
  - At most one real call per wait_ms window.
  - If g was called during a window in which func has not run, one trailing call
    to func happens by the end of that window.
  - At most one deferred call is pending per wrapper at any time.

**Edge cases**:
  - Before func has ever run, g returns None.
  - Exceptions from an immediate call propagate to the caller and do not start a
    window (time_last_called is only updated after func returns).
  - Arguments of a trailing call are those of the call that scheduled it, not of
    the latest call.
"""

import functools
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from underbar.utils.log import get_logger
from underbar.utils.time import (
    Clock,
    Scheduler,
    elapsed_ms,
    get_default_scheduler,
    get_real_clock,
)

logger = get_logger(__name__)


@dataclass
class _ThrottleState:
    time_last_called: datetime | None = None
    is_scheduled: bool = False
    last_result: Any = None


def throttle(
    func: Callable[..., Any],
    wait_ms: float,
    *,
    clock: Clock | None = None,
    scheduler: Scheduler | None = None,
) -> Callable[..., Any]:
    """
    Return a wrapper that calls func at most once per wait_ms window.

    Args:
        func: Callable to throttle.
        wait_ms: Window length in milliseconds (non-negative).
        clock: Time source (default: RealClock). Pass the same VirtualScheduler
               as clock and scheduler to run on a simulated timeline.
        scheduler: Where trailing calls are scheduled (default: the process-wide
                   TimerScheduler).

    Returns:
        The throttled wrapper.

    Raises:
        ValueError: If wait_ms is negative.
    """
    if wait_ms < 0:
        raise ValueError(f"wait_ms must be non-negative, got: {wait_ms}")

    clock = clock or get_real_clock()
    scheduler = scheduler or get_default_scheduler()
    state = _ThrottleState()
    name = getattr(func, "__name__", repr(func))

    @functools.wraps(func)
    def throttled(*args, **kwargs):
        current_time = clock.now()

        if state.time_last_called is None:
            since_last = None
        else:
            since_last = elapsed_ms(state.time_last_called, current_time)

        if since_last is None or since_last >= wait_ms:
            state.last_result = func(*args, **kwargs)
            state.time_last_called = current_time
        elif not state.is_scheduled:
            state.is_scheduled = True
            remaining = wait_ms - since_last
            logger.debug("throttle: %s deferred by %.1f ms", name, remaining)

            def fire():
                state.is_scheduled = False
                throttled(*args, **kwargs)

            scheduler.call_later(remaining, fire)

        return state.last_result

    return throttled
