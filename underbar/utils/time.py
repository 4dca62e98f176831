"""
Clock and scheduler abstractions for deterministic testing.

This module provides a testable way to obtain "now" and to ask for "run this
later" through injected objects rather than calling datetime.now() or starting
timers directly. The time-sensitive decorators (delay, throttle) depend on these
two ports, so tests can drive them on a simulated timeline instead of sleeping.

The key insight: depending on a Clock and a Scheduler instead of the system
clock and global timers makes invocation-timing code reproducible. A
VirtualScheduler is both at once and only moves forward when a test tells it to.
"""

import heapq
import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from underbar.config.settings import TimerSettings
from underbar.utils.log import get_logger

logger = get_logger(__name__)


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Conceptual**: A Clock is any object that can answer the question "what time
    is it right now?" By depending on this abstraction instead of directly calling
    datetime.now(), code becomes testable and deterministic. throttle() reads the
    clock on every invocation to decide whether a new window has started.

    **Usage**: Consumers accept a Clock instance (injected via function parameter)
    and call clock.now() whenever they need the current time. In production, pass
    a RealClock; in tests, pass a FrozenClock or a VirtualScheduler.
    """

    def now(self) -> datetime:
        """
        Return the current time according to this clock.

        Returns:
            datetime object representing "now" (timezone-aware, UTC).
        """
        ...


class Scheduler(Protocol):
    """
    Deferred execution port: "run this callback after N milliseconds".

    **Conceptual**: delay() and throttle() never block the caller. They hand a
    zero-argument callback to a Scheduler and return immediately. The scheduler
    decides how the wait happens (a real timer thread, or a simulated queue).

    **Contract**:
      - call_later returns immediately and never runs the callback inline.
      - Callbacks fire in an order consistent with their due times; two callbacks
        due at the same instant have no guaranteed relative order.
      - There is no cancellation.
    """

    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None:
        """Schedule callback to run once, delay_ms milliseconds from now."""
        ...


class RealClock:
    """
    Clock that returns the actual current system time (UTC).

    **Usage**:
        clock = RealClock()
        current_time = clock.now()  # Returns current UTC time
    """

    def now(self) -> datetime:
        """Return the current UTC time from the system clock."""
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Clock that always returns a fixed timestamp.

    **Usage**:
        clock = FrozenClock(datetime(2015, 1, 5, tzinfo=timezone.utc))
        current_time = clock.now()  # Always returns 2015-01-05T00:00:00+00:00

    Useful for throttle() tests that only care about the "same window" branch:
    with a frozen clock every call after the first lands inside the window.
    """

    def __init__(self, fixed_now: datetime):
        """
        Initialize a FrozenClock with a fixed timestamp.

        Args:
            fixed_now: The datetime to return on every call to now().
        """
        self._fixed_now = fixed_now

    def now(self) -> datetime:
        """Return the configured fixed timestamp."""
        return self._fixed_now


class TimerScheduler:
    """
    Scheduler backed by real wall-clock timers (threading.Timer).

    **Conceptual**: Each call_later starts one timer thread which sleeps for the
    requested delay and then runs the callback. This is the default scheduler
    used when delay()/throttle() are not given one explicitly.

    **Threading note**: callbacks run on the timer thread, not on the caller's
    thread. The kernel makes no thread-safety guarantees, so callers mixing a
    TimerScheduler with their own threads must serialize access themselves.
    An exception raised by a callback is logged and does not kill the process.

    Attributes:
        daemon: Whether timer threads are daemon threads (a pending timer does
                not keep the interpreter alive when True).
    """

    def __init__(self, daemon: bool = True):
        self.daemon = daemon

    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None:
        """Start a timer that runs callback after delay_ms (negative clamps to 0)."""
        seconds = max(delay_ms, 0) / 1000.0
        timer = threading.Timer(seconds, self._run, args=(callback,))
        timer.daemon = self.daemon
        logger.debug("Timer scheduled in %.1f ms for %r", seconds * 1000.0, callback)
        timer.start()

    @staticmethod
    def _run(callback: Callable[[], object]) -> None:
        try:
            callback()
        except Exception:
            logger.exception("Deferred callback %r raised", callback)


@dataclass(order=True)
class _PendingCall:
    due: datetime
    sequence: int
    callback: Callable[[], object] = field(compare=False)


class VirtualScheduler:
    """
    Simulated timeline: a Clock and a Scheduler in one object.

    **Conceptual**: Time only moves when the test says so. Deferred callbacks are
    kept in a priority queue ordered by due time (FIFO for equal due times).
    Two ways to move forward mirror the two ways real timers behave:

      - advance(ms): timers are punctual. Each callback due inside the window
        fires with the clock set to exactly its due time.
      - tick(ms) then run_pending(): timers are late. The clock jumps first,
        then everything already due fires at the new (later) time. This is how
        a test reproduces a deferred call that lost the race against a manual
        call made after its nominal due time.

    **Usage**:
        timeline = VirtualScheduler()
        throttled = throttle(fn, 100, clock=timeline, scheduler=timeline)
        throttled()          # t=0, immediate call
        timeline.advance(50)
        throttled()          # t=50, trailing call scheduled for t=100
        timeline.advance(60) # fires the trailing call at t=100

    Callback exceptions propagate out of advance()/run_pending().
    """

    def __init__(self, start: datetime | None = None):
        """
        Args:
            start: Initial time of the simulated timeline
                   (default: 2000-01-01T00:00:00Z).
        """
        self._now = start or datetime(2000, 1, 1, tzinfo=timezone.utc)
        self._start = self._now
        self._queue: list[_PendingCall] = []
        self._counter = itertools.count()

    def now(self) -> datetime:
        """Return the current simulated time."""
        return self._now

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds elapsed since the timeline started."""
        return (self._now - self._start) / timedelta(milliseconds=1)

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled and not yet fired."""
        return len(self._queue)

    def call_later(self, delay_ms: float, callback: Callable[[], object]) -> None:
        """Queue callback to fire at now + delay_ms (negative clamps to 0)."""
        due = self._now + timedelta(milliseconds=max(delay_ms, 0))
        heapq.heappush(self._queue, _PendingCall(due, next(self._counter), callback))

    def tick(self, ms: float) -> None:
        """Move the clock forward by ms without firing anything."""
        if ms < 0:
            raise ValueError(f"Cannot move a timeline backwards, got ms={ms}")
        self._now += timedelta(milliseconds=ms)

    def run_pending(self) -> int:
        """
        Fire every callback already due at the current time.

        Callbacks scheduled while running that are themselves already due (zero
        delay) also fire. The clock does not move.

        Returns:
            Number of callbacks fired.
        """
        fired = 0
        while self._queue and self._queue[0].due <= self._now:
            pending = heapq.heappop(self._queue)
            pending.callback()
            fired += 1
        return fired

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ms, firing due callbacks at their due times.

        Returns:
            Number of callbacks fired.
        """
        if ms < 0:
            raise ValueError(f"Cannot move a timeline backwards, got ms={ms}")
        target = self._now + timedelta(milliseconds=ms)
        fired = 0
        while self._queue and self._queue[0].due <= target:
            pending = heapq.heappop(self._queue)
            # Punctual timer: the callback observes its own due time.
            self._now = max(self._now, pending.due)
            pending.callback()
            fired += 1
        self._now = target
        return fired


def elapsed_ms(earlier: datetime, later: datetime) -> float:
    """Milliseconds between two datetimes (negative if later < earlier)."""
    return (later - earlier) / timedelta(milliseconds=1)


def get_real_clock() -> Clock:
    """Factory function to create a RealClock instance."""
    return RealClock()


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """Factory function to create a FrozenClock with a given timestamp."""
    return FrozenClock(fixed_now)


_default_scheduler: TimerScheduler | None = None


def get_default_scheduler() -> Scheduler:
    """
    Return the process-wide TimerScheduler, creating it on first use.

    The daemon flag comes from TimerSettings (UNDERBAR_TIMER_DAEMON).
    """
    global _default_scheduler
    if _default_scheduler is None:
        settings = TimerSettings.from_env()
        _default_scheduler = TimerScheduler(daemon=settings.daemon)
    return _default_scheduler
