"""
Configuration settings for the underbar kernel.

**Conceptual**: The kernel itself is pure computation, but a few ambient knobs
are worth controlling without code changes: the seed of the random generator
behind sort_by()/shuffle(), the logger level and format, and whether the real
timer threads used by delay()/throttle() are daemon threads. This module
provides strongly-typed configuration objects that load from environment
variables (via .env files) and validate themselves on construction, so a bad
value fails fast with a clear message instead of surfacing mid-run.

**Why centralized config?**
  - Single source of truth for every environment variable the package reads.
  - Easy to test (construct settings directly instead of reading the environment).
  - Fail-fast validation (a non-integer seed raises at load time).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (dev/local environments); variables already
# set in the environment win.
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got: {raw}")


@dataclass(frozen=True)
class RandomSettings:
    """
    Configuration for the shared random generator.

    **Conceptual**: sort_by() picks its pivots at random and shuffle() draws
    random swap indices. Both accept an explicit numpy Generator; when none is
    passed they use a process-wide Generator seeded from these settings.
    Setting a seed makes every default-generator run reproducible.

    Attributes:
        seed: Non-negative integer seed, or None to seed from OS entropy.
    """
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.seed is not None and self.seed < 0:
            raise ValueError(
                f"UNDERBAR_RANDOM_SEED must be non-negative, got: {self.seed}"
            )

    @classmethod
    def from_env(cls) -> "RandomSettings":
        """
        Load random settings from environment variables.

        **Environment variables**:
          - UNDERBAR_RANDOM_SEED (optional): integer seed. Unset or empty means
            "seed from OS entropy".

        Raises:
            ValueError: If UNDERBAR_RANDOM_SEED is set but not an integer.
        """
        seed_str = os.getenv("UNDERBAR_RANDOM_SEED", "").strip()
        if not seed_str:
            return cls(seed=None)

        try:
            seed = int(seed_str)
        except ValueError:
            raise ValueError(
                f"UNDERBAR_RANDOM_SEED must be an integer, got: {seed_str}"
            )

        return cls(seed=seed)


@dataclass(frozen=True)
class LoggingSettings:
    """
    Configuration for the package logger.

    Attributes:
        level: Level name understood by the logging module (DEBUG, INFO, ...).
               Default WARNING: the kernel only emits DEBUG diagnostics.
        format_string: logging.Formatter format string.
    """
    level: str = "WARNING"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Validate settings after initialization."""
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ValueError(
                f"UNDERBAR_LOG_LEVEL must be a logging level name, got: {self.level}"
            )
        if not self.format_string:
            raise ValueError("UNDERBAR_LOG_FORMAT must not be empty")

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        """
        Load logging settings from environment variables.

        **Environment variables**:
          - UNDERBAR_LOG_LEVEL (optional): default "WARNING".
          - UNDERBAR_LOG_FORMAT (optional): default
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s".
        """
        level = os.getenv("UNDERBAR_LOG_LEVEL", "WARNING")
        format_string = os.getenv(
            "UNDERBAR_LOG_FORMAT",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        return cls(level=level, format_string=format_string)


@dataclass(frozen=True)
class TimerSettings:
    """
    Configuration for the real-timer scheduler used by delay() and throttle().

    **Conceptual**: Deferred calls run on threading.Timer threads. A daemon
    timer does not keep the interpreter alive at exit, so a pending delay()
    never blocks shutdown. Turn it off when a program must wait for its
    deferred calls before exiting.

    Attributes:
        daemon: Whether timer threads are daemon threads (default True).
    """
    daemon: bool = True

    @classmethod
    def from_env(cls) -> "TimerSettings":
        """
        Load timer settings from environment variables.

        **Environment variables**:
          - UNDERBAR_TIMER_DAEMON (optional): "true"/"false" (default "true").

        Raises:
            ValueError: If UNDERBAR_TIMER_DAEMON is not a recognised boolean.
        """
        daemon = _parse_bool(
            "UNDERBAR_TIMER_DAEMON", os.getenv("UNDERBAR_TIMER_DAEMON", "true")
        )
        return cls(daemon=daemon)


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the package.

    **Usage pattern**:
      ```python
      from underbar.config.settings import Settings

      settings = Settings.from_env()
      seed = settings.random.seed
      ```

    Attributes:
        random: Seed configuration for sort_by()/shuffle().
        logging: Logger level and format.
        timer: Real-timer scheduler configuration.
    """
    random: RandomSettings = field(default_factory=RandomSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    timer: TimerSettings = field(default_factory=TimerSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load global settings from environment variables.

        Raises:
            ValueError: If any subsystem setting is malformed.
        """
        return cls(
            random=RandomSettings.from_env(),
            logging=LoggingSettings.from_env(),
            timer=TimerSettings.from_env(),
        )
