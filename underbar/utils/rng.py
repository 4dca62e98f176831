"""
Random number generation for the randomized collection operations.

sort_by() picks random pivots and shuffle() draws random swap indices. Both
accept an optional numpy Generator so tests can pass a seeded one; when none is
given they share a process-wide Generator seeded from RandomSettings
(UNDERBAR_RANDOM_SEED, or OS entropy when unset).
"""

import numpy as np

from underbar.config.settings import RandomSettings
from underbar.utils.log import get_logger

logger = get_logger(__name__)

_default_rng: np.random.Generator | None = None


def get_default_rng() -> np.random.Generator:
    """Return the shared Generator, creating it on first use."""
    global _default_rng
    if _default_rng is None:
        settings = RandomSettings.from_env()
        logger.debug("Seeding default generator with seed=%r", settings.seed)
        _default_rng = np.random.default_rng(settings.seed)
    return _default_rng


def reseed(seed: int | None) -> np.random.Generator:
    """
    Replace the shared Generator with a freshly seeded one.

    Args:
        seed: Seed for np.random.default_rng (None for OS entropy).

    Returns:
        The new shared Generator.
    """
    global _default_rng
    logger.debug("Reseeding default generator with seed=%r", seed)
    _default_rng = np.random.default_rng(seed)
    return _default_rng


def resolve_rng(rng: np.random.Generator | None) -> np.random.Generator:
    """Return rng if given, else the shared Generator."""
    return rng if rng is not None else get_default_rng()


def random_index(upper_inclusive: int, rng: np.random.Generator | None = None) -> int:
    """
    Draw a uniformly random integer in [0, upper_inclusive].

    Returned as a plain int so it can index Python lists.
    """
    return int(resolve_rng(rng).integers(0, upper_inclusive + 1))
