"""Random number source shared by sampling code.

Design Pattern: Protocol-based dependency injection
    - NormalSource protocol defines what samplers consume
    - Random implements it on top of a numpy Generator
    - Random.instance() provides the process-wide default

Random instances are not thread-safe. Use one instance per thread, or
serialize access to the shared instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from likely.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


@runtime_checkable
class NormalSource(Protocol):
    """Protocol for a scalar standard-normal generator."""

    def normal(self) -> float:
        """Return a value with mean 0 and RMS 1."""
        ...


class Random:
    """Scalar random number generator built on a Mersenne Twister.

    Example:
        >>> rng = Random(seed=42)
        >>> 0.0 <= rng.uniform() < 1.0
        True
    """

    _instance: ClassVar[Random | None] = None

    def __init__(self, seed: int | None = None) -> None:
        self._generator = np.random.Generator(np.random.MT19937(seed))

    def set_seed(self, seed: int) -> None:
        """Restart the generator sequence from the given seed."""
        logger.debug("Reseeding random generator with seed %d", seed)
        self._generator = np.random.Generator(np.random.MT19937(seed))

    def uniform(self) -> float:
        """Return a double-precision value uniformly sampled from [0,1)."""
        return float(self._generator.random())

    def normal(self) -> float:
        """Return a double-precision value with mean 0 and RMS 1."""
        return float(self._generator.standard_normal())

    def fast_uniform(self) -> np.float32:
        """Return a single-precision value uniformly sampled from [0,1)."""
        return np.float32(self._generator.random(dtype=np.float32))

    def fill_uniform(self, size: int, seed: int) -> FloatArray:
        """Return an array of uniform [0,1) doubles from an independent seed.

        The main sequence used by uniform() and normal() is not advanced.
        """
        return np.random.Generator(np.random.MT19937(seed)).random(size)

    def fill_normal(self, size: int, seed: int) -> np.ndarray:
        """Return a single-precision array of standard normals from an independent seed.

        The main sequence used by uniform() and normal() is not advanced.
        """
        rng = np.random.Generator(np.random.MT19937(seed))
        return rng.standard_normal(size, dtype=np.float32)

    @property
    def generator(self) -> np.random.Generator:
        """Underlying numpy generator, for drawing from other distributions."""
        return self._generator

    @classmethod
    def instance(cls) -> Random:
        """Return the process-wide shared Random instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


__all__ = ["NormalSource", "Random"]
