"""
Random-number source abstractions for deterministic testing and simulation.

This module provides a simple, testable way to obtain uniform random draws via
a source object rather than calling a global random function directly. This
enables deterministic tests by "pinning" the draws to known values, and keeps
concurrent simulations statistically independent because each call can own
its own generator.

The key insight: depending on a RandomSource abstraction instead of a global
RNG makes simulation code testable and reproducible. You can replay an exact
sequence of wins and losses without touching the process-wide random state.
"""

from typing import Protocol, Sequence

import numpy as np


class RandomSource(Protocol):
    """
    Abstract uniform random-number source protocol.

    **Conceptual**: A RandomSource is any object that can answer the question
    "give me the next uniform draw in [0, 1)". By depending on this abstraction
    instead of calling np.random.random() or random.random() directly, code
    becomes testable and deterministic. This is critical for Monte Carlo
    simulation, where we need to assert exact outcomes for known draws.

    **Usage**: Consumers should accept a RandomSource instance (injected via
    function parameter) and call source.random() whenever they need a draw.
    In production, pass a NumpyRandomSource; in tests, pass a FixedRandomSource
    or a seeded NumpyRandomSource.

    **Example**:
        # In a generator:
        def draw_outcomes(p, n, source: RandomSource):
            return [source.random() <= p for _ in range(n)]

        # In production:
        draw_outcomes(0.5, 100, NumpyRandomSource())

        # In tests:
        draw_outcomes(0.5, 3, FixedRandomSource([0.1, 0.9, 0.4]))
    """

    def random(self) -> float:
        """
        Return the next uniform draw.

        Returns:
            float in the half-open interval [0, 1).
        """
        ...


class NumpyRandomSource:
    """
    RandomSource backed by a numpy Generator (PCG64).

    **Conceptual**: Each instance owns an independent `np.random.Generator`,
    so two simulations running side by side never observe or influence each
    other's draws. Unlike `np.random.seed`, seeding here does not touch the
    global numpy state.

    **Usage**:
        source = NumpyRandomSource()          # OS entropy, different every run
        source = NumpyRandomSource(seed=42)   # reproducible stream
        u = source.random()
    """

    def __init__(self, seed: int | None = None):
        """
        Initialize the source.

        Args:
            seed: Optional seed for reproducibility. None draws fresh entropy
                  from the operating system.
        """
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        """Return the next uniform draw in [0, 1) from the owned generator."""
        return float(self._rng.random())


class FixedRandomSource:
    """
    RandomSource that replays a fixed list of draws (for deterministic tests).

    **Conceptual**: Use this in tests to force exact outcome sequences. Values
    are replayed in order; when the list is exhausted it wraps around to the
    start, so `FixedRandomSource([0.0])` always draws 0.0.

    **Usage**:
        source = FixedRandomSource([0.0])            # always 0.0 -> always a win for p > 0
        source = FixedRandomSource([0.2, 0.8])       # alternating draws

    Attributes:
        calls: Number of draws served so far (lets tests assert one draw per
               position, even for p = 0 or p = 100).
    """

    def __init__(self, values: Sequence[float]):
        """
        Initialize a FixedRandomSource with the draws to replay.

        Args:
            values: Non-empty sequence of floats in [0, 1).

        Raises:
            ValueError: If values is empty or contains a value outside [0, 1).
        """
        if len(values) == 0:
            raise ValueError("FixedRandomSource requires at least one value.")
        for value in values:
            if not 0.0 <= value < 1.0:
                raise ValueError(
                    f"FixedRandomSource values must be in [0, 1), got: {value}"
                )
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        """Return the next configured draw, cycling through the list."""
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


def get_default_random_source(seed: int | None = None) -> RandomSource:
    """
    Factory function to create a fresh production random source.

    **Conceptual**: The orchestrator calls this once per invocation so every
    run owns its own generator. Pass a seed to make a run reproducible.

    Args:
        seed: Optional seed (None for OS entropy).

    Returns:
        NumpyRandomSource instance.
    """
    return NumpyRandomSource(seed)
