"""Bounded pseudo-random integers for prime sampling.

Every key generation session owns its own `RandomSource`, which keeps sessions independent of each other and lets
tests inject a fixed seed. Not cryptographically secure.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
import time

logger = logging.getLogger(__name__)


class RandomSource:
    """Uniform integer source backed by a private `random.Random` instance.

    Attributes:
        seed: The seed the generator was started from. Taken from the wall clock if not provided.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self, low: int, high: int) -> int:
        """Draws a value uniformly from `[low, high)`.

        Uses rejection sampling on the smallest power-of-two window covering the span, so no value is favoured the
        way plain modulo reduction would.

        Args:
            low: Inclusive lower bound.
            high: Exclusive upper bound.

        Returns:
            The drawn value. For a degenerate range (`high <= low + 1`) the error is logged and `low` is returned.
        """
        if high <= low + 1:
            logger.error("Invalid range (%d, %d), falling back to %d.", low, high, low)
            return low
        span = high - low
        bits = span.bit_length()
        while True:
            r = self._rng.getrandbits(bits)
            if r < span:
                return low + r
