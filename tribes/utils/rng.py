"""Seedable RNG for reproducible map generation."""

import math

from .constants import LCG_INCREMENT, LCG_MASK, LCG_MULTIPLIER


class GameRNG:
    """Linear-congruential generator for deterministic game behavior.

    All randomness in map generation goes through this class so that the
    same seed always produces the same map, bit for bit. Each generation
    call must build its own instance.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.state = seed

    def random(self) -> float:
        """Advance the generator and return a float in [0.0, 1.0].

        Returns:
            Next value of the sequence
        """
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.state / LCG_MASK

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b), upper bound exclusive.

        Every call advances the generator once, even for an empty range
        (b <= a), which yields a. The generator can return exactly 1.0, so
        the result is clamped to the last value of the range.

        Args:
            a: Lower bound (inclusive)
            b: Upper bound (exclusive)

        Returns:
            Random integer between a and b
        """
        roll = self.random()
        if b <= a:
            return a
        return min(math.floor(roll * (b - a)) + a, b - 1)

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return seq[self.randint(0, len(seq))]

    def shuffle(self, seq):
        """Shuffle sequence in place (Fisher-Yates).

        Args:
            seq: Sequence to shuffle

        Returns:
            The same sequence, shuffled
        """
        for i in range(len(seq) - 1, 0, -1):
            j = self.randint(0, i + 1)
            seq[i], seq[j] = seq[j], seq[i]
        return seq

    def get_state(self) -> int:
        """Get the current state of the RNG.

        Returns:
            Integer state that can be used with set_state
        """
        return self.state

    def set_state(self, state: int):
        """Restore a state previously returned by get_state.

        Args:
            state: Integer state from get_state
        """
        self.state = state
