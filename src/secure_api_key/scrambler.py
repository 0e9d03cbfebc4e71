"""
Character position scrambling.

A scramble pairs every character of a string with its original index and
emits the pairs in random order. Sorting the pairs by index undoes it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterable

from .errors import PositionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharPosition:
    """One character of a plaintext and the index it came from."""

    # A single character (one code unit when produced by the codec)
    char: str

    # Index of the character in the original string
    position: int


class Scrambler:
    """
    Scrambles strings into randomly ordered CharPosition sequences.

    The order of a scrambled sequence carries no meaning; only the
    (char, position) pairing does.
    """

    def __init__(self, rng: random.Random | None = None, strict: bool = False) -> None:
        """
        Initialize the scrambler.

        Args:
            rng: Random generator used for shuffling, defaults to SystemRandom
            strict: Check that positions form a permutation when unscrambling
        """
        self.rng = rng or random.SystemRandom()
        self.strict = strict

    def scramble(self, plaintext: str) -> list[CharPosition]:
        """
        Pair each character with its position, in uniformly random order.

        Args:
            plaintext: The string to scramble, may be empty

        Returns:
            One CharPosition per character, every position appearing once
        """
        positions = list(range(len(plaintext)))
        self.rng.shuffle(positions)
        return [CharPosition(char=plaintext[i], position=i) for i in positions]

    def unscramble(self, pairs: Iterable[CharPosition]) -> str:
        """
        Rebuild the original string by sorting pairs on their position.

        Outside strict mode, positions that are not a contiguous 0..N-1
        permutation are not detected and yield a wrong string.

        Args:
            pairs: The scrambled sequence

        Returns:
            The characters joined in position order

        Raises:
            PositionError: In strict mode, if positions have gaps or duplicates
        """
        ordered = sorted(pairs, key=lambda pair: pair.position)

        if self.strict:
            check_permutation(ordered)

        return "".join(pair.char for pair in ordered)


def check_permutation(ordered: list[CharPosition]) -> None:
    """Raise PositionError unless sorted pairs hold positions 0..N-1 exactly."""
    for expected, pair in enumerate(ordered):
        if pair.position != expected:
            logger.debug("Position check failed at index %d", expected)
            raise PositionError(
                f"Expected position {expected} but found {pair.position} "
                f"among {len(ordered)} scrambled characters"
            )
