"""
Random noise generation.

Noise is filler drawn from the configured alphabet. It pads encoded blobs
so their size does not give away the length of the plaintext.
"""

import logging
import random

from .config import ScrambleSettings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class NoiseGenerator:
    """Draws random strings from the configured noise alphabet."""

    def __init__(
        self,
        settings: ScrambleSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the noise generator.

        Args:
            settings: Codec settings providing the alphabet
            rng: Random generator to draw from, defaults to SystemRandom
        """
        self.settings = settings or ScrambleSettings()
        self.rng = rng or random.SystemRandom()

    @property
    def alphabet(self) -> str:
        """The characters random strings are drawn from."""
        return self.settings.noise_alphabet

    def random_string(self, length: int) -> str:
        """
        Generate a random string.

        Characters are drawn independently and uniformly, with replacement.

        Args:
            length: Number of characters to generate

        Returns:
            A string of exactly ``length`` characters from the alphabet
        """
        if length < 0:
            raise ConfigurationError(f"Random string length must not be negative, got {length}")

        return "".join(self.rng.choices(self.alphabet, k=length))

    def noise_length(self, noise_min_length: int, noise_max_length: int) -> int:
        """Draw a noise length in [noise_min_length, noise_max_length)."""
        length = self.rng.randrange(noise_min_length, noise_max_length)
        logger.debug("Drew noise length %d from [%d, %d)", length, noise_min_length, noise_max_length)
        return length

    def noise(self, noise_min_length: int, noise_max_length: int) -> str:
        """Generate a noise string whose length is drawn from the given range."""
        return self.random_string(self.noise_length(noise_min_length, noise_max_length))
