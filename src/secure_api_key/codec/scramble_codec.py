"""
API key scrambling codec.

This module turns a plaintext token into a noise-padded Base64 blob and
back. It is obfuscation against casual inspection, not encryption.
"""

import base64
import logging
import random

from ..config import ScrambleSettings, SecureKeyConfig, validate_noise_bounds
from ..errors import EncodingError, FormatError
from ..noise import NoiseGenerator
from ..scrambler import Scrambler
from .blob import BlobReader, EncodedBlob

logger = logging.getLogger(__name__)


class ScrambleCodec:
    """
    Secures and unsecures API keys.

    The default random source is SystemRandom, which is safe to share
    between threads. A seeded random.Random may be injected for
    reproducible output, but then the codec must not be used from several
    threads without a lock.
    """

    def __init__(
        self,
        settings: ScrambleSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the codec.

        Args:
            settings: Codec settings, defaults to ScrambleSettings()
            rng: Random generator shared by noise and scrambling
        """
        self.settings = settings or ScrambleSettings()
        self.rng = rng or random.SystemRandom()
        self.noise = NoiseGenerator(self.settings, self.rng)
        self.scrambler = Scrambler(self.rng, strict=self.settings.strict_positions)

    def secure(
        self,
        plaintext: str,
        noise_min_length: int | None = None,
        noise_max_length: int | None = None,
    ) -> str:
        """
        "Secure" a plaintext value.

        Args:
            plaintext: The value to obfuscate
            noise_min_length: Minimum noise characters on each side
            noise_max_length: Exclusive maximum noise characters on each side

        Returns:
            The Base64 encoded blob

        Raises:
            ConfigurationError: If the noise bounds are invalid
            EncodingError: If the plaintext cannot be held by the encoding
        """
        if noise_min_length is None:
            noise_min_length = self.settings.noise_min_length
        if noise_max_length is None:
            noise_max_length = self.settings.noise_max_length
        validate_noise_bounds(noise_min_length, noise_max_length)

        leading_noise = self.noise.noise(noise_min_length, noise_max_length)
        trailing_noise = self.noise.noise(noise_min_length, noise_max_length)

        pairs = self.scrambler.scramble(self.to_code_units(plaintext))
        logger.debug("Scrambled %d code units", len(pairs))

        blob = EncodedBlob(
            leading_noise=leading_noise,
            pairs=pairs,
            trailing_noise=trailing_noise,
        )
        return base64.b64encode(blob.to_bytes(self.settings)).decode("ascii")

    def unsecure(self, encoded: str) -> str:
        """
        Recover the plaintext of a "secured" value.

        The trailing noise is never read, so damage confined to it goes
        unnoticed.

        Args:
            encoded: A value returned by secure

        Returns:
            The original plaintext

        Raises:
            FormatError: If the value is not valid Base64
            BufferUnderrunError: If the blob is truncated or its lengths are corrupt
        """
        reader = BlobReader(self.decode_base64(encoded), self.settings)

        reader.read_noise()
        pairs = reader.read_pairs()
        logger.debug("Read %d pairs, %d bytes left unread", len(pairs), reader.remaining)

        return self.from_code_units(self.scrambler.unscramble(pairs))

    def inspect(self, encoded: str) -> EncodedBlob:
        """
        Parse a "secured" value without discarding its noise.

        Args:
            encoded: A value returned by secure

        Returns:
            The parsed blob, trailing noise included
        """
        return EncodedBlob.parse(self.decode_base64(encoded), self.settings)

    def random_string(self, length: int) -> str:
        """Generate a random string from the noise alphabet."""
        return self.noise.random_string(length)

    @staticmethod
    def decode_base64(encoded: str) -> bytes:
        """
        Decode Base64 text to bytes, ignoring embedded whitespace.

        Raises:
            FormatError: If the text is not valid Base64
        """
        try:
            return base64.b64decode("".join(encoded.split()), validate=True)
        except ValueError as e:
            raise FormatError(f"Value is not valid Base64: {e}") from e

    def to_code_units(self, text: str) -> str:
        """
        Split text into one character per code unit of the encoding.

        Under UTF-16 a character outside the BMP becomes its two surrogates.

        Raises:
            EncodingError: If the encoding cannot represent the text
        """
        try:
            data = text.encode(self.settings.encoding, "surrogatepass")
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"Character {e.object[e.start:e.end]!r} at index {e.start} "
                f"cannot be encoded as {self.settings.encoding}"
            ) from e

        width = self.settings.code_unit_width
        byteorder = self.settings.code_unit_byteorder
        return "".join(
            chr(int.from_bytes(data[i:i + width], byteorder))
            for i in range(0, len(data), width)
        )

    def from_code_units(self, units: str) -> str:
        """Join code unit characters back into text, pairing surrogates."""
        width = self.settings.code_unit_width
        byteorder = self.settings.code_unit_byteorder
        data = b"".join(ord(unit).to_bytes(width, byteorder) for unit in units)
        return data.decode(self.settings.encoding, "surrogatepass")


_default_codec: ScrambleCodec | None = None


def default_codec() -> ScrambleCodec:
    """
    Get or create the codec backing the module-level functions.

    Returns:
        A codec built from SecureKeyConfig
    """
    global _default_codec
    if _default_codec is None:
        _default_codec = ScrambleCodec(SecureKeyConfig.settings())
    return _default_codec


def reset_default_codec() -> None:
    """Drop the cached default codec so configuration changes take effect."""
    global _default_codec
    _default_codec = None


def secure(
    plaintext: str,
    noise_min_length: int | None = None,
    noise_max_length: int | None = None,
) -> str:
    """Secure a value with the default codec (noise 30 to 90 unless configured)."""
    return default_codec().secure(plaintext, noise_min_length, noise_max_length)


def unsecure(encoded: str) -> str:
    """Unsecure a value with the default codec."""
    return default_codec().unsecure(encoded)


def random_string(length: int) -> str:
    """Generate a random string with the default codec's alphabet."""
    return default_codec().random_string(length)
