"""
Secure API Key - reversible obfuscation for API keys.

This package scrambles the characters of a token, pads the result with
random noise and encodes it as Base64. It hides keys from casual static
inspection and is not encryption.
"""

from .config import DEFAULT_NOISE_ALPHABET, ScrambleSettings, SecureKeyConfig
from .codec import EncodedBlob, ScrambleCodec, random_string, secure, unsecure
from .errors import (
    BufferUnderrunError,
    ConfigurationError,
    EncodingError,
    FormatError,
    PositionError,
    SecureAPIKeyError,
)
from .noise import NoiseGenerator
from .scrambler import CharPosition, Scrambler

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_NOISE_ALPHABET",
    "ScrambleSettings",
    "SecureKeyConfig",
    "EncodedBlob",
    "ScrambleCodec",
    "random_string",
    "secure",
    "unsecure",
    "BufferUnderrunError",
    "ConfigurationError",
    "EncodingError",
    "FormatError",
    "PositionError",
    "SecureAPIKeyError",
    "NoiseGenerator",
    "CharPosition",
    "Scrambler",
]
