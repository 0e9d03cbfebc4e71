"""
Secure/unsecure codec for API keys.

This package provides the blob framing and the codec that wraps it in
Base64 with random noise padding.
"""

from .blob import BlobReader, BlobWriter, EncodedBlob
from .scramble_codec import (
    ScrambleCodec,
    default_codec,
    random_string,
    reset_default_codec,
    secure,
    unsecure,
)

__all__ = [
    "BlobReader",
    "BlobWriter",
    "EncodedBlob",
    "ScrambleCodec",
    "default_codec",
    "random_string",
    "reset_default_codec",
    "secure",
    "unsecure",
]
