"""
Exception types for Secure API Key.

All errors derive from SecureAPIKeyError, which is itself a ValueError so
callers that already guard against bad values keep working.
"""


class SecureAPIKeyError(ValueError):
    """Base class for all errors raised by this package."""


class FormatError(SecureAPIKeyError):
    """The input to unsecure is not valid Base64 text."""


class BufferUnderrunError(SecureAPIKeyError):
    """A length declared in a blob exceeds the bytes that are available."""

    def __init__(self, wanted: int, available: int) -> None:
        self.wanted = wanted
        self.available = available
        if wanted < 0:
            message = f"Blob declares a negative length ({wanted})"
        else:
            message = f"Blob truncated: needed {wanted} bytes but only {available} available"
        super().__init__(message)


class ConfigurationError(SecureAPIKeyError):
    """Invalid codec configuration (alphabet, encoding, noise bounds)."""


class EncodingError(SecureAPIKeyError):
    """The plaintext contains characters the configured encoding cannot hold."""


class PositionError(SecureAPIKeyError):
    """Scrambled positions are not a contiguous permutation of 0..N-1."""
