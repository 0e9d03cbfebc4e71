"""
Pytest configuration for Secure API Key tests.
"""

import os
import random
from typing import Generator

import pytest

from secure_api_key.codec import ScrambleCodec, reset_default_codec
from secure_api_key.config import ScrambleSettings, SecureKeyConfig


ENV_KEYS = [
    "SECURE_API_KEY_ENCODING",
    "SECURE_API_KEY_NOISE_ALPHABET",
    "SECURE_API_KEY_NOISE_MIN",
    "SECURE_API_KEY_NOISE_MAX",
    "SECURE_API_KEY_STRICT",
]


@pytest.fixture(autouse=True)
def clean_config_env() -> Generator[None, None, None]:
    """
    Isolate each test from configuration state.

    Removes the SECURE_API_KEY_* environment variables and resets the
    process-wide configuration and default codec, then restores the
    original environment afterward.
    """
    original_env = {key: os.environ.get(key) for key in ENV_KEYS}
    for key in ENV_KEYS:
        os.environ.pop(key, None)

    SecureKeyConfig._config = {}
    SecureKeyConfig._initialized = False
    reset_default_codec()

    yield

    for key, value in original_env.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)

    SecureKeyConfig._config = {}
    SecureKeyConfig._initialized = False
    reset_default_codec()


@pytest.fixture
def rng() -> random.Random:
    """A seeded random generator for reproducible scrambles and noise."""
    return random.Random(20180101)


@pytest.fixture
def settings() -> ScrambleSettings:
    """Default codec settings."""
    return ScrambleSettings()


@pytest.fixture
def codec(settings: ScrambleSettings, rng: random.Random) -> ScrambleCodec:
    """A codec with default settings and a seeded random source."""
    return ScrambleCodec(settings, rng)
