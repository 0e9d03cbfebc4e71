"""
Tests for ScrambleSettings and SecureKeyConfig.
"""

import os
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from secure_api_key.config import (
    DEFAULT_NOISE_ALPHABET,
    ScrambleSettings,
    SecureKeyConfig,
    normalize_encoding,
)
from secure_api_key.errors import ConfigurationError


class TestScrambleSettings:
    """Tests for the ScrambleSettings value."""

    def test_defaults(self) -> None:
        """Test the default settings match the documented values."""
        settings = ScrambleSettings()

        assert settings.encoding == "utf-16-le"
        assert settings.noise_alphabet == DEFAULT_NOISE_ALPHABET
        assert settings.noise_min_length == 30
        assert settings.noise_max_length == 90
        assert settings.strict_positions is False
        assert settings.code_unit_width == 2
        assert settings.code_unit_byteorder == "little"

    def test_encoding_aliases_are_normalized(self) -> None:
        """Test that encoding aliases resolve to canonical names."""
        assert ScrambleSettings(encoding="UTF-16LE").encoding == "utf-16-le"
        assert ScrambleSettings(encoding="utf_16_be").code_unit_byteorder == "big"
        assert normalize_encoding("latin-1") == "iso8859-1"

    def test_latin1_has_single_byte_units(self) -> None:
        """Test code unit width for a single-byte encoding."""
        settings = ScrambleSettings(encoding="latin-1", noise_alphabet="abc")
        assert settings.code_unit_width == 1

    def test_utf32_has_four_byte_units(self) -> None:
        """Test code unit width for UTF-32."""
        assert ScrambleSettings(encoding="utf-32-be").code_unit_width == 4

    @pytest.mark.parametrize("encoding", ["utf-8", "utf-16", "no-such-encoding"])
    def test_unsupported_encoding(self, encoding: str) -> None:
        """Test that variable-width, BOM-carrying and unknown encodings are rejected."""
        with pytest.raises(ConfigurationError):
            ScrambleSettings(encoding=encoding)

    def test_empty_alphabet(self) -> None:
        """Test that an empty noise alphabet is a configuration error."""
        with pytest.raises(ConfigurationError):
            ScrambleSettings(noise_alphabet="")

    def test_alphabet_must_fit_encoding(self) -> None:
        """Test that the euro sign in the default alphabet does not fit latin-1."""
        with pytest.raises(ConfigurationError):
            ScrambleSettings(encoding="latin-1")

    @pytest.mark.parametrize("bounds", [(10, 10), (20, 10), (-1, 5)])
    def test_invalid_noise_bounds(self, bounds: tuple[int, int]) -> None:
        """Test that impossible noise ranges are rejected."""
        with pytest.raises(ConfigurationError):
            ScrambleSettings(noise_min_length=bounds[0], noise_max_length=bounds[1])

    def test_settings_are_immutable(self) -> None:
        """Test that settings cannot be changed after construction."""
        settings = ScrambleSettings()
        with pytest.raises(ValidationError):
            settings.encoding = "utf-32-le"


class TestSecureKeyConfig:
    """Tests for the SecureKeyConfig class."""

    def test_default_config(self) -> None:
        """Test the default configuration values."""
        assert SecureKeyConfig.get("encoding") == "utf-16-le"
        assert SecureKeyConfig.get("noise.min_length") == 30
        assert SecureKeyConfig.get("noise.max_length") == 90
        assert SecureKeyConfig.get("noise.alphabet") == DEFAULT_NOISE_ALPHABET
        assert SecureKeyConfig.get("strict_positions") is False

    def test_missing_key_returns_default(self) -> None:
        """Test dotted lookups that miss fall back to the default."""
        assert SecureKeyConfig.get("noise.colour", "none") == "none"
        assert SecureKeyConfig.get("encoding.width", 7) == 7

    def test_environment_override(self) -> None:
        """Test overriding configuration with environment variables."""
        os.environ["SECURE_API_KEY_ENCODING"] = "utf-32-le"
        os.environ["SECURE_API_KEY_NOISE_ALPHABET"] = "xyz"
        os.environ["SECURE_API_KEY_NOISE_MIN"] = "5"
        os.environ["SECURE_API_KEY_NOISE_MAX"] = "10"
        os.environ["SECURE_API_KEY_STRICT"] = "true"

        SecureKeyConfig.initialize()

        settings = SecureKeyConfig.settings()
        assert settings.encoding == "utf-32-le"
        assert settings.noise_alphabet == "xyz"
        assert settings.noise_min_length == 5
        assert settings.noise_max_length == 10
        assert settings.strict_positions is True

    def test_non_integer_environment_value(self) -> None:
        """Test that a malformed numeric environment value is reported."""
        os.environ["SECURE_API_KEY_NOISE_MIN"] = "lots"

        with pytest.raises(ConfigurationError):
            SecureKeyConfig.initialize()

    def test_file_config(self) -> None:
        """Test loading configuration from a file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump({
                "encoding": "utf-16-be",
                "noise": {
                    "min_length": 3,
                },
            }, f)
            config_path = f.name

        try:
            SecureKeyConfig.initialize(config_path)

            assert SecureKeyConfig.get("encoding") == "utf-16-be"
            assert SecureKeyConfig.get("noise.min_length") == 3

            # Values not in the file keep their defaults
            assert SecureKeyConfig.get("noise.max_length") == 90
            assert SecureKeyConfig.get("noise.alphabet") == DEFAULT_NOISE_ALPHABET
        finally:
            Path(config_path).unlink()

    def test_environment_overrides_file(self) -> None:
        """Test that environment variables override file configuration."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump({"noise": {"min_length": 3, "max_length": 8}}, f)
            config_path = f.name

        try:
            os.environ["SECURE_API_KEY_NOISE_MAX"] = "12"

            SecureKeyConfig.initialize(config_path)

            assert SecureKeyConfig.get("noise.max_length") == 12
            assert SecureKeyConfig.get("noise.min_length") == 3
        finally:
            Path(config_path).unlink()

    def test_missing_file(self) -> None:
        """Test that a missing configuration file is a configuration error."""
        with pytest.raises(ConfigurationError):
            SecureKeyConfig.initialize("/nonexistent/secure_api_key.yaml")

    def test_invalid_yaml(self) -> None:
        """Test that unparsable YAML is a configuration error."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("noise: [unclosed\n")
            config_path = f.name

        try:
            with pytest.raises(ConfigurationError):
                SecureKeyConfig.initialize(config_path)
        finally:
            Path(config_path).unlink()

    def test_null_section_with_environment_override(self) -> None:
        """Test that a null noise section is rejected even when env vars fill it."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("noise:\n")
            config_path = f.name

        try:
            os.environ["SECURE_API_KEY_NOISE_MIN"] = "3"

            with pytest.raises(ConfigurationError, match="must be a mapping"):
                SecureKeyConfig.initialize(config_path)
        finally:
            Path(config_path).unlink()

    def test_scalar_section(self) -> None:
        """Test that a scalar in place of the noise section is rejected."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump({"noise": 5}, f)
            config_path = f.name

        try:
            with pytest.raises(ConfigurationError):
                SecureKeyConfig.initialize(config_path)
        finally:
            Path(config_path).unlink()

    @pytest.mark.parametrize("value", ["on", "enabled", "2"])
    def test_unrecognized_strict_value(self, value: str) -> None:
        """Test that an unknown strict flag value is a configuration error."""
        os.environ["SECURE_API_KEY_STRICT"] = value

        with pytest.raises(ConfigurationError, match="SECURE_API_KEY_STRICT"):
            SecureKeyConfig.initialize()

    def test_settings_validation_applies(self) -> None:
        """Test that settings built from bad configuration are rejected."""
        os.environ["SECURE_API_KEY_NOISE_MIN"] = "50"
        os.environ["SECURE_API_KEY_NOISE_MAX"] = "40"

        SecureKeyConfig.initialize()

        with pytest.raises(ConfigurationError):
            SecureKeyConfig.settings()
