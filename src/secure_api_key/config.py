"""
Configuration management for Secure API Key.

Two layers live here. ScrambleSettings is the immutable value handed to the
codec, scrambler and noise generator. SecureKeyConfig loads those settings
for the process from defaults, an optional YAML file and environment
variables, and is only consulted by the module-level convenience functions.
"""

import codecs
import os
from copy import deepcopy
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .errors import ConfigurationError


# Characters used to build noise and random strings
DEFAULT_NOISE_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZÅÄÖabcdefghijklmnopqrstuvwxyzåäö£€%[]$@"
    "ÂÊÎÔÛâêîôûÄËÏÖÜäëïöüÀÈÌÒÙàèìòùÁÉÍÓÚáéíóúÃÕãõ '|?+\\/{}½§"
    "01234567890+<>_-:;*&¤#\"!"
)

DEFAULT_ENCODING = "utf-16-le"
DEFAULT_NOISE_MIN_LENGTH = 30
DEFAULT_NOISE_MAX_LENGTH = 90

# Byte width and byte order of one code unit, keyed by canonical encoding name
CODE_UNITS: dict[str, tuple[int, str]] = {
    "utf-16-le": (2, "little"),
    "utf-16-be": (2, "big"),
    "utf-32-le": (4, "little"),
    "utf-32-be": (4, "big"),
    "iso8859-1": (1, "little"),
}


def normalize_encoding(name: str) -> str:
    """
    Resolve an encoding alias to its canonical codecs name.

    Args:
        name: Any alias Python knows, such as "UTF-16LE" or "latin-1"

    Returns:
        The canonical name, guaranteed to be a key of CODE_UNITS

    Raises:
        ConfigurationError: If the encoding is unknown or not fixed-width
    """
    try:
        canonical = codecs.lookup(name).name
    except LookupError as e:
        raise ConfigurationError(f"Unknown text encoding: {name}") from e

    if canonical not in CODE_UNITS:
        supported = ", ".join(sorted(CODE_UNITS))
        raise ConfigurationError(
            f"Encoding {name!r} has no fixed-width code unit (supported: {supported})"
        )
    return canonical


def validate_noise_bounds(noise_min_length: int, noise_max_length: int) -> None:
    """Reject a noise length range that no random draw can satisfy."""
    if noise_min_length < 0:
        raise ConfigurationError(
            f"noise_min_length must not be negative, got {noise_min_length}"
        )
    if noise_min_length >= noise_max_length:
        raise ConfigurationError(
            "noise_min_length must be less than noise_max_length "
            f"(got {noise_min_length} >= {noise_max_length})"
        )


class ScrambleSettings(BaseModel):
    """
    Immutable codec settings.

    Any validation failure surfaces as ConfigurationError rather than a
    pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    # Encoding for noise bytes and the width of serialized characters
    encoding: str = DEFAULT_ENCODING

    # Alphabet noise and random strings are drawn from
    noise_alphabet: str = DEFAULT_NOISE_ALPHABET

    # Default noise length range, max exclusive
    noise_min_length: int = DEFAULT_NOISE_MIN_LENGTH
    noise_max_length: int = DEFAULT_NOISE_MAX_LENGTH

    # Validate the position permutation when unscrambling
    strict_positions: bool = False

    def __init__(self, **data: object) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid scramble settings: {e}") from e

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        return normalize_encoding(value)

    @field_validator("noise_alphabet")
    @classmethod
    def _check_alphabet(cls, value: str) -> str:
        if not value:
            raise ValueError("noise_alphabet must not be empty")
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> "ScrambleSettings":
        validate_noise_bounds(self.noise_min_length, self.noise_max_length)

        try:
            self.noise_alphabet.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise ValueError(
                f"noise_alphabet character {e.object[e.start:e.end]!r} "
                f"cannot be encoded as {self.encoding}"
            ) from e
        return self

    @property
    def code_unit_width(self) -> int:
        """Number of bytes one serialized character occupies."""
        return CODE_UNITS[self.encoding][0]

    @property
    def code_unit_byteorder(self) -> str:
        """Byte order of a serialized character."""
        return CODE_UNITS[self.encoding][1]


class SecureKeyConfig:
    """
    Process-wide configuration for Secure API Key.

    Values are layered: built-in defaults, then an optional YAML file, then
    environment variables.
    """

    # Default configuration values
    _default_config: dict[str, object] = {
        "encoding": DEFAULT_ENCODING,
        "noise": {
            "alphabet": DEFAULT_NOISE_ALPHABET,
            "min_length": DEFAULT_NOISE_MIN_LENGTH,
            "max_length": DEFAULT_NOISE_MAX_LENGTH,
        },
        "strict_positions": False,
    }

    # Instance configuration values, loaded from file or environment
    _config: dict[str, object] = {}

    # Flag indicating if the configuration has been initialized
    _initialized: bool = False

    @classmethod
    def initialize(cls, config_path: str | None = None) -> None:
        """
        Initialize the configuration.

        Args:
            config_path: Optional path to a YAML configuration file
        """
        cls._config = deepcopy(cls._default_config)

        if config_path:
            cls._load_from_file(config_path)

        cls._load_from_env()

        cls._initialized = True

    @classmethod
    def _load_from_file(cls, config_path: str) -> None:
        """
        Load configuration from a YAML file.

        Nested sections are merged into the defaults so a file may override
        a single noise setting without restating the rest.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigurationError: If the file is missing or is not valid YAML,
                or a nested section is not a mapping
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error loading configuration file: {e}") from e

        if not file_config:
            return
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {config_path}"
            )

        for section, values in file_config.items():
            current = cls._config.get(section)
            if isinstance(current, dict):
                if not isinstance(values, dict):
                    raise ConfigurationError(f"Section {section!r} must be a mapping")
                current.update(values)
            else:
                cls._config[section] = values

    @classmethod
    def _load_from_env(cls) -> None:
        """Load configuration from environment variables."""
        noise = cls._config["noise"]

        env_encoding = os.environ.get("SECURE_API_KEY_ENCODING")
        if env_encoding:
            cls._config["encoding"] = env_encoding

        env_alphabet = os.environ.get("SECURE_API_KEY_NOISE_ALPHABET")
        if env_alphabet:
            noise["alphabet"] = env_alphabet

        for env_name, key in (
            ("SECURE_API_KEY_NOISE_MIN", "min_length"),
            ("SECURE_API_KEY_NOISE_MAX", "max_length"),
        ):
            env_value = os.environ.get(env_name)
            if env_value:
                try:
                    noise[key] = int(env_value)
                except ValueError as e:
                    raise ConfigurationError(
                        f"{env_name} must be an integer, got {env_value!r}"
                    ) from e

        env_strict = os.environ.get("SECURE_API_KEY_STRICT")
        if env_strict in ("1", "true", "True", "yes", "Yes"):
            cls._config["strict_positions"] = True
        elif env_strict in ("0", "false", "False", "no", "No"):
            cls._config["strict_positions"] = False
        elif env_strict:
            raise ConfigurationError(
                f"SECURE_API_KEY_STRICT must be a boolean, got {env_strict!r}"
            )

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Ensure the configuration is initialized."""
        if not cls._initialized:
            cls.initialize()

    @classmethod
    def get(cls, key: str, default: object = None) -> object:
        """
        Get a configuration value.

        Args:
            key: The configuration key to retrieve, dotted for nested values
            default: Default value to return if key is not found

        Returns:
            The configuration value, or default if not found
        """
        cls._ensure_initialized()

        if "." in key:
            value = cls._config
            for part in key.split("."):
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return default
            return value

        return cls._config.get(key, default)

    @classmethod
    def settings(cls) -> ScrambleSettings:
        """
        Build codec settings from the current configuration.

        Returns:
            A validated ScrambleSettings value
        """
        return ScrambleSettings(
            encoding=cls.get("encoding", DEFAULT_ENCODING),
            noise_alphabet=cls.get("noise.alphabet", DEFAULT_NOISE_ALPHABET),
            noise_min_length=cls.get("noise.min_length", DEFAULT_NOISE_MIN_LENGTH),
            noise_max_length=cls.get("noise.max_length", DEFAULT_NOISE_MAX_LENGTH),
            strict_positions=cls.get("strict_positions", False),
        )
