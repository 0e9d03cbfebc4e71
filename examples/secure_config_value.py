"""
Example of hiding an API key in a configuration file.

This example secures a key, stores the blob in YAML and reads it back.
"""

import random
import tempfile
from pathlib import Path

import yaml

from secure_api_key import ScrambleCodec, ScrambleSettings


def main() -> None:
    """Example usage of the scramble codec."""
    # A seeded generator makes the output reproducible between runs
    codec = ScrambleCodec(ScrambleSettings(noise_min_length=10, noise_max_length=20), random.Random(42))

    api_key = "sk-live-0123456789abcdef"
    secured = codec.secure(api_key)
    print(f"Secured value: {secured}")

    with tempfile.TemporaryDirectory() as directory:
        config_path = Path(directory) / "service.yaml"
        config_path.write_text(yaml.safe_dump({"api": {"key": secured}}), encoding="utf-8")

        stored = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        print(f"Recovered key: {codec.unsecure(stored['api']['key'])}")

    blob = codec.inspect(secured)
    print(f"Noise: {len(blob.leading_noise)} + {len(blob.trailing_noise)} characters")
    print(f"Scrambled positions: {[pair.position for pair in blob.pairs]}")


if __name__ == "__main__":
    main()
