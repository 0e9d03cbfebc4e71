"""
Command line interface for Secure API Key.

Secures, unsecures and inspects API key blobs, and generates random
strings from the configured noise alphabet.
"""

import argparse
import logging
import sys

from .codec import default_codec, reset_default_codec
from .config import SecureKeyConfig
from .errors import SecureAPIKeyError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="secure-api-key",
        description="Reversibly obfuscate API keys (this is not encryption)",
    )

    parser.add_argument(
        "--config",
        help="Path to a YAML configuration file"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    secure_parser = commands.add_parser("secure", help="Obfuscate a value")
    secure_parser.add_argument("value", help="The plaintext value to secure")
    secure_parser.add_argument(
        "--min",
        type=int,
        dest="noise_min_length",
        help="Minimum noise characters on each side (default: from config, 30)"
    )
    secure_parser.add_argument(
        "--max",
        type=int,
        dest="noise_max_length",
        help="Exclusive maximum noise characters on each side (default: from config, 90)"
    )

    unsecure_parser = commands.add_parser("unsecure", help="Recover a secured value")
    unsecure_parser.add_argument("blob", help="The Base64 blob produced by 'secure'")

    random_parser = commands.add_parser("random", help="Generate a random string")
    random_parser.add_argument("length", type=int, help="Number of characters")

    inspect_parser = commands.add_parser("inspect", help="Show the structure of a blob")
    inspect_parser.add_argument("blob", help="The Base64 blob produced by 'secure'")

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> str:
    """
    Execute a parsed command.

    Args:
        args: Parsed arguments

    Returns:
        The text to print
    """
    codec = default_codec()

    if args.command == "secure":
        return codec.secure(args.value, args.noise_min_length, args.noise_max_length)

    if args.command == "unsecure":
        return codec.unsecure(args.blob)

    if args.command == "random":
        return codec.random_string(args.length)

    blob = codec.inspect(args.blob)
    return "\n".join([
        f"Leading noise: {len(blob.leading_noise)} characters",
        f"Scrambled pairs: {len(blob.pairs)}",
        f"Trailing noise: {len(blob.trailing_noise)} characters",
    ])


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Secure API Key CLI."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        SecureKeyConfig.initialize(args.config)
        reset_default_codec()
        output = run_command(args)
    except SecureAPIKeyError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
