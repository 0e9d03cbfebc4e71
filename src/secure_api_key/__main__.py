"""Allow running the CLI with ``python -m secure_api_key``."""

from .cli import main

if __name__ == "__main__":
    main()
