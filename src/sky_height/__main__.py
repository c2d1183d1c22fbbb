"""CLI entry point: ``python -m sky_height``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
