"""Shared output utilities for the CLI."""

import sys

from mewo_mk.constants import PROG


def die(msg: str, code: int = 1) -> None:
    """Print a one-line diagnostic to stderr and exit."""
    print(f"{PROG}: {msg}", file=sys.stderr)
    sys.exit(code)
