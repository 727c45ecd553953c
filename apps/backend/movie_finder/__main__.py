"""
Entry point for running Movie Finder as a module.

Usage:
    python -m movie_finder <command>
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
