"""
Main entry point for running snapspace as a module.

Usage:
    python -m snapspace <command> [options]
"""

from .cli import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
