"""
Entry point for running prosefmt as a module.

Usage:
    python -m prosefmt check ./docs
    python -m prosefmt --help
"""

import sys
from prosefmt.cli import main

if __name__ == "__main__":
    sys.exit(main())
