"""
Entry point for running as a module.

Usage: python -m firefox_runtime [BROWSER ARGS...]
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
