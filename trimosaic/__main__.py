"""Command-line interface."""
import sys

from trimosaic.cli import main

if __name__ == "__main__":
    sys.exit(main())
