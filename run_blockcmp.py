#!/usr/bin/env -S uv run --script
# /// script
# requires-python = '>=3.10'
# dependencies = [
#   "tqdm"
# ]
# ///
"""
blockcmp - Main Entry Point

Compare files block by block at several block sizes.
Run with --help for options and examples.
"""

import sys

from blockcmp.cli import main


if __name__ == "__main__":
    sys.exit(main())
