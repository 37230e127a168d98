"""
Compare files at block level, for several block sizes at once.

Usage:
    # Each file against the next one
    ./run_blockcmp.py a.bin b.bin c.bin

    # Every pair of files
    ./run_blockcmp.py a.bin b.bin c.bin --all

    # Only 64 KiB from offset 4096, at 512 and 4096 byte blocks
    ./run_blockcmp.py a.bin b.bin --offset 4096 --size 65536 --bsizes 512,4096

    # Compare pairs in 4 worker processes, with progress bars
    ./run_blockcmp.py *.img --all --jobs 4 --progress
"""

import argparse

from .compare import BlockCompareError, Window, validate_block_sizes, validate_window
from .config import DEFAULT_BLOCK_SIZES, DEFAULT_JOBS, DEFAULT_OFFSET, DEFAULT_SIZE
from .pairing import make_pairs, run_pairs
from .report import print_comparison, print_error
from .sources import open_sources


def parse_block_sizes(text: str) -> list[int]:
    """Parse a comma-separated list of integers, e.g. "512,4096"."""
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid block size list: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockcmp",
        description="Compare one or more files with respect to block size",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "files", nargs="+", metavar="FILE",
        help="Files to compare (at least two)"
    )

    # Comparison options
    parser.add_argument(
        "--bsizes", type=parse_block_sizes, default=list(DEFAULT_BLOCK_SIZES),
        help="Comma-separated list of block sizes to compare against "
             f"(default: {','.join(str(s) for s in DEFAULT_BLOCK_SIZES)})"
    )
    parser.add_argument(
        "--offset", type=int, default=DEFAULT_OFFSET,
        help="Offset to start comparing in byte indices"
    )
    parser.add_argument(
        "--size", type=int, default=DEFAULT_SIZE,
        help="Size of region to compare in bytes. A size of -1 means unbounded."
    )
    parser.add_argument(
        "--all", action="store_true",
        help="Compare every pairing of files instead of each file with the next"
    )

    # Execution options
    parser.add_argument(
        "--jobs", type=int, default=DEFAULT_JOBS,
        help="Worker processes used to compare file pairs"
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar for each comparison"
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.files) < 2:
        parser.error("at least two files are required")

    try:
        block_sizes = validate_block_sizes(args.bsizes)
        window = Window(offset=args.offset, length=args.size)
        validate_window(window)
        if args.jobs < 1:
            raise BlockCompareError("Jobs must be at least 1")

        with open_sources(args.files) as sources:
            pairs = make_pairs(len(sources), all_combinations=args.all)
            results = run_pairs(
                sources, pairs, block_sizes, window,
                jobs=args.jobs, progress=args.progress,
            )
            for n, (i, j, warnings, stats) in enumerate(results):
                if n > 0:
                    print()
                print_comparison(args.files[i], args.files[j], window, stats, warnings)

    except BlockCompareError as e:
        print_error(str(e))
        return 1

    return 0
