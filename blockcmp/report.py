"""Console output: comparison headers, result tables, warnings and errors."""

import sys

from .config import TABLE_PADDING


TABLE_HEADERS = (
    "Block Size",
    "Blocks-Mismatched",
    "Blocks-Matched",
    "Blocks-Total",
    "Percent Matched",
)


def print_warning(message: str) -> None:
    print(f"Warning: {message}")


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def format_header(name1: str, name2: str, window) -> str:
    """Header line for one compared pair; the window is shown when not the default."""
    if window.is_default:
        return f"# Compare {name1} vs. {name2}"
    return f"# Compare {name1} vs. {name2} [off={window.offset} size={window.length}]"


def format_table(results: dict) -> list[str]:
    """
    Render {block_size: BlockStats} as left-aligned columns.

    Every column is as wide as its widest cell plus TABLE_PADDING spaces.
    """
    rows = [TABLE_HEADERS]
    for size, stats in results.items():
        rows.append((
            str(size),
            str(stats.mismatched),
            str(stats.matched),
            str(stats.total),
            f"{stats.percent_matched:f}%",
        ))

    widths = [max(len(row[col]) for row in rows) + TABLE_PADDING
              for col in range(len(TABLE_HEADERS))]

    return [
        "".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    ]


def print_comparison(name1: str, name2: str, window, results: dict,
                     warnings: list[str] = ()) -> None:
    """Print header, any warnings raised while comparing, then the table."""
    print(format_header(name1, name2, window))
    for message in warnings:
        print_warning(message)
    for line in format_table(results):
        print(line)
