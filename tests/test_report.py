# /// script
# requires-python = ">=3.10"
# dependencies = [
#     "pytest",
#     "tqdm",
# ]
# ///
"""
Tests for console output formatting.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from blockcmp.compare import BlockStats, Window
from blockcmp.report import (
    TABLE_HEADERS,
    format_header,
    format_table,
    print_comparison,
    print_error,
)


class TestHeader:

    def test_default_window(self):
        assert format_header("a.bin", "b.bin", Window()) == "# Compare a.bin vs. b.bin"

    def test_offset_shown(self):
        assert format_header("a", "b", Window(16, -1)) == "# Compare a vs. b [off=16 size=-1]"

    def test_size_shown(self):
        assert format_header("a", "b", Window(0, 3)) == "# Compare a vs. b [off=0 size=3]"


class TestTable:
    """Columns are left aligned, widest cell plus four spaces."""

    def test_single_row_layout(self):
        header, row = format_table({1: BlockStats(1, matched=3, mismatched=1)})

        assert header.split("  ")[0] == "Block Size"
        # Column starts: 0, 14, 35, 53, 69
        assert header.index("Blocks-Mismatched") == 14
        assert header.index("Blocks-Matched") == 35
        assert header.index("Blocks-Total") == 53
        assert header.index("Percent Matched") == 69
        assert row[0] == "1"
        assert row[14] == "1"
        assert row[35] == "3"
        assert row[53] == "4"
        assert row[69:] == "75.000000%"

    def test_rows_in_result_order(self):
        results = {
            1: BlockStats(1, matched=3, mismatched=1),
            2: BlockStats(2, matched=1, mismatched=1),
            8192: BlockStats(8192, matched=0, mismatched=1),
        }
        lines = format_table(results)
        assert [line.split() for line in lines[1:]] == [
            ["1", "1", "3", "4", "75.000000%"],
            ["2", "1", "1", "2", "50.000000%"],
            ["8192", "1", "0", "1", "0.000000%"],
        ]

    def test_wide_values_widen_column(self):
        results = {1: BlockStats(1, matched=123456789012345, mismatched=0)}
        header, row = format_table(results)
        # Blocks-Matched column grew to fit the number
        assert header.index("Blocks-Total") == row.index("123456789012345") + 15 + 4

    def test_no_trailing_whitespace(self):
        for line in format_table({1: BlockStats(1, 1, 0)}):
            assert line == line.rstrip()

    def test_empty_results_header_only(self):
        lines = format_table({})
        assert len(lines) == 1
        assert lines[0].split("    ")[0] == TABLE_HEADERS[0]


class TestPrinting:

    def test_print_comparison(self, capsys):
        print_comparison(
            "a", "b", Window(),
            {1: BlockStats(1, 3, 1)},
            ["Files are different sizes"],
        )
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "# Compare a vs. b"
        assert lines[1] == "Warning: Files are different sizes"
        assert lines[2].startswith("Block Size")
        assert lines[3].split() == ["1", "1", "3", "4", "75.000000%"]

    def test_error_goes_to_stderr(self, capsys):
        print_error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: boom\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
