"""
Block Comparator

Scans two byte sources once, classifies every byte index in the comparison
window as matching or mismatching, and folds that classification into one
partition per block size.

A block matches only if every byte in it is equal in both sources. Bytes that
exist in only one source (the window runs past the end of the shorter one)
never match.

Blocks are numbered from the start of the window: block k of size b covers
[offset + k*b, offset + (k+1)*b). With the default window this is the usual
i // b numbering.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from tqdm import tqdm

from .config import DEFAULT_OFFSET, SCAN_CHUNK_SIZE, UNBOUNDED
from .report import print_warning


class BlockCompareError(Exception):
    """Raised when a comparison cannot run. Nothing has been printed yet."""


class InvalidBlockSize(BlockCompareError, ValueError):
    pass


class InvalidWindow(BlockCompareError, ValueError):
    pass


@dataclass(frozen=True)
class Window:
    """Byte range to compare: `length` bytes from `offset`, or to the end."""

    offset: int = DEFAULT_OFFSET
    length: int = UNBOUNDED

    @property
    def unbounded(self) -> bool:
        return self.length == UNBOUNDED

    @property
    def is_default(self) -> bool:
        return self.offset == DEFAULT_OFFSET and self.unbounded


@dataclass(frozen=True)
class BlockStats:
    """Aggregate result for one block size."""

    block_size: int
    matched: int
    mismatched: int

    @property
    def total(self) -> int:
        return self.matched + self.mismatched

    @property
    def percent_matched(self) -> float:
        return self.matched / self.total * 100.0


class Partition:
    """
    Block statuses for one block size.

    Blocks are opened lazily as the scan reaches their first byte, and since
    the scan is ascending the opened blocks are always 0..opened-1. Only the
    mismatched indices are stored; every other opened block matched.
    """

    def __init__(self, block_size: int):
        self.block_size = block_size
        self.opened = 0
        self.mismatched: set[int] = set()

    def open_through(self, scanned: int) -> None:
        """Open every block that starts before `scanned` bytes into the window."""
        needed = -(-scanned // self.block_size)
        if needed > self.opened:
            self.opened = needed

    def mark_mismatch(self, lo: int, hi: int) -> None:
        """Mark the blocks covering window-relative bytes [lo, hi)."""
        first = lo // self.block_size
        last = (hi - 1) // self.block_size
        if first == last:
            self.mismatched.add(first)
        else:
            self.mismatched.update(range(first, last + 1))

    @property
    def total(self) -> int:
        return self.opened

    def stats(self) -> BlockStats:
        mismatched = len(self.mismatched)
        return BlockStats(
            block_size=self.block_size,
            matched=self.opened - mismatched,
            mismatched=mismatched,
        )


def validate_block_sizes(block_sizes: Iterable[int]) -> list[int]:
    """Return the block sizes sorted ascending without duplicates."""
    sizes = sorted(set(block_sizes))
    if not sizes:
        raise InvalidBlockSize("At least one block size is required")
    for size in sizes:
        if size < 1:
            raise InvalidBlockSize(f"Block sizes must be positive (got {size})")
    return sizes


def validate_window(window: Window) -> None:
    if window.offset < 0:
        raise InvalidWindow("Offset must be non-negative")
    if window.length < UNBOUNDED:
        raise InvalidWindow("Size must be positive or -1")


def scan_range(len1: int, len2: int, window: Window) -> tuple[int, int]:
    """
    Return (start, end) of the byte indices to scan.

    The range ends at the end of the longer source, or earlier if the window
    is bounded. `end` may be <= `start` when the window lies past both ends.
    """
    end = max(len1, len2)
    if not window.unbounded:
        end = min(end, window.offset + window.length)
    return window.offset, end


def _mismatch_runs(source1, source2, lo: int, hi: int, common: int) -> Iterator[tuple[int, int]]:
    """Yield [start, end) runs of mismatching byte indices within [lo, hi)."""
    shared_end = min(hi, common)
    if lo < shared_end:
        chunk1 = source1[lo:shared_end]
        chunk2 = source2[lo:shared_end]
        if chunk1 != chunk2:
            for k, (a, b) in enumerate(zip(chunk1, chunk2)):
                if a != b:
                    yield lo + k, lo + k + 1

    # Present in only one source
    missing_start = max(lo, common)
    if missing_start < hi:
        yield missing_start, hi


def scan_blocks(
    source1,
    source2,
    block_sizes: Iterable[int],
    window: Window = Window(),
    progress: bool = False,
) -> dict[int, Partition]:
    """
    Scan the window once and return a Partition per block size.

    Bytes are read in SCAN_CHUNK_SIZE pieces, each byte exactly once. A chunk
    that is equal in both sources is accepted with a single comparison; only
    differing chunks are walked byte by byte.
    """
    len1, len2 = len(source1), len(source2)
    start, end = scan_range(len1, len2, window)
    common = min(len1, len2)

    partitions = {size: Partition(size) for size in block_sizes}

    with tqdm(
        total=max(0, end - start),
        desc="Comparing",
        unit="B",
        unit_scale=True,
        disable=not progress,
    ) as bar:
        for chunk_start in range(start, end, SCAN_CHUNK_SIZE):
            chunk_end = min(chunk_start + SCAN_CHUNK_SIZE, end)

            for partition in partitions.values():
                partition.open_through(chunk_end - start)

            for lo, hi in _mismatch_runs(source1, source2, chunk_start, chunk_end, common):
                for partition in partitions.values():
                    partition.mark_mismatch(lo - start, hi - start)

            bar.update(chunk_end - chunk_start)

    return partitions


def compare(
    source1,
    source2,
    block_sizes: Iterable[int],
    window: Window = Window(),
    warn: Optional[Callable[[str], None]] = None,
    progress: bool = False,
) -> dict[int, BlockStats]:
    """
    Compare two byte sources at every block size.

    Sources need len() and slicing (bytes, mmap, MappedFile...).
    Returns {block_size: BlockStats} in ascending block size order. Block
    sizes that produced no blocks (empty window) are reported through `warn`
    and left out.

    Raises InvalidBlockSize or InvalidWindow before reading anything.
    """
    if warn is None:
        warn = print_warning

    sizes = validate_block_sizes(block_sizes)
    validate_window(window)

    if len(source1) != len(source2):
        warn("Files are different sizes")

    partitions = scan_blocks(source1, source2, sizes, window, progress=progress)

    results = {}
    for size in sizes:
        partition = partitions[size]
        if partition.total == 0:
            warn(f"Block size {size} counted 0 blocks in the compared range")
            continue
        results[size] = partition.stats()
    return results
