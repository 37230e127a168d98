"""
File pairing and pair execution.

Two pairing policies:
  sequential - each file against its right-hand neighbour: (0,1), (1,2), ...
  all pairs  - every unordered pair, i ascending then j ascending

Pairs can be compared in worker processes. Each pair only reads its own two
files, so workers share nothing but the (read-only) paths.
"""

import multiprocessing as mp
from typing import Iterator

from .compare import compare
from .sources import MappedFile


def sequential_pairs(n: int) -> list[tuple[int, int]]:
    """Neighbour pairs (k, k+1) for k in 0..n-2."""
    return [(k, k + 1) for k in range(n - 1)]


def all_pairs(n: int) -> list[tuple[int, int]]:
    """Every (i, j) with i < j: n*(n-1)/2 pairs."""
    return [(i, j) for i in range(n) for j in range(i + 1, n)]


def make_pairs(n: int, all_combinations: bool = False) -> list[tuple[int, int]]:
    if all_combinations:
        return all_pairs(n)
    return sequential_pairs(n)


# Globals for worker processes (set via initializer)
_paths = None
_block_sizes = None
_window = None
_progress = False
_opened = {}


def _init_worker(paths, block_sizes, window, progress):
    """Store the comparison settings. Files are opened on first use."""
    global _paths, _block_sizes, _window, _progress
    _paths = paths
    _block_sizes = block_sizes
    _window = window
    _progress = progress
    _opened.clear()


def _worker_source(index: int) -> MappedFile:
    """
    This worker's mapping of file `index`, opened on first use.

    Opening here rather than in the initializer lets a SourceError travel
    back to the caller through the pool instead of killing the worker.
    """
    if index not in _opened:
        _opened[index] = MappedFile(_paths[index])
    return _opened[index]


def _compare_pair(source1, source2, i, j, block_sizes, window, progress) -> tuple:
    """Compare one pair, collecting warnings instead of printing them."""
    warnings = []
    results = compare(
        source1, source2, block_sizes, window,
        warn=warnings.append, progress=progress,
    )
    return i, j, warnings, results


def _compare_pair_worker(pair: tuple[int, int]) -> tuple:
    i, j = pair
    return _compare_pair(
        _worker_source(i), _worker_source(j), i, j,
        _block_sizes, _window, _progress,
    )


def run_pairs(
    sources,
    pairs: list[tuple[int, int]],
    block_sizes,
    window,
    jobs: int = 1,
    progress: bool = False,
) -> Iterator[tuple]:
    """
    Compare each (i, j) pair of sources.

    Yields (i, j, warnings, results) in the order of `pairs`, whatever the
    number of jobs. With jobs > 1 the sources must be MappedFiles, since
    workers reopen them by path; a file that cannot be reopened raises
    SourceError here.
    """
    if jobs <= 1 or len(pairs) <= 1:
        for i, j in pairs:
            yield _compare_pair(sources[i], sources[j], i, j, block_sizes, window, progress)
        return

    paths = [source.path for source in sources]
    num_workers = min(jobs, len(pairs))
    with mp.Pool(
        num_workers,
        initializer=_init_worker,
        initargs=(paths, block_sizes, window, progress),
    ) as pool:
        yield from pool.imap(_compare_pair_worker, pairs)
