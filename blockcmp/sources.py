"""Read-only byte sources backed by memory-mapped files."""

import mmap
import os
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Iterator

from .compare import BlockCompareError


class SourceError(BlockCompareError):
    """A file to compare is missing, not a regular file, or unreadable."""


def check_regular_file(path: Path) -> None:
    if not path.is_file():
        raise SourceError(
            f"File '{path}' either does not exist or is not a regular file"
        )


class MappedFile:
    """
    A regular file mapped read-only into memory.

    Supports len() and slicing, so it can be handed straight to compare().
    Empty files cannot be mapped and are served from an empty bytes object.
    """

    def __init__(self, path):
        self.path = Path(path)
        check_regular_file(self.path)

        self._file = None
        self._data = b""
        try:
            self._file = open(self.path, "rb")
            if os.fstat(self._file.fileno()).st_size:
                self._data = mmap.mmap(self._file.fileno(), 0, access=mmap.ACCESS_READ)
        except OSError as e:
            self.close()
            raise SourceError(f"Cannot open '{self.path}': {e.strerror or e}") from e

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, key):
        return self._data[key]

    def close(self) -> None:
        if isinstance(self._data, mmap.mmap):
            self._data.close()
        self._data = b""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self) -> str:
        return f"MappedFile({str(self.path)!r}, {len(self)} bytes)"


@contextmanager
def open_sources(paths) -> Iterator[list[MappedFile]]:
    """
    Open every path as a MappedFile, closing them all on exit.

    All paths are checked before any file is opened, so a bad path fails
    the whole run up front.
    """
    paths = [Path(p) for p in paths]
    for path in paths:
        check_regular_file(path)

    with ExitStack() as stack:
        yield [stack.enter_context(MappedFile(path)) for path in paths]
