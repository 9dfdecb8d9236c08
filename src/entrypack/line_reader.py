"""
Buffered line-wise reading of a dictionary dump.

The dump is far too large to load at once, so it is read one line at a
time. Every semantically meaningful line of the format (entity headers,
entity definitions, opening and closing tags) stands alone on its own
line, so surrounding whitespace carries no information and is stripped.

Inputs ending in .gz or .bz2 are decompressed on the fly.
"""

import bz2
import gzip
import io
from pathlib import Path
from typing import BinaryIO, Iterator

from entrypack.config import DEFAULT_BUFFER_SIZE
from entrypack.errors import InputError


def open_binary(path: Path, buffer_size: int = DEFAULT_BUFFER_SIZE) -> BinaryIO:
    """Open a plain, gzip or bzip2 file for buffered binary reading."""
    name = str(path)
    if name.endswith(".bz2"):
        return io.BufferedReader(bz2.open(path, "rb"), buffer_size=buffer_size)
    if name.endswith(".gz"):
        return io.BufferedReader(gzip.open(path, "rb"), buffer_size=buffer_size)
    return open(path, "rb", buffering=buffer_size)


class LineReader:
    """
    Lazy, non-restartable sequence of stripped text lines.

    Usage:
        with LineReader(path) as reader:
            header = reader.next_line()   # raises InputError at end of input
            for line in reader:           # stops quietly at end of input
                ...
    """

    def __init__(self, path: Path, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.path = Path(path)
        self.line_number = 0
        self.file = open_binary(self.path, buffer_size)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        raw = self.file.readline()
        if not raw:
            raise StopIteration
        self.line_number += 1

        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputError(f"{self.path}: line {self.line_number}: invalid UTF-8: {e}") from e
        return line.strip()

    def next_line(self) -> str:
        """Return the next line; running out of input here is an error."""
        try:
            return next(self)
        except StopIteration:
            raise InputError(
                f"{self.path}: unexpected end of input after line {self.line_number}"
            ) from None

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
