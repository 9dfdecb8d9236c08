"""
Reading an entrypack back into Entry records.

Entrypacks are usually shipped gzip-compressed; the magic number decides,
not the file name.
"""

import gzip
from pathlib import Path
from typing import Iterator

import orjson

from entrypack.model import Entry, entry_from_dict

GZIP_MAGIC = b"\x1f\x8b"


def is_gzip(path: Path) -> bool:
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def read_entrypack(path: Path) -> Iterator[Entry]:
    """Yield the entries of an entrypack in file order."""
    opener = gzip.open if is_gzip(path) else open
    with opener(path, "rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            yield entry_from_dict(orjson.loads(line))
