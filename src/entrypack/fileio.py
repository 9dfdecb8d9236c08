"""
All-or-nothing file output.

Both output artifacts are written to a temporary sibling file first and
renamed over the destination only once writing has finished. A run that
fails halfway leaves the destination as it was.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def atomic_output(path: Path) -> Iterator[IO[bytes]]:
    """Open a binary stream that replaces `path` when the block exits cleanly."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
        # mkstemp creates the file as 0600
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        logger.debug(f"Discarded partial output for {path}")
        raise
