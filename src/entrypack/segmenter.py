"""
Splitting the document body into <entry> fragments.

After the preamble, the body is a sequence of entries, each spanning
several lines, with the closing tag alone on its own line:

    <entry>
    <ent_seq>1000000</ent_seq>
    ...
    </entry>

Lines are concatenated (without separators) until the entry's closing tag
is seen. No general well-formedness checking happens here; that is left to
the transcoder.
"""

import logging
from typing import BinaryIO, Callable, Iterator, Optional

from entrypack.config import DEFAULT_ENTRY_TAG, DEFAULT_ROOT_TAG
from entrypack.errors import FormatError
from entrypack.line_reader import LineReader
from entrypack.transcode import EntryTranscoder

logger = logging.getLogger(__name__)


def iter_fragments(
    reader: LineReader,
    root_tag: str = DEFAULT_ROOT_TAG,
    entry_tag: str = DEFAULT_ENTRY_TAG,
) -> Iterator[str]:
    """
    Yield complete entry fragments until the root closing tag.

    Raises:
        FormatError: Root closing tag reached in the middle of an entry
        InputError: End of input before the root closing tag
    """
    root_closer = f"</{root_tag}>"
    entry_closer = f"</{entry_tag}>"
    buf: list[str] = []

    while True:
        line = reader.next_line()

        if line == root_closer:
            if buf:
                # we should have seen the entry closer just before
                raise FormatError(
                    f"reached {root_closer} with unterminated entry: {''.join(buf)[:120]}",
                    reader.line_number,
                )
            return

        buf.append(line)
        if line == entry_closer:
            yield "".join(buf)
            buf = []


def process_entries(
    reader: LineReader,
    transcoder: EntryTranscoder,
    out: BinaryIO,
    root_tag: str = DEFAULT_ROOT_TAG,
    on_entry: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Transcode every entry in document order and write it to `out`.

    Args:
        reader: Line source positioned right after the root opening tag
        transcoder: Configured EntryTranscoder
        out: Binary output stream
        root_tag: Name of the document's root element
        on_entry: Called with the running entry count after each entry

    Returns:
        Number of entries written
    """
    count = 0
    for fragment in iter_fragments(reader, root_tag, transcoder.entry_tag):
        out.write(transcoder.transcode(fragment))
        count += 1
        if on_entry is not None:
            on_entry(count)

    logger.debug(f"Reached end of document at line {reader.line_number:,}")
    return count
