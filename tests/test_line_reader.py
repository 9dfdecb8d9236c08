"""Tests for buffered line-wise reading."""

import bz2
import gzip
import io

import pytest

from entrypack.errors import InputError
from entrypack.line_reader import LineReader


def test_lines_are_stripped(write_dump):
    path = write_dump("  <JMdict>  \n\t<entry>\r\n</entry>")
    with LineReader(path) as reader:
        assert list(reader) == ["<JMdict>", "<entry>", "</entry>"]


def test_line_number_counts_consumed_lines(write_dump):
    path = write_dump("a\nb\nc\n")
    with LineReader(path) as reader:
        assert reader.line_number == 0
        reader.next_line()
        reader.next_line()
        assert reader.line_number == 2


def test_next_line_at_end_is_input_error(write_dump):
    path = write_dump("only line\n")
    with LineReader(path) as reader:
        assert reader.next_line() == "only line"
        with pytest.raises(InputError, match="unexpected end of input after line 1"):
            reader.next_line()


def test_iteration_is_not_restartable(write_dump):
    path = write_dump("a\nb\n")
    with LineReader(path) as reader:
        assert list(reader) == ["a", "b"]
        assert list(reader) == []


def test_blank_lines_become_empty_strings(write_dump):
    path = write_dump("a\n\n   \nb\n")
    with LineReader(path) as reader:
        assert list(reader) == ["a", "", "", "b"]


def test_invalid_utf8_is_input_error(temp_dir):
    path = temp_dir / "broken.xml"
    path.write_bytes(b"<JMdict>\n<reb>\xff\xfe</reb>\n")
    with LineReader(path) as reader:
        reader.next_line()
        with pytest.raises(InputError, match="line 2: invalid UTF-8"):
            reader.next_line()


def test_small_buffer_reads_long_lines(write_dump):
    long_line = "<gloss>" + "x" * 10_000 + "</gloss>"
    path = write_dump(long_line + "\n</JMdict>\n")
    with LineReader(path, buffer_size=16) as reader:
        assert reader.next_line() == long_line
        assert reader.next_line() == "</JMdict>"


def test_gzip_input(temp_dir, sample_document):
    path = temp_dir / "JMdict.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(sample_document)
    with LineReader(path) as reader:
        assert list(reader) == [line.strip() for line in sample_document.splitlines()]


def test_bz2_input(temp_dir, sample_document):
    path = temp_dir / "JMdict.bz2"
    with bz2.open(path, "wt", encoding="utf-8") as f:
        f.write(sample_document)
    with LineReader(path) as reader:
        assert list(reader) == [line.strip() for line in sample_document.splitlines()]


@pytest.mark.parametrize("suffix, opener", [(".gz", gzip.open), (".bz2", bz2.open)])
def test_compressed_input_uses_buffer_size(temp_dir, suffix, opener):
    long_line = "<gloss>" + "x" * 10_000 + "</gloss>"
    path = temp_dir / f"JMdict{suffix}"
    with opener(path, "wt", encoding="utf-8") as f:
        f.write(long_line + "\n</JMdict>\n")
    with LineReader(path, buffer_size=16) as reader:
        assert isinstance(reader.file, io.BufferedReader)
        assert reader.next_line() == long_line
        assert reader.next_line() == "</JMdict>"


def test_missing_file_raises_oserror(temp_dir):
    with pytest.raises(FileNotFoundError):
        LineReader(temp_dir / "missing.xml")


def test_close_on_exit(write_dump):
    with LineReader(write_dump("a\n")) as reader:
        pass
    assert reader.file.closed
