"""
One complete conversion run.

Reads:
  - A JMdict XML dump (plain, .gz or .bz2)

Outputs:
  - entities.json  (entity registry, tab-indented JSON)
  - entrypack.json (one compact JSON object per entry)

The registry is written as soon as the preamble has been scanned, before
the first entry is transcoded. The entrypack only replaces its destination
once the root closing tag has been reached.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from entrypack.config import Settings
from entrypack.fileio import atomic_output
from entrypack.line_reader import LineReader
from entrypack.preamble import scan_preamble
from entrypack.progress_display import ProgressDisplay
from entrypack.registry import write_registry
from entrypack.segmenter import process_entries
from entrypack.transcode import EntryTranscoder

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    lines_read: int = 0
    entity_sets: int = 0
    entities: int = 0
    entries_written: int = 0
    elapsed: float = 0.0


def convert(input_path: Path, settings: Settings) -> RunStats:
    """Convert `input_path` into the registry and entrypack named in `settings`."""
    start_time = time.time()
    stats = RunStats()

    logger.info(f"Reading {input_path}")

    with LineReader(input_path, settings.buffer_size) as reader:
        registry = scan_preamble(reader, settings.root_tag)
        stats.entity_sets = len(registry.sets)
        stats.entities = registry.entity_count
        write_registry(registry, settings.entities_path)

        transcoder = EntryTranscoder(registry.decoder_entities, settings.entry_tag)

        logger.info(f"Writing entries to {settings.output_path}")
        with atomic_output(settings.output_path) as out, ProgressDisplay(
            "Transcoding entries",
            enabled=settings.show_progress,
            update_interval=settings.progress_interval,
        ) as progress:

            def on_entry(count: int) -> None:
                progress.update(Entries=count, Lines=reader.line_number)

            stats.entries_written = process_entries(
                reader, transcoder, out, settings.root_tag, on_entry=on_entry
            )

        stats.lines_read = reader.line_number

    stats.elapsed = time.time() - start_time
    log_summary(stats, settings)
    return stats


def log_summary(stats: RunStats, settings: Settings) -> None:
    elapsed_min = int(stats.elapsed / 60)
    elapsed_sec = int(stats.elapsed % 60)

    logger.info("")
    logger.info("Summary:")
    logger.info(f"  Lines read:       {stats.lines_read:,}")
    logger.info(f"  Entity sets:      {stats.entity_sets:,}")
    logger.info(f"  Entities:         {stats.entities:,}")
    logger.info(f"  Entries written:  {stats.entries_written:,}")
    logger.info(f"  Time:             {elapsed_min}m {elapsed_sec}s")
    if stats.elapsed > 0:
        logger.info(f"  Rate:             {stats.entries_written / stats.elapsed:,.0f} entries/sec")
    logger.info(f"  Registry:         {settings.entities_path}")
    logger.info(f"  Entrypack:        {settings.output_path}")
