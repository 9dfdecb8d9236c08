#!/usr/bin/env python3
"""
entrypack - JMdict preprocessor CLI.

Converts a JMdict XML dump into:
  - an entity registry (entity set -> key -> expansion), and
  - an entrypack (one compact JSON object per dictionary entry).

Usage:
    entrypack INPUT [options]

Example:
    entrypack data/raw/JMdict.gz \\
              --entities ../jmdict-enums/data/entities.json \\
              --output entrypack.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from entrypack.config import load_settings
from entrypack.errors import EntrypackError
from entrypack.pipeline import convert

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='entrypack',
        description='Convert a JMdict XML dump into entities.json and an entrypack',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default output paths (entities.json, entrypack.json)
  entrypack JMdict

  # Compressed input, explicit outputs
  entrypack JMdict.gz --entities data/entities.json --output data/entrypack.json

  # Settings from a YAML file
  entrypack JMdict --config entrypack.yaml
        """
    )

    parser.add_argument(
        'input',
        type=Path,
        help='Path to the JMdict XML file (.gz and .bz2 are decompressed)'
    )

    parser.add_argument(
        '-c', '--config',
        type=Path,
        help='YAML settings file'
    )

    parser.add_argument(
        '-e', '--entities',
        type=Path,
        help='Entity registry output file (default: entities.json)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Entrypack output file (default: entrypack.json)'
    )

    parser.add_argument(
        '--root-tag',
        metavar='TAG',
        help='Name of the root element (default: JMdict)'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the live progress display'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the entrypack CLI."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.input.exists():
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        settings = load_settings(
            args.config,
            root_tag=args.root_tag,
            entities_path=args.entities,
            output_path=args.output,
            show_progress=False if args.no_progress else None,
        )
        convert(args.input, settings)
    except EntrypackError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
