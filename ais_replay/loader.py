"""
Filter aisdk CSV files down to (or away from) a set of vessels.

Matching lines are copied verbatim, so the output can be replayed with
ais-replay --file.
"""

import argparse
import logging
import os
import sys
from typing import Iterable, List, Optional, Set, TextIO, Tuple

from . import __version__
from .models.replay_filter import ReplayFilter
from .sources.archive import ArchiveCache, DEFAULT_CACHE_DIR
from .sources.csv_source import parse_record


def parse_mmsi_lines(lines: Iterable[str]) -> Set[int]:
    """Collect positive MMSI numbers, ignoring anything unparseable."""
    mmsis = set()
    for line in lines:
        try:
            mmsi = int(line.strip())
        except ValueError:
            continue
        if mmsi > 0:
            mmsis.add(mmsi)
    return mmsis


def load_mmsi_filter(args: argparse.Namespace, stdin: TextIO = sys.stdin) -> Set[int]:
    """
    Read the MMSI set from a file, a comma-separated list, or stdin.

    Raises:
        ValueError: If the MMSI file does not exist
    """
    if args.mmsi_file:
        if not os.path.isfile(args.mmsi_file):
            raise ValueError(f"MMSI file not found: {args.mmsi_file}")
        with open(args.mmsi_file, "r") as f:
            mmsis = parse_mmsi_lines(f)
        logging.info(f"Loaded {len(mmsis)} MMSI numbers from file")
    elif args.mmsi_list:
        mmsis = parse_mmsi_lines(args.mmsi_list.split(","))
        logging.info(f"Loaded {len(mmsis)} MMSI numbers from list")
    elif args.mmsi_stdin or not stdin.isatty():
        logging.info("Reading MMSI numbers from stdin...")
        mmsis = parse_mmsi_lines(stdin)
        logging.info(f"Loaded {len(mmsis)} MMSI numbers from stdin")
    else:
        mmsis = set()
    return mmsis


def filter_files(
    csv_paths: List[str], output: TextIO, replay_filter: ReplayFilter
) -> Tuple[int, int]:
    """
    Copy lines accepted by the filter from each file to output.

    The header of the first file is written once; later headers are skipped.

    Returns:
        Tuple of (records read, records written)
    """
    total = 0
    written = 0
    header_written = False

    for csv_path in csv_paths:
        with open(csv_path, "r", newline="", encoding="utf-8") as f:
            header = f.readline()
            if header and not header_written:
                output.write(header)
                header_written = True

            for line_num, line in enumerate(f, start=2):
                try:
                    record = parse_record(line)
                except ValueError as e:
                    logging.warning(f"Skipping malformed line {line_num} in {csv_path}: {e}")
                    continue
                if record is None:
                    continue
                total += 1
                if replay_filter.accepts(record):
                    output.write(line)
                    written += 1

    return total, written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ais-loader",
        description="Filter Automatic Identification System (AIS) CSV data by vessel MMSI",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        action="append",
        default=[],
        help="Input CSV file path (can be specified multiple times)",
    )
    parser.add_argument(
        "-o", "--output", help="Output CSV file path (default: write to stdout)"
    )
    parser.add_argument(
        "-m", "--mmsi-file", help="File containing MMSI numbers to filter (one per line)"
    )
    parser.add_argument(
        "-l", "--mmsi-list", help="Comma-separated list of MMSI numbers to filter"
    )
    parser.add_argument(
        "--mmsi-stdin",
        action="store_true",
        help="Read MMSI numbers from stdin (one per line)",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="store_true",
        help="Exclude the specified MMSIs instead of including only them",
    )
    parser.add_argument(
        "-d",
        "--date",
        dest="dates",
        action="append",
        default=[],
        help="Download data from ais.dk for a specific date (YYYY-MM-DD, can be specified multiple times)",
    )
    parser.add_argument("--cache-dir", default=DEFAULT_CACHE_DIR, help=argparse.SUPPRESS)
    parser.add_argument(
        "--version", action="version", version=f"AisFileLoader {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None, stdin: TextIO = sys.stdin) -> int:
    """Run the AIS file loader"""
    args = build_parser().parse_args(argv)
    # stdout may carry the CSV, so logging goes to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        mmsis = load_mmsi_filter(args, stdin)
        if not mmsis:
            raise ValueError(
                "No MMSI numbers specified. Use --mmsi-file, --mmsi-list, or pipe MMSI numbers to stdin"
            )

        archive = ArchiveCache(args.cache_dir)
        csv_paths = [archive.fetch(date) for date in args.dates] + args.inputs
        if not csv_paths:
            raise ValueError("At least one --input file or --date is required")

        for csv_path in csv_paths:
            if not os.path.isfile(csv_path):
                raise ValueError(f"CSV file not found: {csv_path}")
    except ValueError as e:
        logging.error(f"Error: {e}")
        return 1

    logging.info(f"Reading from {len(csv_paths)} file(s):")
    for path in csv_paths:
        logging.info(f"  {path}")
    logging.info(f"Writing to: {args.output or 'stdout'}")

    replay_filter = ReplayFilter.for_vessels(mmsis, exclude=args.exclude)
    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as output:
            total, written = filter_files(csv_paths, output, replay_filter)
    else:
        total, written = filter_files(csv_paths, sys.stdout, replay_filter)

    logging.info(
        f"Processed {total} records from {len(csv_paths)} file(s), wrote {written} records"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
