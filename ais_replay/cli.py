import argparse
import logging
import os
import signal
from typing import List, Optional

import httpx

from . import __version__
from .config import ReplayOptions, load_config, parse_log_level
from .models.replay_filter import ReplayFilter
from .scheduler import ReplayScheduler
from .services.message_service import MessageService
from .services.nmea0183.formatter import SentenceFormat, create_formatter
from .sources.archive import ArchiveCache
from .sources.csv_source import read_records


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ais-replay",
        description="Replay Automatic Identification System (AIS) vessel tracking data via UDP",
    )
    parser.add_argument("--config", help="Path to YAML configuration file")
    parser.add_argument("-f", "--file", help="Path to a CSV file with AIS records")
    parser.add_argument(
        "-d", "--date", help="Download data for a specific date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "-m", "--mmsi", type=int, help="Filter to a specific vessel by MMSI"
    )
    parser.add_argument(
        "-x",
        "--x-speed",
        dest="speed",
        type=int,
        help="Playback speed multiplier (default: 1)",
    )
    parser.add_argument(
        "-g",
        "--gps",
        action="store_true",
        default=None,
        help="Output GPS format (GPRMC) instead of AIVDM",
    )
    parser.add_argument(
        "-s",
        "--skip-moored",
        action="store_true",
        default=None,
        help="Skip moored/stationary vessels",
    )
    parser.add_argument(
        "-c",
        "--purge-cache",
        action="store_true",
        default=None,
        help="Clear cached downloads and exit",
    )
    parser.add_argument(
        "--host", help="UDP host/IP address to send events to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "-p", "--port", type=int, help="UDP port to send events to (default: 10110)"
    )
    parser.add_argument(
        "--loglevel",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override logging level",
    )
    parser.add_argument(
        "--version", action="version", version=f"AisReplay {__version__}"
    )
    return parser


def resolve_options(args: argparse.Namespace) -> ReplayOptions:
    """Merge the configuration file with command-line overrides."""
    config = load_config(args.config) if args.config else {}

    # Command-line arguments override config file
    for key in (
        "file",
        "date",
        "mmsi",
        "speed",
        "gps",
        "skip_moored",
        "purge_cache",
        "host",
        "port",
        "loglevel",
    ):
        value = getattr(args, key)
        if value is not None:
            config[key] = value

    return ReplayOptions.from_dict(config)


def replay(options: ReplayOptions) -> int:
    """Run a replay for validated options and return the number of sentences sent."""
    if options.file and not os.path.isfile(options.file):
        raise ValueError(f"CSV file not found: {options.file}")

    sentence_format = SentenceFormat.GPRMC if options.gps else SentenceFormat.AIVDM
    with MessageService(options.host, options.port) as message_service:
        csv_path = options.file or ArchiveCache(options.cache_dir).fetch(options.date)

        vessels = f"MMSI {options.mmsi}" if options.mmsi is not None else "all vessels"
        logging.info(f"Replaying from {csv_path}, {vessels} at {options.speed}x speed")
        logging.info(f"Sending to {options.host}:{options.port}")

        scheduler = ReplayScheduler(
            message_service,
            formatter=create_formatter(sentence_format),
            replay_filter=ReplayFilter.for_vessel(options.mmsi, options.skip_moored),
            speed=options.speed,
        )

        def handle_signal(signum, frame):
            logging.info(f"Received signal {signum}, stopping replay")
            scheduler.stop()

        previous_handlers = {
            signum: signal.signal(signum, handle_signal)
            for signum in (signal.SIGINT, signal.SIGTERM)
        }
        try:
            return scheduler.run(read_records(csv_path))
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the AIS replay"""
    args = build_parser().parse_args(argv)

    try:
        options = resolve_options(args)
        options.validate()
    except (OSError, ValueError) as e:
        logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s")
        logging.error(f"Error: {e}")
        return 1

    # Set up logging
    logging.basicConfig(
        level=parse_log_level(options.loglevel),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if options.purge_cache:
        ArchiveCache(options.cache_dir).purge()
        return 0

    try:
        replay(options)
    except (ValueError, OSError, httpx.HTTPError) as e:
        logging.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
