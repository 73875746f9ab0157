"""
Reader for the Danish Maritime Authority "aisdk" CSV layout.

Columns used, in order: Timestamp, Type of mobile, MMSI, Latitude,
Longitude, Navigational status, ROT, SOG, COG, Heading. Further columns
are ignored.
"""

import csv
import logging
import math
from datetime import datetime
from typing import Iterator, List, Optional

from ..models.position_record import PositionRecord

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
MIN_COLUMNS = 10


def parse_float(value: str) -> Optional[float]:
    """Parse a numeric field, None when empty, not a number or infinite."""
    try:
        result = float(value)
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def parse_fields(fields: List[str]) -> PositionRecord:
    """
    Build a record from already split CSV fields.

    Raises:
        ValueError: If the timestamp or MMSI is malformed or columns are missing
    """
    if len(fields) < MIN_COLUMNS:
        raise ValueError(f"Expected at least {MIN_COLUMNS} columns, got {len(fields)}")
    fields = [field.strip() for field in fields]

    return PositionRecord(
        timestamp=datetime.strptime(fields[0], TIMESTAMP_FORMAT),
        mmsi=int(fields[2]),
        latitude=parse_float(fields[3]),
        longitude=parse_float(fields[4]),
        navigational_status=fields[5] or None,
        rot=parse_float(fields[6]),
        sog=parse_float(fields[7]),
        cog=parse_float(fields[8]),
        heading=parse_int(fields[9]),
    )


def parse_record(line: str) -> Optional[PositionRecord]:
    """
    Parse one CSV line.

    Returns:
        The record, or None for blank and comment/header lines
    """
    if not line.strip() or line.lstrip().startswith("#"):
        return None
    return parse_fields(next(csv.reader([line])))


def read_records(path: str) -> Iterator[PositionRecord]:
    """Lazily yield records from a CSV file, skipping malformed lines."""
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        # header
        next(reader, None)
        for row in reader:
            if not row or row[0].lstrip().startswith("#"):
                continue
            try:
                yield parse_fields(row)
            except ValueError as e:
                logging.warning(f"Skipping malformed line {reader.line_num} in {path}: {e}")
