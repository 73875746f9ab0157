"""Record sources: recorded CSV files and the ais.dk archive."""

from .archive import ArchiveCache, DEFAULT_CACHE_DIR
from .csv_source import parse_record, read_records

__all__ = ["ArchiveCache", "DEFAULT_CACHE_DIR", "parse_record", "read_records"]
