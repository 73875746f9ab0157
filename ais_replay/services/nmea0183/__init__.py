from .checksum import calculate_checksum, verify_checksum
from .formatter import (
    AIVDMFormatter,
    GPRMCFormatter,
    NMEA0183Formatter,
    SentenceFormat,
    create_formatter,
)

__all__ = [
    "calculate_checksum",
    "verify_checksum",
    "AIVDMFormatter",
    "GPRMCFormatter",
    "NMEA0183Formatter",
    "SentenceFormat",
    "create_formatter",
]
