from abc import ABC, abstractmethod
from enum import Enum

from ...models.position_record import PositionRecord
from ...utils.coordinate_utils import hemisphere, to_nmea_coord
from ..ais.armor import encode_payload
from ..ais.position_report import build_position_report
from ..ais.quantizer import is_available
from .checksum import calculate_checksum


class SentenceFormat(Enum):
    """Output sentence type"""

    AIVDM = "AIVDM"
    GPRMC = "GPRMC"


class NMEA0183Formatter(ABC):
    """Formats records as NMEA 0183 sentences with checksum"""

    start_delimiter = "$"

    def frame(self, body: str) -> str:
        """Wrap a body with its start delimiter and checksum."""
        return f"{self.start_delimiter}{body}*{calculate_checksum(body)}"

    @abstractmethod
    def format_body(self, record: PositionRecord) -> str:
        """Return the sentence between the start delimiter and the checksum."""
        pass

    def format_record(self, record: PositionRecord) -> str:
        """Return the full sentence, without line terminator."""
        return self.frame(self.format_body(record))


class AIVDMFormatter(NMEA0183Formatter):
    """
    AIS Position Report carried in a single-fragment AIVDM sentence.
    Format: !AIVDM,1,1,,A,<payload>,<fill bits>*hh
    """

    start_delimiter = "!"

    def __init__(self, channel: str = "A"):
        self.channel = channel

    def format_body(self, record: PositionRecord) -> str:
        payload, fill_bits = encode_payload(build_position_report(record))
        return f"AIVDM,1,1,,{self.channel},{payload},{fill_bits}"


class GPRMCFormatter(NMEA0183Formatter):
    """
    Recommended Minimum Navigation Information for the recorded vessel.
    Format: $GPRMC,hhmmss.ss,A,ddmm.mmmm,N,dddmm.mmmm,W,x.x,x.x,ddmmyy,,,*hh

    Speed and course fields are left empty when not available. A record
    without a position is sent with status V and empty position fields.
    """

    def format_body(self, record: PositionRecord) -> str:
        ts = record.timestamp
        time = f"{ts:%H%M%S}.{ts.microsecond // 10000:02d}"
        date = f"{ts:%d%m%y}"

        if record.has_position:
            status = "A"
            lat = to_nmea_coord(record.latitude)
            ns = hemisphere(record.latitude, "N", "S")
            lon = to_nmea_coord(record.longitude)
            ew = hemisphere(record.longitude, "E", "W")
        else:
            status, lat, ns, lon, ew = "V", "", "", "", ""

        sog = f"{record.sog:.1f}" if is_available(record.sog) else ""
        cog = f"{record.cog:.1f}" if is_available(record.cog) else ""

        return (
            f"GPRMC,{time},{status},"
            f"{lat},{ns},"
            f"{lon},{ew},"
            f"{sog},{cog},{date},,,"
        )


def create_formatter(sentence_format: SentenceFormat) -> NMEA0183Formatter:
    if sentence_format == SentenceFormat.GPRMC:
        return GPRMCFormatter()
    return AIVDMFormatter()
