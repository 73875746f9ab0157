"""Position Report (Message Type 1) assembly."""

import bitstring

from ...models.position_record import PositionRecord
from . import quantizer
from .bit_packer import BitFieldPacker

POSITION_REPORT_BITS = 168


def build_position_report(record: PositionRecord) -> bitstring.Bits:
    """
    Build the 168-bit Type 1 message for a record.

    Layout (offset, width):
        0  6  message type        61 28 longitude
        6  2  repeat indicator    89 27 latitude
        8  30 MMSI               116 12 course over ground
        38 4  navigation status  128 9  true heading
        42 8  rate of turn       137 6  time stamp (UTC second)
        50 10 speed over ground  143 2  manoeuvre indicator
        60 1  position accuracy  145 3  spare
                                 148 1  RAIM flag
                                 149 19 radio status
    """
    packer = BitFieldPacker(POSITION_REPORT_BITS)

    packer.set_uint(0, 6, quantizer.MESSAGE_TYPE_POSITION_REPORT)
    packer.set_uint(6, 2, quantizer.REPEAT_INDICATOR)
    packer.set_uint(8, 30, record.mmsi)
    packer.set_uint(38, 4, quantizer.encode_nav_status(record.navigational_status))
    packer.set_int(42, 8, quantizer.encode_rate_of_turn(record.rot))
    packer.set_uint(50, 10, quantizer.encode_speed(record.sog))
    packer.set_uint(60, 1, 0)
    packer.set_int(61, 28, quantizer.encode_longitude(record.longitude))
    packer.set_int(89, 27, quantizer.encode_latitude(record.latitude))
    packer.set_uint(116, 12, quantizer.encode_course(record.cog))
    packer.set_uint(128, 9, quantizer.encode_heading(record.heading))
    packer.set_uint(137, 6, record.timestamp.second)
    # 143-167 (manoeuvre, spare, RAIM, radio status) stay zero

    return packer.to_bits()
