from .bit_packer import BitFieldPacker
from .armor import encode_payload
from .position_report import build_position_report, POSITION_REPORT_BITS

__all__ = [
    "BitFieldPacker",
    "encode_payload",
    "build_position_report",
    "POSITION_REPORT_BITS",
]
