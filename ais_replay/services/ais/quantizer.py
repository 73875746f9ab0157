"""
Conversion of position report values to their AIS message type 1 integers.

Every function is total: missing, non-finite or out of range inputs map
to the "not available" value defined for the field.
"""

import math
from typing import Optional

MESSAGE_TYPE_POSITION_REPORT = 1
REPEAT_INDICATOR = 0

NAV_STATUS_NOT_DEFINED = 15
ROT_MAX = 126
SOG_NOT_AVAILABLE = 1023
SOG_MAX = 1022
LON_NOT_AVAILABLE = 0x6791AC0  # 181 degrees
LAT_NOT_AVAILABLE = 0x3412140  # 91 degrees
COG_NOT_AVAILABLE = 3600
COG_MAX = 3599
HEADING_NOT_AVAILABLE = 511

# 1/10000 minute
POSITION_SCALE = 600000

# First match wins
NAV_STATUS_CODES = (
    ("under way using engine", 0),
    ("at anchor", 1),
    ("not under command", 2),
    ("restricted manoeuvra", 3),
    ("constrained by", 4),
    ("moored", 5),
    ("aground", 6),
    ("engaged in fishing", 7),
    ("under way sailing", 8),
)


def is_available(value: Optional[float]) -> bool:
    """True for a finite number; None, NaN and infinities are not available."""
    return value is not None and math.isfinite(value)


def _scaled(value: Optional[float], factor: float) -> Optional[float]:
    # a finite input can still overflow once scaled
    if not is_available(value):
        return None
    scaled = value * factor
    return scaled if math.isfinite(scaled) else None


def encode_nav_status(status: Optional[str]) -> int:
    """Map free-text navigational status to the 4-bit AIS status code."""
    text = (status or "").lower()
    for phrase, code in NAV_STATUS_CODES:
        if phrase in text:
            return code
    return NAV_STATUS_NOT_DEFINED


def encode_rate_of_turn(rot: Optional[float]) -> int:
    """
    Encode rate of turn according to AIS specifications.
    ROT_AIS = sqrt(ROT / 4.733), sign preserved, limited to +/-126.
    """
    if not is_available(rot) or rot == 0.0:
        return 0
    sign = -1.0 if rot < 0.0 else 1.0
    value = round(sign * math.sqrt(abs(rot) / 4.733))
    return max(-ROT_MAX, min(ROT_MAX, value))


def encode_speed(sog: Optional[float]) -> int:
    """Speed over ground in 0.1 knot steps, 1023 when not available."""
    scaled = _scaled(sog, 10)
    if scaled is None:
        return SOG_NOT_AVAILABLE
    return min(round(scaled), SOG_MAX)


def encode_longitude(lon: Optional[float]) -> int:
    scaled = _scaled(lon, POSITION_SCALE)
    if scaled is None:
        return LON_NOT_AVAILABLE
    return round(scaled)


def encode_latitude(lat: Optional[float]) -> int:
    scaled = _scaled(lat, POSITION_SCALE)
    if scaled is None:
        return LAT_NOT_AVAILABLE
    return round(scaled)


def encode_course(cog: Optional[float]) -> int:
    """Course over ground in 0.1 degree steps, 3600 when not available."""
    scaled = _scaled(cog, 10)
    if scaled is None:
        return COG_NOT_AVAILABLE
    return min(round(scaled), COG_MAX)


def encode_heading(heading: Optional[int]) -> int:
    if not is_available(heading) or heading < 0 or heading > 359:
        return HEADING_NOT_AVAILABLE
    return int(heading)
