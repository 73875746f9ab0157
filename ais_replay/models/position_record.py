import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PositionRecord:
    """
    A single recorded vessel position.

    Optional numeric fields use None for "not available". The encoder
    substitutes the AIS sentinel for each of them.
    """

    timestamp: datetime
    mmsi: int
    latitude: Optional[float] = None  # degrees, north positive
    longitude: Optional[float] = None  # degrees, east positive
    navigational_status: Optional[str] = None
    rot: Optional[float] = None  # degrees per minute, starboard positive
    sog: Optional[float] = None  # knots
    cog: Optional[float] = None  # degrees true
    heading: Optional[int] = None  # degrees true, 0-359

    @property
    def has_position(self) -> bool:
        return all(
            value is not None and math.isfinite(value)
            for value in (self.latitude, self.longitude)
        )

    def __str__(self) -> str:
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M:%S} MMSI {self.mmsi} "
            f"lat={self.latitude} lon={self.longitude} "
            f"sog={self.sog} cog={self.cog} hdg={self.heading} "
            f"status={self.navigational_status!r}"
        )
