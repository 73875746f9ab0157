"""
AIS Replay
Replays recorded AIS position reports as live NMEA 0183 traffic over UDP.
"""

from .scheduler import ReplayScheduler
from .models.position_record import PositionRecord
from .models.replay_filter import ReplayFilter

__version__ = "0.3.6"

__all__ = [
    "ReplayScheduler",
    "PositionRecord",
    "ReplayFilter",
]
