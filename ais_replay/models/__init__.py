"""Models module containing core data structures."""

from .position_record import PositionRecord
from .replay_filter import ReplayFilter

__all__ = ["PositionRecord", "ReplayFilter"]
