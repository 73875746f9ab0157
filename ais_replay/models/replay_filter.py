from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from .position_record import PositionRecord


@dataclass(frozen=True)
class ReplayFilter:
    """
    Decides which records take part in a replay.

    Args:
        skip_moored: Drop records whose status text mentions "moored"
        vessel_ids: Optional set of MMSI numbers to match against
        exclude: When True, vessel_ids lists vessels to drop instead of keep
    """

    skip_moored: bool = False
    vessel_ids: Optional[FrozenSet[int]] = None
    exclude: bool = False

    @classmethod
    def for_vessel(cls, mmsi: Optional[int], skip_moored: bool = False) -> "ReplayFilter":
        """Filter for a single vessel, or for all vessels when mmsi is None."""
        vessel_ids = frozenset([mmsi]) if mmsi is not None else None
        return cls(skip_moored=skip_moored, vessel_ids=vessel_ids)

    @classmethod
    def for_vessels(
        cls, mmsis: Iterable[int], exclude: bool = False, skip_moored: bool = False
    ) -> "ReplayFilter":
        return cls(skip_moored=skip_moored, vessel_ids=frozenset(mmsis), exclude=exclude)

    def is_moored(self, record: PositionRecord) -> bool:
        status = record.navigational_status
        return status is not None and "moored" in status.lower()

    def matches_vessel(self, record: PositionRecord) -> bool:
        if self.vessel_ids is None:
            return True
        listed = record.mmsi in self.vessel_ids
        return not listed if self.exclude else listed

    def accepts(self, record: PositionRecord) -> bool:
        if self.skip_moored and self.is_moored(record):
            return False
        return self.matches_vessel(record)
