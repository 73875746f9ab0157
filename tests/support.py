from datetime import datetime, timedelta

from ais_replay.models.position_record import PositionRecord

BASE_TIME = datetime(2024, 1, 15, 10, 30, 45)


def sample_record(**overrides) -> PositionRecord:
    """Record used throughout the tests, with optional field overrides."""
    values = dict(
        timestamp=BASE_TIME,
        mmsi=220382000,
        latitude=55.1234,
        longitude=-2.5678,
        navigational_status="Under way using engine",
        rot=0.0,
        sog=12.5,
        cog=90.0,
        heading=180,
    )
    values.update(overrides)
    return PositionRecord(**values)


def records_at(offsets, **overrides):
    """Records at BASE_TIME plus each offset in seconds."""
    return [
        sample_record(timestamp=BASE_TIME + timedelta(seconds=offset), **overrides)
        for offset in offsets
    ]


class RecordingMessageService:
    """Stands in for MessageService, keeping sentences instead of sending"""

    def __init__(self, fail_after=None):
        self.sentences = []
        self.fail_after = fail_after

    def send_nmea(self, sentence):
        if self.fail_after is not None and len(self.sentences) >= self.fail_after:
            raise ConnectionRefusedError("Connection refused")
        self.sentences.append(sentence)
