import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Optional

from .models.position_record import PositionRecord
from .models.replay_filter import ReplayFilter
from .services.message_service import MessageService
from .services.nmea0183.formatter import AIVDMFormatter, NMEA0183Formatter


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass
class ReplayState:
    """Per-run bookkeeping, reset at the start of every run"""

    previous_timestamp: Optional[datetime] = None
    qualifying_count: int = 0
    sent_count: int = 0


def compute_delay(previous: datetime, current: datetime, speed: int) -> float:
    """Seconds to wait between two records at the given speed multiplier."""
    return (current - previous).total_seconds() / speed


class ReplayScheduler:
    """
    Replays position records in their original rhythm.

    The speed multiplier is applied twice: only every Nth qualifying record
    is sent, and the wait between sent records is the recorded gap divided
    by N.
    """

    def __init__(
        self,
        message_service: MessageService,
        formatter: Optional[NMEA0183Formatter] = None,
        replay_filter: Optional[ReplayFilter] = None,
        speed: int = 1,
        sleep: Optional[Callable[[float], object]] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            message_service: Transport used for every sentence
            formatter: Sentence formatter, AIVDM by default
            replay_filter: Which records to replay, all by default
            speed: Positive integer speed multiplier
            sleep: Wait function taking seconds. Defaults to an interruptible
                wait that returns early when stop() is called.
        """
        if isinstance(speed, bool) or not isinstance(speed, int) or speed < 1:
            raise ValueError(f"Speed must be a positive integer, got: {speed!r}")

        self.message_service = message_service
        self.formatter = formatter or AIVDMFormatter()
        self.replay_filter = replay_filter or ReplayFilter()
        self.speed = speed
        self._stop_event = threading.Event()
        self._sleep = sleep or self._stop_event.wait

        self.state = SchedulerState.IDLE
        self.replay_state = ReplayState()

    def stop(self):
        """Request the run to end before the next record is sent."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self, records: Iterable[PositionRecord]) -> int:
        """
        Replay records in order.

        Returns:
            int: Number of sentences sent

        Raises:
            OSError: If a sentence cannot be sent. The run ends there.
        """
        self.replay_state = ReplayState()
        self.state = SchedulerState.RUNNING
        logging.info(f"Replay started at {self.speed}x speed")

        try:
            for record in records:
                if self.stopped:
                    break
                self._process_record(record)
        except KeyboardInterrupt:
            logging.info("Replay stopped by user")
        finally:
            self.state = SchedulerState.DONE

        if self.stopped:
            logging.info("Replay stopped")
        logging.info(f"Replay finished, sent {self.replay_state.sent_count} sentences")
        return self.replay_state.sent_count

    def _process_record(self, record: PositionRecord):
        state = self.replay_state
        if not self.replay_filter.accepts(record):
            return

        state.qualifying_count += 1
        if state.qualifying_count % self.speed:
            return

        if state.previous_timestamp is not None:
            delay = compute_delay(state.previous_timestamp, record.timestamp, self.speed)
            if delay > 0:
                self._sleep(delay)
                # a stop during the wait drops this record
                if self.stopped:
                    return

        sentence = self.formatter.format_record(record)
        self.message_service.send_nmea(sentence)
        logging.debug(f"Sent {record}")

        state.previous_timestamp = record.timestamp
        state.sent_count += 1
