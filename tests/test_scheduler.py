import unittest
from datetime import timedelta

from ais_replay.models.replay_filter import ReplayFilter
from ais_replay.scheduler import (
    ReplayScheduler,
    SchedulerState,
    compute_delay,
)
from ais_replay.services.nmea0183.checksum import verify_checksum
from ais_replay.services.nmea0183.formatter import AIVDMFormatter, GPRMCFormatter

from support import BASE_TIME, RecordingMessageService, records_at, sample_record


class TestComputeDelay(unittest.TestCase):
    def test_scaled_by_speed(self):
        later = BASE_TIME + timedelta(seconds=10)
        self.assertAlmostEqual(compute_delay(BASE_TIME, later, 5), 2.0)
        self.assertAlmostEqual(compute_delay(BASE_TIME, later, 1), 10.0)

    def test_out_of_order_is_negative(self):
        earlier = BASE_TIME - timedelta(seconds=10)
        self.assertLess(compute_delay(BASE_TIME, earlier, 1), 0)


class TestReplayScheduler(unittest.TestCase):
    def setUp(self):
        self.service = RecordingMessageService()
        self.delays = []

    def make_scheduler(self, **kwargs):
        kwargs.setdefault("sleep", self.delays.append)
        return ReplayScheduler(self.service, **kwargs)

    def test_state_transitions(self):
        scheduler = self.make_scheduler()
        self.assertEqual(scheduler.state, SchedulerState.IDLE)
        scheduler.run(records_at([0, 1]))
        self.assertEqual(scheduler.state, SchedulerState.DONE)

    def test_sends_every_record_in_order(self):
        scheduler = self.make_scheduler(formatter=GPRMCFormatter())
        sent = scheduler.run(records_at([0, 1, 2]))
        self.assertEqual(sent, 3)
        self.assertEqual(len(self.service.sentences), 3)
        self.assertIn("103045", self.service.sentences[0])
        self.assertIn("103047", self.service.sentences[2])
        for sentence in self.service.sentences:
            self.assertTrue(verify_checksum(sentence))

    def test_default_format_is_aivdm(self):
        self.make_scheduler().run([sample_record()])
        self.assertTrue(self.service.sentences[0].startswith("!AIVDM,1,1,,A,"))

    def test_non_finite_record_does_not_end_run(self):
        records = records_at([0, 1, 2])
        records[1] = sample_record(
            timestamp=records[1].timestamp, latitude=float("nan"), sog=float("inf")
        )
        sent = self.make_scheduler().run(records)
        self.assertEqual(sent, 3)
        for sentence in self.service.sentences:
            self.assertTrue(verify_checksum(sentence))

    def test_sent_records_logged_at_debug(self):
        with self.assertLogs(level="DEBUG") as logs:
            self.make_scheduler().run(records_at([0]))
        sent = [line for line in logs.output if ":Sent " in line]
        self.assertEqual(len(sent), 1)
        self.assertTrue(sent[0].startswith("DEBUG:"))

    def test_no_wait_before_first_record(self):
        self.make_scheduler().run(records_at([0]))
        self.assertEqual(self.delays, [])

    def test_waits_for_recorded_gaps(self):
        self.make_scheduler().run(records_at([0, 10, 25]))
        self.assertEqual(self.delays, [10.0, 15.0])

    def test_speed_divides_gap(self):
        # 10 records one second apart at 5x: records 5 and 10 are sent
        self.make_scheduler(speed=5).run(records_at(range(10)))
        self.assertEqual(len(self.service.sentences), 2)
        self.assertEqual(len(self.delays), 1)
        self.assertAlmostEqual(self.delays[0], 1.0)

    def test_speed_decimates(self):
        sent = self.make_scheduler(speed=3).run(records_at(range(9)))
        self.assertEqual(sent, 3)
        # 3rd, 6th and 9th qualifying records
        formatter = AIVDMFormatter()
        self.assertEqual(
            self.service.sentences,
            [formatter.format_record(record) for record in records_at([2, 5, 8])],
        )

    def test_decimation_counts_only_qualifying_records(self):
        records = records_at([0, 1, 2, 3], navigational_status="Moored") + records_at([4, 5])
        scheduler = self.make_scheduler(speed=2, replay_filter=ReplayFilter(skip_moored=True))
        self.assertEqual(scheduler.run(records), 1)
        self.assertEqual(scheduler.replay_state.qualifying_count, 2)

    def test_zero_and_negative_gaps_do_not_wait(self):
        self.make_scheduler().run(records_at([10, 10, 5]))
        self.assertEqual(self.delays, [])
        self.assertEqual(len(self.service.sentences), 3)

    def test_filter_applied(self):
        records = [
            sample_record(navigational_status="MOORED"),
            sample_record(navigational_status="Moored"),
            sample_record(navigational_status="moored"),
            sample_record(mmsi=219000000),
            sample_record(),
        ]
        replay_filter = ReplayFilter.for_vessel(220382000, skip_moored=True)
        sent = self.make_scheduler(replay_filter=replay_filter).run(records)
        self.assertEqual(sent, 1)

    def test_previous_timestamp_tracks_sent_records(self):
        scheduler = self.make_scheduler(speed=2)
        scheduler.run(records_at([0, 1, 2, 3, 4]))
        self.assertEqual(scheduler.replay_state.previous_timestamp, BASE_TIME + timedelta(seconds=3))
        self.assertEqual(scheduler.replay_state.sent_count, 2)

    def test_state_reset_between_runs(self):
        scheduler = self.make_scheduler()
        scheduler.run(records_at([0, 100]))
        self.delays.clear()
        scheduler.run(records_at([0]))
        self.assertEqual(self.delays, [])
        self.assertEqual(scheduler.replay_state.sent_count, 1)

    def test_transport_failure_ends_run(self):
        self.service = RecordingMessageService(fail_after=1)
        scheduler = self.make_scheduler()
        with self.assertRaises(ConnectionRefusedError):
            scheduler.run(records_at([0, 1, 2]))
        self.assertEqual(len(self.service.sentences), 1)
        self.assertEqual(scheduler.state, SchedulerState.DONE)

    def test_stop_during_wait_drops_pending_record(self):
        scheduler = None

        def sleep(seconds):
            self.delays.append(seconds)
            scheduler.stop()

        scheduler = self.make_scheduler(sleep=sleep)
        sent = scheduler.run(records_at([0, 1, 2]))
        self.assertEqual(sent, 1)
        self.assertEqual(self.delays, [1.0])
        self.assertEqual(scheduler.state, SchedulerState.DONE)

    def test_stop_before_run(self):
        scheduler = self.make_scheduler()
        scheduler.stop()
        self.assertEqual(scheduler.run(records_at([0, 1])), 0)

    def test_default_wait_returns_early_when_stopped(self):
        scheduler = ReplayScheduler(self.service)
        scheduler.stop()
        # the interruptible wait returns immediately once stopped
        self.assertTrue(scheduler._sleep(60))

    def test_consumes_lazy_source(self):
        def generate():
            yield from records_at([0, 1])

        self.assertEqual(self.make_scheduler().run(generate()), 2)

    def test_invalid_speed(self):
        for speed in (0, -1, 1.5, True):
            with self.subTest(speed=speed):
                with self.assertRaises(ValueError):
                    ReplayScheduler(self.service, speed=speed)


if __name__ == "__main__":
    unittest.main()
