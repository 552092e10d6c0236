"""Tests for the recurring background job scheduler."""

import threading

import pytest

from app.config.settings import Settings
from app.main import build_scheduler
from app.services.background import BackgroundScheduler, BookingExpirationService, HotelStatusService
from app.services.background.task_scheduler_service import TaskStatus

WAIT_SECONDS = 5.0


@pytest.fixture
def scheduler():
    scheduler = BackgroundScheduler(join_timeout_seconds=WAIT_SECONDS)
    yield scheduler
    scheduler.stop()


def _noop():
    return None


class TestAddJob:
    @pytest.mark.parametrize("interval", [0, -1, -0.5])
    def test_rejects_non_positive_interval(self, scheduler, interval):
        with pytest.raises(ValueError):
            scheduler.add_job("poll", _noop, interval)
        assert scheduler.jobs == []

    def test_rejects_duplicate_name(self, scheduler):
        scheduler.add_job("poll", _noop, 1.0)
        with pytest.raises(ValueError):
            scheduler.add_job("poll", _noop, 2.0)
        assert len(scheduler.jobs) == 1

    def test_rejects_jobs_after_start(self, scheduler):
        scheduler.add_job("poll", _noop, 60.0)
        scheduler.start()
        with pytest.raises(RuntimeError):
            scheduler.add_job("late", _noop, 60.0)


class TestRunJob:
    def test_success_records_result(self, scheduler):
        job = scheduler.add_job("answer", lambda: 42, 1.0)

        execution = scheduler.run_job(job)

        assert execution.status is TaskStatus.SUCCESS
        assert execution.result == 42
        assert execution.error is None
        assert job.runs == 1
        assert job.failures == 0
        assert job.last_execution is execution

    def test_failure_is_recorded_not_raised(self, scheduler):
        def broken():
            raise RuntimeError("database unavailable")

        job = scheduler.add_job("broken", broken, 1.0)

        execution = scheduler.run_job(job)

        assert execution.status is TaskStatus.FAILED
        assert execution.error == "database unavailable"
        assert job.runs == 1
        assert job.failures == 1


class TestLifecycle:
    def test_loop_survives_a_failing_run(self, scheduler):
        calls = []
        second_run = threading.Event()

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("first run fails")
            second_run.set()

        job = scheduler.add_job("flaky", flaky, 0.01)
        scheduler.start()

        assert second_run.wait(WAIT_SECONDS)
        scheduler.stop()

        assert job.failures == 1
        assert job.runs >= 2

    def test_stop_joins_job_threads(self, scheduler):
        started = threading.Event()
        scheduler.add_job("poll", started.set, 60.0)
        scheduler.start()
        assert started.wait(WAIT_SECONDS)
        assert scheduler.running

        threads = [t for t in threading.enumerate() if t.name == "job-poll"]
        scheduler.stop()

        assert not scheduler.running
        assert threads and not any(t.is_alive() for t in threads)
        assert all(job._thread is None for job in scheduler.jobs)

    def test_stop_without_start_is_a_no_op(self, scheduler):
        scheduler.add_job("poll", _noop, 1.0)
        scheduler.stop()
        assert not scheduler.running


class TestBuildScheduler:
    def test_registers_every_background_job(self, session_factory):
        settings = Settings(
            BOOKING_EXPIRY_POLL_SECONDS=2.0,
            BOOKING_EXPIRY_SWEEP_SECONDS=120.0,
            HOTEL_STATUS_SWEEP_SECONDS=30.0,
        )

        scheduler = build_scheduler(
            settings,
            BookingExpirationService(session_factory),
            HotelStatusService(session_factory),
        )

        assert {job.name: job.interval_seconds for job in scheduler.jobs} == {
            "booking-expiration": 2.0,
            "booking-expiration-sweep": 120.0,
            "hotel-status-sweep": 30.0,
        }
