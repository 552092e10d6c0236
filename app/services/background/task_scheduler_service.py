"""
Task scheduler service.

Runs recurring background jobs on daemon threads:
- Booking hold expiration poll
- Hotel status sweep

Each job runs once immediately and then every ``interval_seconds`` until
the scheduler is stopped. A failing run is logged and does not stop the
job.
"""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from app.core.logging import get_logger
from app.models.base import utc_now


class TaskStatus(str, Enum):
    """Outcome of one job run."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class TaskExecution:
    """Execution record for the latest run of a job."""
    status: TaskStatus
    duration_seconds: float
    started_at: datetime
    result: Any = None
    error: Optional[str] = None


@dataclass
class RecurringJob:
    """A named callable run on a fixed interval."""
    name: str
    func: Callable[[], Any]
    interval_seconds: float
    runs: int = 0
    failures: int = 0
    last_execution: Optional[TaskExecution] = None
    _thread: Optional[threading.Thread] = field(default=None, repr=False)


class BackgroundScheduler:
    """
    Orchestrates recurring job execution.

    Features:
    - One daemon thread per job
    - Cooperative shutdown through a shared stop event
    - Per-run execution tracking
    """

    def __init__(self, join_timeout_seconds: float = 5.0):
        self._jobs: Dict[str, RecurringJob] = {}
        self._stop_event = threading.Event()
        self._join_timeout = join_timeout_seconds
        self._started = False
        self._logger = get_logger(self.__class__.__name__)

    @property
    def running(self) -> bool:
        return self._started and not self._stop_event.is_set()

    @property
    def jobs(self) -> List[RecurringJob]:
        return list(self._jobs.values())

    def add_job(self, name: str, func: Callable[[], Any], interval_seconds: float) -> RecurringJob:
        """Register a job; must be called before ``start``."""
        if self._started:
            raise RuntimeError("Cannot add jobs to a started scheduler")
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if name in self._jobs:
            raise ValueError(f"Job '{name}' already registered")

        job = RecurringJob(name=name, func=func, interval_seconds=interval_seconds)
        self._jobs[name] = job
        return job

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._stop_event.clear()
        for job in self._jobs.values():
            job._thread = threading.Thread(
                target=self._run_loop,
                args=(job,),
                name=f"job-{job.name}",
                daemon=True,
            )
            job._thread.start()
        self._logger.info(f"Background scheduler started with {len(self._jobs)} jobs")

    def stop(self) -> None:
        if not self._started:
            return
        self._stop_event.set()
        for job in self._jobs.values():
            if job._thread is not None:
                job._thread.join(timeout=self._join_timeout)
                job._thread = None
        self._started = False
        self._logger.info("Background scheduler stopped")

    def run_job(self, job: RecurringJob) -> TaskExecution:
        """Run one job once, recording the outcome."""
        started_at = utc_now()
        start = time.perf_counter()
        try:
            result = job.func()
            execution = TaskExecution(
                status=TaskStatus.SUCCESS,
                duration_seconds=time.perf_counter() - start,
                started_at=started_at,
                result=result,
            )
        except Exception as e:
            job.failures += 1
            execution = TaskExecution(
                status=TaskStatus.FAILED,
                duration_seconds=time.perf_counter() - start,
                started_at=started_at,
                error=str(e),
            )
            self._logger.exception(f"Job '{job.name}' failed: {str(e)}")
        job.runs += 1
        job.last_execution = execution
        return execution

    def _run_loop(self, job: RecurringJob) -> None:
        while not self._stop_event.is_set():
            self.run_job(job)
            if self._stop_event.wait(job.interval_seconds):
                break
