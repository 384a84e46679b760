"""Auto-generation timer: a cancellable interval job with two states."""

import enum
import logging
import threading
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

JOB_ID = "auto-generate"


class AutoGenState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class AutoGenerator:
    """Fires ``tick(run_id)`` every ``interval`` seconds while RUNNING.

    Each entry into RUNNING starts a new run with a fresh id and a fresh
    countdown, so the first tick lands one full interval after start. Ticks
    from a run that is no longer current are dropped.
    """

    def __init__(self, tick: Callable[[int], None], interval: float = 2.0):
        self._tick = tick
        self._interval = interval
        self._scheduler = BackgroundScheduler(
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self._lock = threading.Lock()
        self._state = AutoGenState.STOPPED
        self._run_id = 0
        self._closed = False

    @property
    def state(self) -> AutoGenState:
        with self._lock:
            return self._state

    @property
    def running(self) -> bool:
        return self.state is AutoGenState.RUNNING

    @property
    def interval(self) -> float:
        return self._interval

    def is_current(self, run_id: int) -> bool:
        """True while run_id identifies the run that is still RUNNING."""
        with self._lock:
            return self._state is AutoGenState.RUNNING and run_id == self._run_id

    def start(self) -> int | None:
        """STOPPED -> RUNNING. Returns the new run id, or None if already running."""
        with self._lock:
            if self._closed:
                raise RuntimeError("auto-generator has been shut down")
            if self._state is AutoGenState.RUNNING:
                return None
            if not self._scheduler.running:
                self._scheduler.start()
            self._run_id += 1
            self._scheduler.add_job(
                self._fire,
                "interval",
                seconds=self._interval,
                id=JOB_ID,
                args=[self._run_id],
                replace_existing=True,
            )
            self._state = AutoGenState.RUNNING
            logger.info("Auto-generate run %d started (every %.2fs)", self._run_id, self._interval)
            return self._run_id

    def stop(self) -> int | None:
        """RUNNING -> STOPPED. Returns the id of the run that ended, or None."""
        with self._lock:
            if self._state is AutoGenState.STOPPED:
                return None
            self._state = AutoGenState.STOPPED
            self._remove_job()
            logger.info("Auto-generate run %d stopped", self._run_id)
            return self._run_id

    def shutdown(self):
        """Stop any run and tear the scheduler down. No tick fires afterwards."""
        self.stop()
        with self._lock:
            self._closed = True
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)

    def _remove_job(self):
        try:
            self._scheduler.remove_job(JOB_ID)
        except JobLookupError:
            pass

    def _fire(self, run_id: int):
        if not self.is_current(run_id):
            return
        try:
            self._tick(run_id)
        except Exception:
            logger.exception("Auto-generate tick failed")
