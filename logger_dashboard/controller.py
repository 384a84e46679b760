"""Log session controller: owns the log list, filters, timer, and submissions."""

import logging
import random
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable

from logger_dashboard.autogen import AutoGenerator
from logger_dashboard.client import IngestClient, SubmissionFailed
from logger_dashboard.commands import (
    ClearCommand,
    Command,
    InvalidCommand,
    SubmitCandidate,
    ToggleAutoGenerate,
    interpret_command,
)
from logger_dashboard.config import Config
from logger_dashboard.filters import apply_filters
from logger_dashboard.generator import generate_random_candidate
from logger_dashboard.models import Candidate, FilterState, LogRecord
from logger_dashboard.notifications import NotificationFeed
from logger_dashboard.validator import CandidateValidator

logger = logging.getLogger(__name__)

SUBMIT_OK = "Log entry created successfully"
SUBMIT_FAILED = "Failed to create log entry"


def _form_text(value) -> str:
    return "" if value is None else str(value)


class InvalidCandidate(Exception):
    """Structured form input failed schema validation (strict mode only)."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class LogSessionController:
    """Single owner of the dashboard state.

    Submissions run on a thread pool and resolve to the accepted LogRecord,
    or None when the endpoint rejected the entry or the result was discarded.
    Timer submissions are tagged with their auto-generate run; stopping the
    run cancels the ones still queued and discards the ones in flight.
    """

    def __init__(
        self,
        client: IngestClient,
        interval: float = 2.0,
        max_workers: int = 8,
        notifications: NotificationFeed | None = None,
        validator: CandidateValidator | None = None,
        rng: random.Random | None = None,
    ):
        self._client = client
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="ingest",
        )
        self._notifications = notifications or NotificationFeed()
        self._validator = validator
        self._rng = rng
        self._lock = threading.Lock()
        # Serializes auto-generate transitions; taken before _lock, never inside it
        self._autogen_lock = threading.RLock()
        self._logs: list[LogRecord] = []
        self._filters = FilterState()
        self._pending: dict[Future, int | None] = {}
        self._listeners: list[Callable[[LogRecord], None]] = []
        self._closed = False
        self._autogen = AutoGenerator(self._on_tick, interval)

    @classmethod
    def from_config(cls, config: Config) -> "LogSessionController":
        client = IngestClient(
            config.ingest_url, timeout=config.request_timeout, pool_size=config.max_workers,
        )
        return cls(
            client,
            interval=config.auto_generate_interval,
            max_workers=config.max_workers,
            notifications=NotificationFeed(max_size=config.max_notifications),
            validator=CandidateValidator() if config.strict_form_validation else None,
        )

    # --- State access ---

    @property
    def notifications(self) -> NotificationFeed:
        return self._notifications

    @property
    def logs(self) -> list[LogRecord]:
        with self._lock:
            return list(self._logs)

    @property
    def filters(self) -> FilterState:
        with self._lock:
            return self._filters.copy()

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return bool(self._pending)

    @property
    def auto_generating(self) -> bool:
        return self._autogen.running

    def visible_logs(self) -> list[LogRecord]:
        """Recompute the filtered view from scratch."""
        with self._lock:
            return apply_filters(self._logs, self._filters)

    def snapshot(self) -> dict:
        with self._lock:
            visible = apply_filters(self._logs, self._filters)
            total = len(self._logs)
            filters = self._filters.to_dict()
            loading = bool(self._pending)
        return {
            "logs": [r.to_dict() for r in visible],
            "total": total,
            "visible": len(visible),
            "filters": filters,
            "auto_generate": {
                "state": self._autogen.state.value,
                "interval": self._autogen.interval,
            },
            "loading": loading,
            "notifications": [n.to_dict() for n in self._notifications.get_recent(5)],
        }

    def add_listener(self, callback: Callable[[LogRecord], None]):
        """Register a callback invoked with every newly accepted record."""
        with self._lock:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[LogRecord], None]):
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    # --- Filters ---

    def set_service_selected(self, service: str, selected: bool):
        with self._lock:
            self._filters.set_service(service, selected)

    def set_level_selected(self, level: str, selected: bool):
        with self._lock:
            self._filters.set_level(level, selected)

    def set_query(self, query: str):
        with self._lock:
            self._filters.query = query

    def replace_filters(self, services=None, levels=None, query=None):
        """Replace any of the three filter parts; None leaves a part as is."""
        with self._lock:
            if services is not None:
                self._filters.services = set(services)
            if levels is not None:
                self._filters.levels = set(levels)
            if query is not None:
                self._filters.query = query

    # --- Submission ---

    def submit_log(self, candidate: Candidate) -> Future:
        """Send a candidate to the ingestion endpoint without blocking."""
        return self._submit(candidate, None)

    def submit_form(self, service, level, message) -> Future:
        """Submit structured form fields as a candidate.

        Fields go out as-is unless the controller was built with a validator.
        Missing fields become empty strings and other values are stringified,
        so stored records always carry text.
        """
        candidate = Candidate(_form_text(service), _form_text(level), _form_text(message))
        if self._validator is not None:
            is_valid, errors = self._validator.validate(candidate.to_payload())
            if not is_valid:
                self._notifications.error("Invalid log entry: " + "; ".join(errors))
                raise InvalidCandidate(errors)
        return self.submit_log(candidate)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no submission is outstanding. Returns False on timeout."""
        with self._lock:
            futures = list(self._pending)
        if not futures:
            return True
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    def _submit(self, candidate: Candidate, run_id: int | None) -> Future | None:
        with self._lock:
            if run_id is not None and (self._closed or not self._autogen.is_current(run_id)):
                return None
            if self._closed:
                raise RuntimeError("controller is closed")
            future = self._executor.submit(self._deliver, candidate, run_id)
            self._pending[future] = run_id
        logger.debug("Submitting %s/%s entry (run=%s)", candidate.service, candidate.level, run_id)
        future.add_done_callback(self._forget)
        return future

    def _deliver(self, candidate: Candidate, run_id: int | None) -> LogRecord | None:
        try:
            self._client.submit(candidate)
            accepted = True
        except SubmissionFailed as e:
            logger.warning("Submission failed: %s", e)
            accepted = False
        except Exception:
            logger.exception("Unexpected error while submitting log entry")
            accepted = False

        record = None
        with self._lock:
            if self._closed or (run_id is not None and not self._autogen.is_current(run_id)):
                logger.debug("Discarding result of cancelled submission (run=%s)", run_id)
                return None
            if accepted:
                record = LogRecord.accept(candidate)
                self._logs.append(record)
                listeners = list(self._listeners)

        if record is None:
            self._notifications.error(SUBMIT_FAILED)
            return None

        self._notifications.success(SUBMIT_OK)
        for listener in listeners:
            try:
                listener(record)
            except Exception:
                logger.exception("Log listener raised")
        return record

    def _forget(self, future: Future):
        with self._lock:
            self._pending.pop(future, None)

    # --- Commands ---

    def execute_command(self, text: str) -> Command:
        """Parse a terminal line and carry it out."""
        command = interpret_command(text)
        if isinstance(command, ClearCommand):
            self.clear_logs()
        elif isinstance(command, ToggleAutoGenerate):
            self.toggle_auto_generate()
        elif isinstance(command, SubmitCandidate):
            self.submit_log(command.candidate)
        elif isinstance(command, InvalidCommand):
            self._notifications.error(command.reason)
        return command

    def clear_logs(self):
        with self._lock:
            cleared = len(self._logs)
            self._logs = []
        logger.info("Cleared %d log entries", cleared)
        self._notifications.info("Logs cleared")

    # --- Auto-generation ---

    def start_auto_generate(self) -> bool:
        with self._autogen_lock:
            with self._lock:
                if self._closed:
                    raise RuntimeError("controller is closed")
            if self._autogen.start() is None:
                return False
        self._notifications.info("Auto-generate started")
        return True

    def stop_auto_generate(self) -> bool:
        with self._autogen_lock:
            run_id = self._autogen.stop()
            if run_id is None:
                return False
        self._cancel_run(run_id)
        self._notifications.info("Auto-generate stopped")
        return True

    def toggle_auto_generate(self) -> bool:
        """Flip auto-generation. Returns True if it is now running.

        The read and the transition happen under one lock, so concurrent
        toggles from dashboard requests never both start or both stop.
        """
        with self._autogen_lock:
            if self._autogen.running:
                self.stop_auto_generate()
                return False
            self.start_auto_generate()
            return True

    def _on_tick(self, run_id: int):
        self._submit(generate_random_candidate(self._rng), run_id)

    def _cancel_run(self, run_id: int):
        with self._lock:
            futures = [f for f, r in self._pending.items() if r == run_id]
        cancelled = sum(1 for f in futures if f.cancel())
        if futures:
            logger.debug(
                "Run %d: cancelled %d queued, discarding %d in flight",
                run_id, cancelled, len(futures) - cancelled,
            )

    # --- Teardown ---

    def close(self):
        """Stop the timer, drop outstanding submissions, release resources."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            futures = list(self._pending)
        self._autogen.shutdown()
        for future in futures:
            future.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()
        logger.info("Log session closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
