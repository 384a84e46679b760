import threading
import time

import pytest
from flask import Flask, jsonify, request
from werkzeug.serving import make_server

from logger_dashboard.client import IngestClient, SubmissionFailed
from logger_dashboard.controller import LogSessionController
from logger_dashboard.models import Candidate, LogRecord


class FakeClient:
    """In-process stand-in for IngestClient.

    Set ``fail`` to reject every submission. Clear ``gate`` to hold
    submissions in flight until it is set again.
    """

    def __init__(self):
        self.submitted: list[Candidate] = []
        self.fail = False
        self.gate = threading.Event()
        self.gate.set()
        self.closed = False
        self._lock = threading.Lock()

    def submit(self, candidate: Candidate):
        self.gate.wait(timeout=5)
        with self._lock:
            self.submitted.append(candidate)
        if self.fail:
            raise SubmissionFailed("Ingestion endpoint returned HTTP 500", status=500)

    def close(self):
        self.closed = True

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.submitted)


class IngestStub:
    """Tiny HTTP ingestion endpoint recording every POSTed body."""

    def __init__(self):
        self.received: list[dict] = []
        self.headers: list[dict] = []
        self.status = 201
        self._lock = threading.Lock()
        self.app = Flask("ingest-stub")

        @self.app.route("/logs", methods=["POST"])
        def ingest():
            with self._lock:
                self.received.append(request.get_json(force=True))
                self.headers.append(dict(request.headers))
            return jsonify({"status": "ok"}), self.status

        self.url = None


@pytest.fixture
def ingest_stub():
    """Start the stub on a free port, yield it, then shut it down."""
    stub = IngestStub()
    server = make_server("127.0.0.1", 0, stub.app, threaded=True)
    stub.url = f"http://127.0.0.1:{server.server_port}/logs"
    t = threading.Thread(target=server.serve_forever, daemon=True)
    t.start()
    yield stub
    server.shutdown()
    t.join(timeout=5)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def controller(fake_client):
    ctrl = LogSessionController(fake_client, interval=0.05, max_workers=4)
    yield ctrl
    fake_client.gate.set()
    ctrl.close()


@pytest.fixture
def http_controller(ingest_stub):
    client = IngestClient(ingest_stub.url, timeout=2.0)
    ctrl = LogSessionController(client, interval=0.05, max_workers=4)
    yield ctrl
    ctrl.close()


def make_record(service="user-service", level="info", message="test message",
                timestamp="2024-01-15T10:30:00+00:00") -> LogRecord:
    return LogRecord(service, level, message, timestamp)


def wait_for(predicate, timeout=3.0, interval=0.01) -> bool:
    """Poll until predicate() is truthy or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())
