"""Interactive terminal console for the log session controller."""

import logging
import sys
import threading
from typing import TextIO

from logger_dashboard.controller import LogSessionController
from logger_dashboard.filters import build_filter_chain
from logger_dashboard.formatter import get_formatter
from logger_dashboard.models import LogRecord

logger = logging.getLogger(__name__)

PROMPT = "$ "
EXIT_WORDS = ("exit", "quit")
HELP = "service level message (or 'generate' to toggle auto-gen, 'clear' to reset, 'exit' to quit)"


class TerminalConsole:
    """Reads command lines and prints accepted records as they arrive.

    Records are printed from worker threads, so all writes share a lock.
    """

    def __init__(
        self,
        controller: LogSessionController,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        color: bool | None = None,
        output_format: str = "text",
        drain_timeout: float = 5.0,
    ):
        self._controller = controller
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        if color is None:
            color = self._stdout.isatty()
        self._format = get_formatter(output_format=output_format, color=color)
        self._lock = threading.Lock()
        self._last_notification = 0
        self._drain_timeout = drain_timeout

    def run(self):
        """Read lines until EOF or an exit word, then tear the controller down.

        Submissions still in flight get up to drain_timeout seconds to finish.
        """
        self._controller.add_listener(self._on_record)
        self._write(HELP)
        try:
            while True:
                self._prompt()
                line = self._stdin.readline()
                if not line:
                    break
                text = line.strip()
                if not text:
                    continue
                if text.lower() in EXIT_WORDS:
                    break
                self._controller.execute_command(text)
                self._flush_notifications()
        finally:
            self._controller.wait_idle(timeout=self._drain_timeout)
            self._controller.remove_listener(self._on_record)
            self._controller.close()
            logger.info("Console session ended")
            self._flush_notifications()

    def _on_record(self, record: LogRecord):
        if self._is_visible(record):
            self._write(self._format(record))

    def _is_visible(self, record: LogRecord) -> bool:
        return build_filter_chain(self._controller.filters)(record)

    def _flush_notifications(self):
        for n in self._controller.notifications.since(self._last_notification):
            self._last_notification = n.id
            self._write(f"[{n.kind}] {n.message}")

    def _prompt(self):
        with self._lock:
            self._stdout.write(PROMPT)
            self._stdout.flush()

    def _write(self, line: str):
        with self._lock:
            self._stdout.write(line + "\n")
            self._stdout.flush()
