"""Tests for the interactive terminal console."""

import io

from logger_dashboard.console import PROMPT, TerminalConsole
from logger_dashboard.controller import LogSessionController
from logger_dashboard.formatter import COLORS
from logger_dashboard.models import Candidate


def _run(controller, lines: str, **kwargs) -> str:
    stdout = io.StringIO()
    console = TerminalConsole(controller, stdin=io.StringIO(lines), stdout=stdout, **kwargs)
    console.run()
    return stdout.getvalue()


class TestTerminalConsole:
    def test_submit_prints_record_and_notification(self, fake_client):
        ctrl = LogSessionController(fake_client)
        output = _run(ctrl, "user-service info hello there\n", color=False)
        assert "user-service info hello there" in output
        assert "[success] Log entry created successfully" in output
        assert fake_client.submitted == [Candidate("user-service", "info", "hello there")]

    def test_color_output(self, fake_client):
        ctrl = LogSessionController(fake_client)
        output = _run(ctrl, "auth-service error boom\n", color=True)
        assert COLORS["error"] + "error" in output

    def test_invalid_command_reports_error(self, fake_client):
        ctrl = LogSessionController(fake_client)
        output = _run(ctrl, "bogus info hi\n", color=False)
        assert "[error] Invalid service or log level" in output
        assert fake_client.count == 0

    def test_exit_word_closes_controller(self, fake_client):
        ctrl = LogSessionController(fake_client)
        _run(ctrl, "exit\nuser-service info never sent\n", color=False)
        assert fake_client.closed is True
        assert fake_client.count == 0

    def test_eof_closes_controller(self, fake_client):
        ctrl = LogSessionController(fake_client)
        output = _run(ctrl, "", color=False)
        assert output.count(PROMPT) == 1
        assert fake_client.closed is True

    def test_blank_lines_skipped(self, fake_client):
        ctrl = LogSessionController(fake_client)
        output = _run(ctrl, "\n  \n", color=False)
        assert "[error]" not in output

    def test_clear_and_generate(self, fake_client):
        ctrl = LogSessionController(fake_client, interval=60)
        output = _run(ctrl, "clear\ngenerate\n", color=False)
        assert "[info] Logs cleared" in output
        assert "[info] Auto-generate started" in output
        assert ctrl.auto_generating is False

    def test_hidden_records_not_printed(self, fake_client):
        ctrl = LogSessionController(fake_client)
        ctrl.set_level_selected("debug", False)
        output = _run(ctrl, "user-service debug noise\n", color=False)
        assert "user-service debug noise" not in output
        assert "[success]" in output
