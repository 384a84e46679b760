"""Tests for the entry point's argument handling."""

import io

import pytest

import main


class TestParseMode:
    def test_default_web(self):
        assert main._parse_mode([]) == "web"

    def test_mode_flag(self):
        assert main._parse_mode(["--mode", "terminal"]) == "terminal"
        assert main._parse_mode(["--mode=web", "--dashboard-port", "8000"]) == "web"

    def test_invalid_mode_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            main._parse_mode(["--mode", "gui"])
        assert exc_info.value.code == 2


def test_terminal_mode_runs_console(monkeypatch, tmp_path):
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.yaml"))
    monkeypatch.setattr("sys.stdin", io.StringIO("bogus info hi\nexit\n"))
    stdout = io.StringIO()
    monkeypatch.setattr("sys.stdout", stdout)
    main.main(["--mode", "terminal", "--ingest-url", "http://127.0.0.1:9/logs"])
    assert "Invalid service or log level" in stdout.getvalue()
