"""Tests for record formatters."""

import json

from conftest import make_record
from logger_dashboard.formatter import (
    COLORS,
    DEFAULT_COLOR,
    RESET,
    format_color,
    format_json,
    format_text,
    get_formatter,
)


class TestFormatText:
    def test_contains_fields(self):
        line = format_text(make_record(service="auth-service", level="warn", message="slow login"))
        assert "auth-service" in line
        assert "warn" in line
        assert line.endswith("slow login")

    def test_unparseable_timestamp_kept(self):
        line = format_text(make_record(timestamp="not-a-time"))
        assert line.startswith("[not-a-time]")


class TestFormatJson:
    def test_round_trips_fields(self):
        record = make_record(message="hello")
        assert json.loads(format_json(record)) == record.to_dict()


class TestFormatColor:
    def test_error_is_red(self):
        line = format_color(make_record(level="error"))
        assert COLORS["error"] + "error" + RESET in line

    def test_debug_uses_default_color(self):
        line = format_color(make_record(level="debug"))
        assert DEFAULT_COLOR + "debug" + RESET in line


class TestGetFormatter:
    def test_default_text(self):
        assert get_formatter() is format_text

    def test_json_wins_over_color(self):
        assert get_formatter(output_format="json", color=True) is format_json

    def test_color(self):
        assert get_formatter(color=True) is format_color
