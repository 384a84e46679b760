"""Output formatters for log records: text, JSON (NDJSON), colorized (ANSI)."""

import json
from datetime import datetime
from typing import Callable

from logger_dashboard.models import LogRecord

# ANSI color codes
COLORS = {
    "error": "\033[31m",  # red
    "warn": "\033[33m",   # yellow
    "info": "\033[34m",   # blue
}
DEFAULT_COLOR = "\033[90m"  # grey
SERVICE_COLOR = "\033[32m"  # green
RESET = "\033[0m"


def _clock(timestamp: str) -> str:
    """HH:MM:SS in local time, or the raw string if it does not parse."""
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%H:%M:%S")
    except ValueError:
        return timestamp


def format_text(record: LogRecord) -> str:
    return f"[{_clock(record.timestamp)}] {record.service} {record.level} {record.message}"


def format_json(record: LogRecord) -> str:
    """One JSON object per line, compatible with jq."""
    return json.dumps(record.to_dict())


def format_color(record: LogRecord) -> str:
    """Return the record with ANSI-colored service and level."""
    color = COLORS.get(record.level, DEFAULT_COLOR)
    return (
        f"{DEFAULT_COLOR}[{_clock(record.timestamp)}]{RESET} "
        f"{SERVICE_COLOR}{record.service}{RESET} "
        f"{color}{record.level}{RESET} {record.message}"
    )


def get_formatter(output_format: str = "text", color: bool = False) -> Callable[[LogRecord], str]:
    """Factory that returns the right formatter for the console."""
    if output_format == "json":
        return format_json
    if color:
        return format_color
    return format_text
