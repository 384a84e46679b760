"""Filter predicates for log records: service, level, and free-text query."""

from typing import Callable, Iterable

from logger_dashboard.models import FilterState, LogRecord


def filter_by_services(record: LogRecord, services: set[str]) -> bool:
    """True if the record's service is one of the selected services."""
    return record.service in services


def filter_by_levels(record: LogRecord, levels: set[str]) -> bool:
    """True if the record's level is one of the selected levels."""
    return record.level in levels


def filter_by_query(record: LogRecord, query: str) -> bool:
    """True if query appears in the message or service (case-insensitive).

    An empty query matches everything.
    """
    if query == "":
        return True
    needle = query.lower()
    return needle in record.message.lower() or needle in record.service.lower()


def build_filter_chain(state: FilterState) -> Callable[[LogRecord], bool]:
    """Combine the filter state into a single predicate that ANDs all parts."""
    services = set(state.services)
    levels = set(state.levels)
    query = state.query

    def combined(record: LogRecord) -> bool:
        return (
            filter_by_services(record, services)
            and filter_by_levels(record, levels)
            and filter_by_query(record, query)
        )

    return combined


def apply_filters(records: Iterable[LogRecord], state: FilterState) -> list[LogRecord]:
    """Return the visible records in insertion order."""
    predicate = build_filter_chain(state)
    return [r for r in records if predicate(r)]
