"""Log record, candidate, and filter state data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from logger_dashboard.vocabulary import LOG_LEVELS, SERVICES


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Candidate:
    """A service/level/message triple that has not been accepted yet."""

    service: str
    level: str
    message: str

    def to_payload(self) -> dict:
        return {
            "service": self.service,
            "level": self.level,
            "message": self.message,
        }


@dataclass(frozen=True)
class LogRecord:
    service: str
    level: str
    message: str
    timestamp: str

    @classmethod
    def accept(cls, candidate: Candidate, timestamp: str | None = None) -> "LogRecord":
        """Stamp a candidate that the ingestion endpoint has accepted."""
        return cls(
            service=candidate.service,
            level=candidate.level,
            message=candidate.message,
            timestamp=timestamp or utc_timestamp(),
        )

    def to_dict(self) -> dict:
        return {
            "service": self.service,
            "level": self.level,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass
class FilterState:
    """Selected services and levels plus a free-text query.

    Starts with every service and level selected and an empty query.
    """

    services: set[str] = field(default_factory=lambda: set(SERVICES))
    levels: set[str] = field(default_factory=lambda: set(LOG_LEVELS))
    query: str = ""

    def set_service(self, name: str, selected: bool):
        if selected:
            self.services.add(name)
        else:
            self.services.discard(name)

    def set_level(self, name: str, selected: bool):
        if selected:
            self.levels.add(name)
        else:
            self.levels.discard(name)

    def copy(self) -> "FilterState":
        return FilterState(set(self.services), set(self.levels), self.query)

    def to_dict(self) -> dict:
        # Vocabulary order keeps the output stable for the UI
        return {
            "services": [s for s in SERVICES if s in self.services]
            + sorted(self.services - set(SERVICES)),
            "levels": [l for l in LOG_LEVELS if l in self.levels]
            + sorted(self.levels - set(LOG_LEVELS)),
            "query": self.query,
        }
