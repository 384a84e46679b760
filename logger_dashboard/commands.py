"""Terminal command parsing.

A command line is one of:

    clear                         drop every stored log
    generate                      toggle auto-generation
    <service> <level> <message>   submit a log entry

Parsing is pure; the controller dispatches on the returned value.
"""

from dataclasses import dataclass

from logger_dashboard.models import Candidate
from logger_dashboard.vocabulary import is_known_level, is_known_service

INVALID_FORMAT = "Invalid command format"
INVALID_VOCABULARY = "Invalid service or log level"


@dataclass(frozen=True)
class ClearCommand:
    pass


@dataclass(frozen=True)
class ToggleAutoGenerate:
    pass


@dataclass(frozen=True)
class SubmitCandidate:
    candidate: Candidate


@dataclass(frozen=True)
class InvalidCommand:
    reason: str


Command = ClearCommand | ToggleAutoGenerate | SubmitCandidate | InvalidCommand


def interpret_command(text: str) -> Command:
    keyword = text.strip().lower()
    if keyword == "clear":
        return ClearCommand()
    if keyword == "generate":
        return ToggleAutoGenerate()

    parts = text.split()
    if len(parts) < 3:
        return InvalidCommand(INVALID_FORMAT)

    service, level, *message_parts = parts
    if not (is_known_service(service) and is_known_level(level)):
        return InvalidCommand(INVALID_VOCABULARY)

    return SubmitCandidate(Candidate(service, level, " ".join(message_parts)))
