"""JSON-schema check for structured form input, used in strict mode."""

import json
import logging
import os

import jsonschema

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "schemas", "candidate_schema.json"
)


class CandidateValidator:
    """Checks a candidate payload against the closed service and level sets."""

    def __init__(self, schema_path: str = DEFAULT_SCHEMA_PATH):
        with open(schema_path, "r") as f:
            schema = json.load(f)
        self._validator = jsonschema.Draft202012Validator(schema)

    def validate(self, payload: dict) -> tuple[bool, list[str]]:
        """Return (is_valid, error messages), errors ordered by field path."""
        errors = sorted(self._validator.iter_errors(payload), key=lambda e: list(e.path))
        if not errors:
            return True, []
        messages = [_describe(e) for e in errors]
        logger.debug("Rejected candidate: %s", "; ".join(messages))
        return False, messages


def _describe(error: jsonschema.ValidationError) -> str:
    if error.path:
        return f"{error.path[-1]}: {error.message}"
    return error.message
