"""Random candidate generation for auto-generate mode."""

import random

from logger_dashboard.models import Candidate
from logger_dashboard.vocabulary import LOG_LEVELS, RANDOM_MESSAGES, SERVICES


def generate_random_candidate(rng: random.Random | None = None) -> Candidate:
    """Pick a service, level, and message uniformly at random."""
    rng = rng or random
    return Candidate(
        service=rng.choice(SERVICES),
        level=rng.choice(LOG_LEVELS),
        message=rng.choice(RANDOM_MESSAGES),
    )
