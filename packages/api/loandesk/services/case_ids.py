# This project was developed with assistance from AI tools.
"""Case id generation: ``HL-<year>-<4 random digits>``."""

import logging
import random

from .repository import CaseRepository

logger = logging.getLogger(__name__)

_rng = random.SystemRandom()


class CaseIdExhaustedError(RuntimeError):
    """Every candidate id tried was already taken."""


def format_case_id(year: int, number: int) -> str:
    return f"HL-{year:04d}-{number:04d}"


async def generate_case_id(
    repository: CaseRepository,
    year: int,
    *,
    max_attempts: int = 20,
    rng: random.Random = _rng,
) -> str:
    """Draw random ids for *year* until one is unused.

    Raises:
        CaseIdExhaustedError: After *max_attempts* collisions in a row.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = format_case_id(year, rng.randint(0, 9999))
        if await repository.get_application_by_id(candidate) is None:
            return candidate
        logger.warning("Case id collision on %s (attempt %d/%d)", candidate, attempt, max_attempts)
    raise CaseIdExhaustedError(f"No free case id for {year} after {max_attempts} attempts")
