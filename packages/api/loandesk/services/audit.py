# This project was developed with assistance from AI tools.
"""Conversation audit trail.

Every message the bot receives or sends is appended as a ConversationLog
row. Logging is best-effort: a failed write is reported and swallowed so it
can never abort the reply or push it describes.
"""

import logging

from ..schemas.application import ConversationLogEntry
from .repository import CaseRepository

logger = logging.getLogger(__name__)


async def write_conversation_log(repository: CaseRepository, entry: ConversationLogEntry) -> bool:
    """Append *entry*; return False (after logging) if the write failed."""
    try:
        await repository.append_conversation_log(entry)
    except Exception:
        logger.exception(
            "DB error (conversation log) case_id=%s channel_id=%s direction=%s",
            entry.case_id,
            entry.channel_id,
            entry.direction.value,
        )
        return False
    return True
