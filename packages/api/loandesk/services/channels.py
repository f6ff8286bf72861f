# This project was developed with assistance from AI tools.
"""Notification channel resolution.

A case may be discussed from several chats (the opener's individual chat,
a shared group with bank staff). Everyone who ever talked about the case
gets status pushes; when the logs know nobody, the owning partner does.
"""

import logging

from ..schemas.application import ApplicationRecord, ChannelTarget
from .repository import CaseRepository

logger = logging.getLogger(__name__)


def _dedupe(targets: list[ChannelTarget]) -> list[ChannelTarget]:
    seen: set[str] = set()
    unique = []
    for target in targets:
        if target.channel_id in seen:
            continue
        seen.add(target.channel_id)
        unique.append(target)
    return unique


async def resolve_channels(
    repository: CaseRepository,
    case_id: str,
    *,
    application: ApplicationRecord | None = None,
) -> list[ChannelTarget]:
    """Return the chat destinations entitled to notifications for *case_id*.

    Args:
        repository: Case storage.
        case_id: The case being notified about.
        application: The case record if the caller already loaded it.

    Returns:
        Distinct channels from the conversation logs, or the owning
        partner's channel as a fallback, or an empty list when neither
        is known.
    """
    targets = _dedupe(await repository.resolve_channels_for_case(case_id))
    if targets:
        return targets

    if application is None:
        application = await repository.get_application_by_id(case_id)
    if application is None or application.partner_id is None:
        logger.info("No notification channel for case %s", case_id)
        return []

    partner = await repository.find_partner_by_id(application.partner_id)
    if partner is None:
        logger.info("Owning partner %s of case %s is gone", application.partner_id, case_id)
        return []
    return [ChannelTarget(channel_id=partner.channel_id, channel_kind=partner.channel_type)]
