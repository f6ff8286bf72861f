# This project was developed with assistance from AI tools.
"""Back-office case updates.

Applies a status change coming from the dashboard or the JSON endpoint,
recomputes the derived fields, then fans a notification out to every
chat that is entitled to hear about the case. The update is the
commitment; notification is best-effort and never turns a committed
update into a failure.
"""

import logging
from datetime import UTC, datetime

from loandesk_db.enums import ConversationChannel, ConversationRole, Direction

from ..schemas.application import (
    ApplicationRecord,
    ConversationLogEntry,
    StatusUpdateRequest,
    StatusUpdateResult,
)
from . import messages
from .audit import write_conversation_log
from .channels import resolve_channels
from .delivery import DeliveryClient, DeliveryError
from .repository import CaseRepository, RepositoryError, StatusChange
from .status import compute_ltv, map_status_group

logger = logging.getLogger(__name__)


async def apply_status_update(
    repository: CaseRepository,
    delivery: DeliveryClient,
    request: StatusUpdateRequest,
    *,
    now: datetime | None = None,
) -> StatusUpdateResult:
    """Persist a status change and push it to the case's chat channels.

    Args:
        repository: Case storage.
        delivery: Outbound chat capability.
        request: Case id, new status and optional credit score, officer
            name and appraised collateral value.
        now: Timestamp to record; defaults to the current instant.

    Returns:
        ``ok=False`` when the case is missing or the write failed,
        otherwise ``ok=True`` whatever happened to the notifications.
    """
    now = now or datetime.now(UTC)
    case_id = request.id

    try:
        current = await repository.get_application_by_id(case_id)
        if current is None:
            logger.info("Status update for unknown case %s", case_id)
            return StatusUpdateResult(ok=False)

        change = StatusChange(
            status=request.status,
            status_group=map_status_group(request.status),
            credit_score=request.credit_score,
            officer_name=request.officer_name,
            collateral_value=request.collateral_value,
            ltv=compute_ltv(current.loan_amount, request.collateral_value),
            updated_at=now,
        )
        if not await repository.update_application_status(case_id, change):
            return StatusUpdateResult(ok=False)
        updated = await repository.get_application_by_id(case_id)
    except RepositoryError:
        logger.exception("DB error (update application status) case_id=%s", case_id)
        return StatusUpdateResult(ok=False)

    if updated is None:
        return StatusUpdateResult(ok=False)

    logger.info(
        "Case %s -> %r (%s) by %s",
        case_id,
        change.status,
        change.status_group.value,
        change.officer_name or "-",
    )

    text = messages.status_update_notification(
        case_id, request.status, request.credit_score, request.officer_name
    )
    await notify_channels(repository, delivery, updated.id, text, application=updated)
    return StatusUpdateResult(ok=True)


async def notify_channels(
    repository: CaseRepository,
    delivery: DeliveryClient,
    case_id: str,
    text: str,
    *,
    application: ApplicationRecord | None = None,
) -> int:
    """Push *text* to every resolved channel of *case_id*; return how many succeeded."""
    try:
        targets = await resolve_channels(repository, case_id, application=application)
    except RepositoryError:
        logger.exception("DB error (resolve channels) case_id=%s", case_id)
        return 0

    if not delivery.is_configured:
        logger.warning(
            "Skip pushing case %s update to %d channel(s): LINE credentials are not configured",
            case_id,
            len(targets),
        )
        return 0

    delivered = 0
    for target in targets:
        try:
            await delivery.push(target.channel_id, text)
        except DeliveryError as exc:
            logger.error(
                "LINE push error to %s for case %s: %s %s", target.channel_id, case_id, exc, exc.body
            )
            continue
        delivered += 1
        await write_conversation_log(
            repository,
            ConversationLogEntry(
                case_id=case_id,
                channel_id=target.channel_id,
                role=ConversationRole.BOT,
                direction=Direction.OUTGOING,
                channel=ConversationChannel.for_kind(target.channel_kind),
                message_text=text,
            ),
        )
    return delivered


async def purge_case(repository: CaseRepository, case_id: str) -> None:
    """Delete a case and every conversation log tagged with it."""
    await repository.delete_application(case_id)
    await repository.delete_logs_for_case(case_id)
    logger.info("Purged case %s", case_id)


async def purge_partner(repository: CaseRepository, partner_id: int) -> None:
    await repository.delete_partner(partner_id)
    logger.info("Purged partner %s", partner_id)
