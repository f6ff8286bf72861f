# This project was developed with assistance from AI tools.
"""Conversation engine -- turns one inbound chat message into a reply.

Every text message goes through the same stages:

    identify channel -> ensure partner -> log inbound -> classify -> execute -> reply

A partner record is required before anything else happens, so failing to
bind one ends processing with a system-error reply. Validation problems
are answered with a corrective message; storage problems with a generic
"try again" message. Nothing raised while handling one event escapes
``handle_events``, so sibling events in the same webhook batch still run.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from loandesk_db.enums import (
    ChannelKind,
    ConversationChannel,
    ConversationRole,
    Direction,
    StatusGroup,
)

from ..schemas.application import ApplicationRecord, ConversationLogEntry, PartnerRecord
from ..schemas.line import EventSource, WebhookEvent
from . import messages
from .audit import write_conversation_log
from .case_ids import CaseIdExhaustedError, generate_case_id
from .delivery import DeliveryClient, DeliveryError
from .extractor import (
    INITIAL_STATUS,
    Command,
    classify_command,
    extract_case_id,
    extract_status_keyword,
    parse_new_case_payload,
)
from .repository import CaseRepository, RepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelContext:
    """Who sent a message and how their traffic is logged."""

    channel_id: str
    kind: ChannelKind
    channel: ConversationChannel
    role: ConversationRole

    @classmethod
    def from_source(cls, source: EventSource) -> "ChannelContext | None":
        if source.type == "group":
            if not source.group_id:
                return None
            return cls(
                channel_id=source.group_id,
                kind=ChannelKind.GROUP,
                channel=ConversationChannel.GROUP_CHAT,
                role=ConversationRole.BANK,
            )
        if not source.user_id:
            return None
        return cls(
            channel_id=source.user_id,
            kind=ChannelKind.INDIVIDUAL,
            channel=ConversationChannel.INDIVIDUAL_CHAT,
            role=ConversationRole.PARTNER,
        )


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ConversationEngine:
    """Dispatches inbound chat commands against a case repository."""

    def __init__(
        self,
        repository: CaseRepository,
        delivery: DeliveryClient,
        *,
        bank_name: str = "KBank",
        case_id_attempts: int = 20,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._delivery = delivery
        self._bank_name = bank_name
        self._case_id_attempts = case_id_attempts
        self._clock = clock

    # ------------------------------------------------------------------
    # Batch entry point
    # ------------------------------------------------------------------

    async def handle_events(self, events: list[Any]) -> int:
        """Handle every event of a webhook batch independently.

        Returns:
            How many events completed without raising.
        """
        completed = 0
        for raw in events:
            if not isinstance(raw, dict):
                logger.warning("Skipping webhook event that is not an object: %r", raw)
                continue
            try:
                event = WebhookEvent.model_validate(raw)
                await self.handle_event(event, raw_payload=raw)
                completed += 1
            except Exception:
                logger.exception("Error in single webhook event (type=%s)", raw.get("type"))
        return completed

    # ------------------------------------------------------------------
    # Single event
    # ------------------------------------------------------------------

    async def handle_event(
        self,
        event: WebhookEvent,
        *,
        raw_payload: dict[str, Any] | None = None,
    ) -> None:
        if not event.is_text_message:
            logger.debug("Ignoring non-text event type=%s", event.type)
            return

        ctx = ChannelContext.from_source(event.source)
        if ctx is None:
            logger.warning("Cannot identify channel for event source %r", event.source)
            return

        text = event.message.text.strip()
        case_ref = extract_case_id(text)
        raw_payload = raw_payload if raw_payload is not None else event.model_dump(by_alias=True)

        partner = await self._ensure_partner(ctx)
        if partner is None:
            await self._reply(event, ctx, messages.ERROR_PARTNER_BINDING, case_ref)
            return

        await self._log_inbound(ctx, text, case_ref, raw_payload)

        command, payload = classify_command(text)
        if command is Command.OPEN_CASE:
            await self._open_case(event, ctx, partner, text, payload, raw_payload)
        elif command is Command.CHECK_CASE:
            await self._check_case(event, ctx, text, payload, case_ref, raw_payload)
        else:
            status_hint = extract_status_keyword(text)
            if case_ref and status_hint:
                # Informational only; status changes go through the back office.
                logger.info("Status hint %r for %s from %s", status_hint, case_ref, ctx.channel_id)
            await self._reply(event, ctx, messages.HELP_MESSAGE, case_ref)

    async def _ensure_partner(self, ctx: ChannelContext) -> PartnerRecord | None:
        try:
            partner = await self._repository.find_partner_by_channel(ctx.channel_id)
            if partner is not None:
                return partner
            name = f"partner-{int(self._clock().timestamp() * 1000)}"
            await self._repository.create_partner(name, ctx.channel_id, ctx.kind)
            # Re-read: a concurrent first contact may have inserted the row.
            partner = await self._repository.find_partner_by_channel(ctx.channel_id)
        except RepositoryError:
            logger.exception("DB error (ensure partner) channel_id=%s", ctx.channel_id)
            return None
        if partner is None:
            logger.error("Failed to create partner record for channel_id=%s", ctx.channel_id)
        return partner

    async def _open_case(
        self,
        event: WebhookEvent,
        ctx: ChannelContext,
        partner: PartnerRecord,
        text: str,
        payload: str,
        raw_payload: dict[str, Any],
    ) -> None:
        parsed = parse_new_case_payload(payload)
        if not parsed.ok:
            await self._reply(event, ctx, parsed.error, None)
            return

        fields = parsed.fields
        now = self._clock()
        try:
            case_id = await generate_case_id(
                self._repository, now.year, max_attempts=self._case_id_attempts
            )
            await self._repository.create_application(
                ApplicationRecord(
                    id=case_id,
                    created_at=now,
                    partner_id=partner.id,
                    partner_name=partner.name,
                    bank_name=self._bank_name,
                    customer_name=fields.customer_name,
                    monthly_income=fields.monthly_income,
                    property_type=fields.property_type,
                    project_name=fields.project_name,
                    loan_amount=fields.loan_amount,
                    status=INITIAL_STATUS,
                    status_group=StatusGroup.PENDING,
                    last_status_updated=now,
                    updated_at=now,
                )
            )
        except (RepositoryError, CaseIdExhaustedError):
            logger.exception("DB error (create application) channel_id=%s", ctx.channel_id)
            await self._reply(event, ctx, messages.ERROR_SAVE_CASE, None)
            return

        logger.info("Opened case %s for partner %s", case_id, partner.id)
        # Tag this channel with the new case so status pushes can find it.
        await self._log_inbound(ctx, text, case_id, raw_payload)
        await self._reply(
            event,
            ctx,
            messages.open_case_confirmation(
                case_id,
                fields.customer_name,
                fields.monthly_income,
                fields.loan_amount,
                fields.project_name,
            ),
            case_id,
        )

    async def _check_case(
        self,
        event: WebhookEvent,
        ctx: ChannelContext,
        text: str,
        query: str,
        case_ref: str | None,
        raw_payload: dict[str, Any],
    ) -> None:
        if not query:
            await self._reply(event, ctx, messages.ASK_FOR_CASE_QUERY, case_ref)
            return

        try:
            app = await self._repository.find_application(extract_case_id(query) or query)
        except RepositoryError:
            logger.exception("DB error (find application) query=%r", query)
            await self._reply(event, ctx, messages.ERROR_LOOKUP_CASE, case_ref)
            return

        if app is None:
            await self._reply(event, ctx, messages.case_not_found(query), case_ref)
            return

        await self._log_inbound(ctx, text, app.id, raw_payload)
        await self._reply(event, ctx, messages.case_detail(app), app.id)

    # ------------------------------------------------------------------
    # Logging + delivery
    # ------------------------------------------------------------------

    async def _log_inbound(
        self,
        ctx: ChannelContext,
        text: str,
        case_id: str | None,
        raw_payload: dict[str, Any] | None,
    ) -> None:
        await write_conversation_log(
            self._repository,
            ConversationLogEntry(
                case_id=case_id,
                channel_id=ctx.channel_id,
                role=ctx.role,
                direction=Direction.INCOMING,
                channel=ctx.channel,
                message_text=text,
                raw_payload=raw_payload,
            ),
        )

    async def _reply(
        self,
        event: WebhookEvent,
        ctx: ChannelContext,
        text: str,
        case_id: str | None,
    ) -> None:
        """Log the outgoing text, then reply; fall back to a push if the reply fails."""
        await write_conversation_log(
            self._repository,
            ConversationLogEntry(
                case_id=case_id,
                channel_id=ctx.channel_id,
                role=ConversationRole.BOT,
                direction=Direction.OUTGOING,
                channel=ctx.channel,
                message_text=text,
            ),
        )

        if not self._delivery.is_configured:
            logger.warning("Skip sending message because LINE credentials are not configured")
            return

        if event.reply_token:
            try:
                await self._delivery.reply(event.reply_token, text)
                return
            except DeliveryError as exc:
                logger.error("LINE reply error: %s %s", exc, exc.body)

        try:
            await self._delivery.push(ctx.channel_id, text)
        except DeliveryError as exc:
            logger.error("LINE push (fallback) error to %s: %s %s", ctx.channel_id, exc, exc.body)
