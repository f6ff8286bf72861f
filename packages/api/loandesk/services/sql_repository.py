# This project was developed with assistance from AI tools.
"""SQLAlchemy implementation of the case repository.

Each operation opens its own ``SessionLocal()`` context rather than sharing
one across calls, so concurrent webhook events never contend on a session.
Conflicting writes are serialized by the database itself.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loandesk_db import Application, ConversationLog, Partner, SessionLocal
from loandesk_db.enums import ChannelKind, StatusGroup
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..schemas.application import (
    ApplicationRecord,
    ChannelTarget,
    ConversationLogEntry,
    PartnerRecord,
)
from .repository import RepositoryError, StatusChange

logger = logging.getLogger(__name__)


class SqlCaseRepository:
    """Case repository backed by any async SQLAlchemy engine."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                await session.rollback()
                raise RepositoryError(f"{operation} failed: {exc}") from exc
            except (OSError, TimeoutError) as exc:
                # Driver connect errors (refused, unreachable, timed out) are not wrapped.
                raise RepositoryError(f"{operation} failed: database unreachable: {exc}") from exc

    # -- partners --

    async def find_partner_by_channel(self, channel_id: str) -> PartnerRecord | None:
        async with self._session("find_partner_by_channel") as session:
            result = await session.execute(select(Partner).where(Partner.channel_id == channel_id))
            partner = result.scalar_one_or_none()
            return PartnerRecord.model_validate(partner) if partner else None

    async def create_partner(self, name: str, channel_id: str, channel_kind: ChannelKind) -> None:
        async with self._session("create_partner") as session:
            session.add(Partner(name=name, channel_id=channel_id, channel_type=channel_kind))
            try:
                await session.commit()
            except IntegrityError:
                # Another event from the same channel won the insert race.
                await session.rollback()
                logger.info("Partner for channel %s already exists", channel_id)

    async def find_partner_by_id(self, partner_id: int) -> PartnerRecord | None:
        async with self._session("find_partner_by_id") as session:
            partner = await session.get(Partner, partner_id)
            return PartnerRecord.model_validate(partner) if partner else None

    async def delete_partner(self, partner_id: int) -> None:
        async with self._session("delete_partner") as session:
            partner = await session.get(Partner, partner_id)
            if partner is None:
                return
            await session.execute(
                delete(ConversationLog).where(ConversationLog.channel_id == partner.channel_id)
            )
            await session.execute(
                update(Application)
                .where(Application.partner_id == partner_id)
                .values(partner_id=None)
            )
            await session.execute(delete(Partner).where(Partner.id == partner_id))
            await session.commit()

    # -- applications --

    async def create_application(self, application: ApplicationRecord) -> None:
        async with self._session("create_application") as session:
            session.add(Application(**application.model_dump()))
            await session.commit()

    async def find_application(self, query: str) -> ApplicationRecord | None:
        async with self._session("find_application") as session:
            app = await session.get(Application, query)
            if app is None:
                stmt = (
                    select(Application)
                    .where(
                        func.lower(Application.customer_name).contains(
                            query.lower(), autoescape=True
                        )
                    )
                    .order_by(Application.created_at.desc())
                    .limit(1)
                )
                app = (await session.execute(stmt)).scalar_one_or_none()
            return ApplicationRecord.model_validate(app) if app else None

    async def get_application_by_id(self, case_id: str) -> ApplicationRecord | None:
        async with self._session("get_application_by_id") as session:
            app = await session.get(Application, case_id)
            return ApplicationRecord.model_validate(app) if app else None

    async def list_applications(
        self,
        *,
        status_group: StatusGroup | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[ApplicationRecord]:
        stmt = select(Application).order_by(Application.created_at.desc()).offset(offset)
        if status_group is not None:
            stmt = stmt.where(Application.status_group == status_group)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._session("list_applications") as session:
            result = await session.execute(stmt)
            return [ApplicationRecord.model_validate(a) for a in result.scalars().all()]

    async def count_applications(self, *, status_group: StatusGroup | None = None) -> int:
        stmt = select(func.count()).select_from(Application)
        if status_group is not None:
            stmt = stmt.where(Application.status_group == status_group)
        async with self._session("count_applications") as session:
            return (await session.execute(stmt)).scalar() or 0

    async def update_application_status(self, case_id: str, change: StatusChange) -> bool:
        values = {
            "status": change.status,
            "status_group": change.status_group,
            "credit_score": change.credit_score,
            "officer_name": change.officer_name,
            "last_status_updated": change.updated_at,
            "updated_at": change.updated_at,
        }
        # Overwrite-if-present: a missing value never erases a stored one.
        if change.collateral_value is not None:
            values["collateral_value"] = change.collateral_value
        if change.ltv is not None:
            values["ltv"] = change.ltv

        async with self._session("update_application_status") as session:
            result = await session.execute(
                update(Application).where(Application.id == case_id).values(**values)
            )
            await session.commit()
            return result.rowcount > 0

    async def delete_application(self, case_id: str) -> None:
        async with self._session("delete_application") as session:
            await session.execute(delete(Application).where(Application.id == case_id))
            await session.commit()

    # -- conversation logs --

    async def append_conversation_log(self, entry: ConversationLogEntry) -> None:
        async with self._session("append_conversation_log") as session:
            session.add(ConversationLog(**entry.model_dump(exclude={"created_at"})))
            await session.commit()

    async def list_conversation_logs(self, case_id: str) -> list[ConversationLogEntry]:
        stmt = (
            select(ConversationLog)
            .where(ConversationLog.case_id == case_id)
            .order_by(ConversationLog.id.asc())
        )
        async with self._session("list_conversation_logs") as session:
            result = await session.execute(stmt)
            return [ConversationLogEntry.model_validate(log) for log in result.scalars().all()]

    async def resolve_channels_for_case(self, case_id: str) -> list[ChannelTarget]:
        stmt = (
            select(Partner.channel_id, Partner.channel_type)
            .join(ConversationLog, ConversationLog.channel_id == Partner.channel_id)
            .where(ConversationLog.case_id == case_id)
            .distinct()
            .order_by(Partner.channel_id)
        )
        async with self._session("resolve_channels_for_case") as session:
            result = await session.execute(stmt)
            return [
                ChannelTarget(channel_id=row.channel_id, channel_kind=row.channel_type)
                for row in result.all()
            ]

    async def delete_logs_for_case(self, case_id: str) -> None:
        async with self._session("delete_logs_for_case") as session:
            await session.execute(delete(ConversationLog).where(ConversationLog.case_id == case_id))
            await session.commit()
