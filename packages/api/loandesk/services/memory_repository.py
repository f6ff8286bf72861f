# This project was developed with assistance from AI tools.
"""In-process implementation of the case repository.

Used for local runs without a database and as the storage double in tests.
A single ``asyncio.Lock`` stands in for the row locking a real database
provides, so the same concurrency assumptions hold.
"""

import asyncio
from datetime import UTC, datetime

from loandesk_db.enums import ChannelKind, StatusGroup

from ..schemas.application import (
    ApplicationRecord,
    ChannelTarget,
    ConversationLogEntry,
    PartnerRecord,
)
from .repository import StatusChange


class InMemoryCaseRepository:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._partners: dict[int, PartnerRecord] = {}
        self._applications: dict[str, ApplicationRecord] = {}
        self._logs: list[ConversationLogEntry] = []
        self._next_partner_id = 1

    # -- partners --

    async def find_partner_by_channel(self, channel_id: str) -> PartnerRecord | None:
        async with self._lock:
            for partner in self._partners.values():
                if partner.channel_id == channel_id:
                    return partner.model_copy()
            return None

    async def create_partner(self, name: str, channel_id: str, channel_kind: ChannelKind) -> None:
        async with self._lock:
            if any(p.channel_id == channel_id for p in self._partners.values()):
                return
            partner_id = self._next_partner_id
            self._next_partner_id += 1
            self._partners[partner_id] = PartnerRecord(
                id=partner_id, name=name, channel_id=channel_id, channel_type=channel_kind
            )

    async def find_partner_by_id(self, partner_id: int) -> PartnerRecord | None:
        async with self._lock:
            partner = self._partners.get(partner_id)
            return partner.model_copy() if partner else None

    async def delete_partner(self, partner_id: int) -> None:
        async with self._lock:
            partner = self._partners.pop(partner_id, None)
            if partner is None:
                return
            self._logs = [log for log in self._logs if log.channel_id != partner.channel_id]
            for case_id, app in self._applications.items():
                if app.partner_id == partner_id:
                    self._applications[case_id] = app.model_copy(update={"partner_id": None})

    # -- applications --

    async def create_application(self, application: ApplicationRecord) -> None:
        async with self._lock:
            self._applications[application.id] = application.model_copy()

    async def find_application(self, query: str) -> ApplicationRecord | None:
        async with self._lock:
            app = self._applications.get(query)
            if app is None:
                needle = query.lower()
                matches = [a for a in self._applications.values() if needle in a.customer_name.lower()]
                matches.sort(key=lambda a: a.created_at, reverse=True)
                app = matches[0] if matches else None
            return app.model_copy() if app else None

    async def get_application_by_id(self, case_id: str) -> ApplicationRecord | None:
        async with self._lock:
            app = self._applications.get(case_id)
            return app.model_copy() if app else None

    async def list_applications(
        self,
        *,
        status_group: StatusGroup | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[ApplicationRecord]:
        async with self._lock:
            apps = [
                a.model_copy()
                for a in self._applications.values()
                if status_group is None or a.status_group == status_group
            ]
        apps.sort(key=lambda a: a.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return apps[offset:end]

    async def count_applications(self, *, status_group: StatusGroup | None = None) -> int:
        async with self._lock:
            return sum(
                1
                for a in self._applications.values()
                if status_group is None or a.status_group == status_group
            )

    async def update_application_status(self, case_id: str, change: StatusChange) -> bool:
        async with self._lock:
            app = self._applications.get(case_id)
            if app is None:
                return False
            updates = {
                "status": change.status,
                "status_group": change.status_group,
                "credit_score": change.credit_score,
                "officer_name": change.officer_name,
                "last_status_updated": change.updated_at,
                "updated_at": change.updated_at,
            }
            if change.collateral_value is not None:
                updates["collateral_value"] = change.collateral_value
            if change.ltv is not None:
                updates["ltv"] = change.ltv
            self._applications[case_id] = app.model_copy(update=updates)
            return True

    async def delete_application(self, case_id: str) -> None:
        async with self._lock:
            self._applications.pop(case_id, None)

    # -- conversation logs --

    async def append_conversation_log(self, entry: ConversationLogEntry) -> None:
        async with self._lock:
            self._logs.append(entry.model_copy(update={"created_at": datetime.now(UTC)}))

    async def list_conversation_logs(self, case_id: str) -> list[ConversationLogEntry]:
        async with self._lock:
            return [log.model_copy() for log in self._logs if log.case_id == case_id]

    async def resolve_channels_for_case(self, case_id: str) -> list[ChannelTarget]:
        async with self._lock:
            by_channel = {p.channel_id: p for p in self._partners.values()}
            seen: dict[str, ChannelTarget] = {}
            for log in self._logs:
                if log.case_id != case_id or log.channel_id not in by_channel:
                    continue
                partner = by_channel[log.channel_id]
                seen.setdefault(
                    partner.channel_id,
                    ChannelTarget(channel_id=partner.channel_id, channel_kind=partner.channel_type),
                )
            return [seen[key] for key in sorted(seen)]

    async def delete_logs_for_case(self, case_id: str) -> None:
        async with self._lock:
            self._logs = [log for log in self._logs if log.case_id != case_id]
