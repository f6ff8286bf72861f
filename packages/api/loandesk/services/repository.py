# This project was developed with assistance from AI tools.
"""Case repository contract.

The conversation engine and the update orchestrator only ever talk to a
``CaseRepository``. Storage adapters (SQL, in-memory) implement it; no
business rule lives in an adapter.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from loandesk_db.enums import ChannelKind, StatusGroup

from ..schemas.application import (
    ApplicationRecord,
    ChannelTarget,
    ConversationLogEntry,
    PartnerRecord,
)


class RepositoryError(Exception):
    """Raised by adapters when the backing store fails (connectivity, constraints)."""


@dataclass(frozen=True)
class StatusChange:
    """Column values for a status update.

    ``collateral_value`` and ``ltv`` are overwrite-if-present: None keeps
    whatever is stored.
    """

    status: str
    status_group: StatusGroup
    credit_score: str | None
    officer_name: str | None
    collateral_value: Decimal | None
    ltv: str | None
    updated_at: datetime


class CaseRepository(Protocol):
    async def find_partner_by_channel(self, channel_id: str) -> PartnerRecord | None: ...

    async def create_partner(self, name: str, channel_id: str, channel_kind: ChannelKind) -> None:
        """Insert a partner; a concurrent insert for the same channel id is not an error."""
        ...

    async def find_partner_by_id(self, partner_id: int) -> PartnerRecord | None: ...

    async def create_application(self, application: ApplicationRecord) -> None: ...

    async def find_application(self, query: str) -> ApplicationRecord | None:
        """Exact case id, else newest case whose customer name contains *query* (any case)."""
        ...

    async def get_application_by_id(self, case_id: str) -> ApplicationRecord | None: ...

    async def list_applications(
        self,
        *,
        status_group: StatusGroup | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[ApplicationRecord]:
        """Cases ordered newest-created first."""
        ...

    async def count_applications(self, *, status_group: StatusGroup | None = None) -> int: ...

    async def update_application_status(self, case_id: str, change: StatusChange) -> bool:
        """Apply *change*; False when the case does not exist."""
        ...

    async def append_conversation_log(self, entry: ConversationLogEntry) -> None: ...

    async def list_conversation_logs(self, case_id: str) -> list[ConversationLogEntry]: ...

    async def resolve_channels_for_case(self, case_id: str) -> list[ChannelTarget]:
        """Distinct known partner channels that appear in logs tagged with *case_id*."""
        ...

    async def delete_application(self, case_id: str) -> None: ...

    async def delete_logs_for_case(self, case_id: str) -> None: ...

    async def delete_partner(self, partner_id: int) -> None:
        """Remove a partner and the conversation logs of its channel."""
        ...
