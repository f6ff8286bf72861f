# This project was developed with assistance from AI tools.
"""Case, partner and conversation-log schemas.

These are the record types exchanged across the repository contract, so
every storage adapter returns the same shapes regardless of backend.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from loandesk_db.enums import (
    ChannelKind,
    ConversationChannel,
    ConversationRole,
    Direction,
    StatusGroup,
)
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import Pagination


class PartnerRecord(BaseModel):
    """Referral agent bound to one chat identity."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    channel_id: str
    channel_type: ChannelKind = ChannelKind.INDIVIDUAL


class ApplicationRecord(BaseModel):
    """Full home-loan case."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    partner_id: int | None = None
    partner_name: str | None = None
    bank_name: str | None = None
    customer_name: str
    monthly_income: Decimal | None = None
    property_type: str = ""
    project_name: str = ""
    loan_amount: Decimal | None = None
    collateral_value: Decimal | None = None
    ltv: str | None = None
    credit_score: str | None = None
    status: str
    status_group: StatusGroup = StatusGroup.PENDING
    last_status_updated: datetime | None = None
    officer_name: str | None = None
    updated_at: datetime


class ChannelTarget(BaseModel):
    """A chat destination entitled to case notifications."""

    channel_id: str
    channel_kind: ChannelKind = ChannelKind.INDIVIDUAL


class ConversationLogEntry(BaseModel):
    """One message in or out, as handed to the repository for appending."""

    model_config = ConfigDict(from_attributes=True)

    case_id: str | None = None
    channel_id: str | None = None
    role: ConversationRole
    direction: Direction
    channel: ConversationChannel
    message_text: str
    raw_payload: dict[str, Any] | None = None
    created_at: datetime | None = None


class StatusUpdateRequest(BaseModel):
    """Back-office status change for a case."""

    id: str
    status: str
    credit_score: str | None = None
    officer_name: str | None = None
    collateral_value: Decimal | None = Field(default=None, ge=0)

    @field_validator("credit_score", "officer_name", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("collateral_value", mode="before")
    @classmethod
    def _blank_collateral_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.replace(",", "").strip()
            return value or None
        return value


class StatusUpdateResult(BaseModel):
    ok: bool


class ApplicationListResponse(BaseModel):
    """Paginated list of cases, newest first."""

    data: list[ApplicationRecord]
    pagination: Pagination
