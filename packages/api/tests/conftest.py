# This project was developed with assistance from AI tools.
"""Shared fixtures: an in-memory case store and a mocked LINE client."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from loandesk_db.enums import StatusGroup

from loandesk.schemas.application import ApplicationRecord
from loandesk.services.memory_repository import InMemoryCaseRepository

FIXED_NOW = datetime(2024, 3, 5, 3, 0, tzinfo=UTC)


@pytest.fixture
def repository():
    return InMemoryCaseRepository()


@pytest.fixture
def delivery():
    """LINE client double; configured, every call succeeds unless a side_effect is set."""
    client = MagicMock()
    client.is_configured = True
    client.reply = AsyncMock()
    client.push = AsyncMock()
    return client


@pytest.fixture
def unconfigured_delivery():
    client = MagicMock()
    client.is_configured = False
    client.reply = AsyncMock()
    client.push = AsyncMock()
    return client


@pytest.fixture
def make_text_event():
    """Factory for raw LINE text-message webhook events."""

    def _make(text, *, user_id="U-partner-1", group_id=None, reply_token="reply-token-1"):
        if group_id:
            source = {"type": "group", "groupId": group_id, "userId": user_id}
        else:
            source = {"type": "user", "userId": user_id}
        return {
            "type": "message",
            "replyToken": reply_token,
            "source": source,
            "message": {"type": "text", "id": "m-1", "text": text},
        }

    return _make


@pytest.fixture
def make_application():
    """Factory for case records with sensible defaults."""

    def _make(case_id="HL-2024-0001", **overrides):
        values = {
            "id": case_id,
            "created_at": FIXED_NOW,
            "partner_id": None,
            "partner_name": "partner-1",
            "bank_name": "KBank",
            "customer_name": "นายสมชาย ใจดี",
            "monthly_income": Decimal("85000"),
            "project_name": "ศุภาลัย",
            "loan_amount": Decimal("5000000"),
            "status": "รอพิจารณา",
            "status_group": StatusGroup.PENDING,
            "last_status_updated": FIXED_NOW,
            "updated_at": FIXED_NOW,
        }
        values.update(overrides)
        return ApplicationRecord(**values)

    return _make
