# This project was developed with assistance from AI tools.
"""Mapping tests for the loan desk models (no database needed)."""

import pytest

from loandesk_db import Application, Base, ConversationLog, Partner
from loandesk_db.enums import (
    ChannelKind,
    ConversationChannel,
    ConversationRole,
    Direction,
    StatusGroup,
)


def test_tables_registered():
    assert set(Base.metadata.tables) == {"partners", "applications", "conversation_logs"}


@pytest.mark.parametrize(
    "column,values",
    [
        (Partner.__table__.c.channel_type, ["user", "group"]),
        (Application.__table__.c.status_group, ["pending", "approved", "rejected"]),
        (ConversationLog.__table__.c.role, ["partner", "bank", "bot"]),
        (ConversationLog.__table__.c.direction, ["incoming", "outgoing"]),
        (ConversationLog.__table__.c.channel, ["line", "line-group", "backoffice"]),
    ],
)
def test_enums_persist_values(column, values):
    assert column.type.enums == values


def test_partner_channel_is_unique():
    assert Partner.__table__.c.channel_id.unique is True


def test_application_owner_survives_partner_delete():
    (fk,) = Application.__table__.c.partner_id.foreign_keys
    assert fk.column is Partner.__table__.c.id
    assert fk.ondelete == "SET NULL"
    assert Application.__table__.c.partner_id.nullable is True


def test_case_id_is_string_key():
    (pk,) = Application.__table__.primary_key.columns
    assert pk.name == "id"
    assert pk.type.length == 20


class TestConversationChannel:
    def test_group_kind(self):
        assert ConversationChannel.for_kind(ChannelKind.GROUP) is ConversationChannel.GROUP_CHAT

    def test_individual_kind_from_raw_value(self):
        assert ConversationChannel.for_kind("user") is ConversationChannel.INDIVIDUAL_CHAT


def test_enums_are_str():
    assert StatusGroup.APPROVED == "approved"
    assert ConversationRole.BOT == "bot"
    assert Direction.OUTGOING == "outgoing"


def test_ltv_column_fits_extreme_ratio():
    """should hold the widest LTV the Numeric(14, 2) amounts can produce."""
    widest = "9999999999999900.0%"  # 999,999,999,999.99 over 0.01
    assert Application.__table__.c.ltv.type.length >= len(widest)
