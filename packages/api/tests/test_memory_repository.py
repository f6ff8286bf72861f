# This project was developed with assistance from AI tools.
"""Tests for the in-memory case repository."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from loandesk_db.enums import ChannelKind, ConversationChannel, ConversationRole, Direction, StatusGroup

from loandesk.schemas.application import ConversationLogEntry
from loandesk.services.repository import StatusChange


def _change(**overrides):
    values = {
        "status": "อนุมัติแล้ว",
        "status_group": StatusGroup.APPROVED,
        "credit_score": "780",
        "officer_name": "วิทาวี ส.",
        "collateral_value": None,
        "ltv": None,
        "updated_at": datetime(2024, 4, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return StatusChange(**values)


class TestPartners:
    async def test_create_is_idempotent_on_channel(self, repository):
        await repository.create_partner("partner-1", "U-1", ChannelKind.INDIVIDUAL)
        await repository.create_partner("partner-2", "U-1", ChannelKind.INDIVIDUAL)

        partner = await repository.find_partner_by_channel("U-1")
        assert partner.name == "partner-1"
        assert await repository.find_partner_by_id(partner.id) == partner

    async def test_delete_detaches_cases_and_drops_channel_logs(self, repository, make_application):
        await repository.create_partner("partner-1", "U-1", ChannelKind.INDIVIDUAL)
        partner = await repository.find_partner_by_channel("U-1")
        await repository.create_application(make_application(partner_id=partner.id))
        await repository.append_conversation_log(
            ConversationLogEntry(
                case_id="HL-2024-0001",
                channel_id="U-1",
                role=ConversationRole.PARTNER,
                direction=Direction.INCOMING,
                channel=ConversationChannel.INDIVIDUAL_CHAT,
                message_text="hi",
            )
        )

        await repository.delete_partner(partner.id)

        assert await repository.find_partner_by_channel("U-1") is None
        app = await repository.get_application_by_id("HL-2024-0001")
        assert app.partner_id is None
        assert await repository.list_conversation_logs("HL-2024-0001") == []


class TestApplications:
    async def test_find_by_exact_id(self, repository, make_application):
        await repository.create_application(make_application())
        app = await repository.find_application("HL-2024-0001")
        assert app.customer_name == "นายสมชาย ใจดี"

    async def test_find_by_name_substring_newest_first(self, repository, make_application):
        base = datetime(2024, 1, 1, tzinfo=UTC)
        await repository.create_application(
            make_application("HL-2024-0001", customer_name="นายสมชาย ใจดี", created_at=base)
        )
        await repository.create_application(
            make_application(
                "HL-2024-0002", customer_name="นายสมชาย รักดี", created_at=base + timedelta(days=1)
            )
        )

        app = await repository.find_application("สมชาย")
        assert app.id == "HL-2024-0002"

    async def test_find_name_is_case_insensitive(self, repository, make_application):
        await repository.create_application(make_application(customer_name="John Smith"))
        app = await repository.find_application("john")
        assert app is not None

    async def test_list_newest_first_with_filter(self, repository, make_application):
        base = datetime(2024, 1, 1, tzinfo=UTC)
        await repository.create_application(make_application("HL-2024-0001", created_at=base))
        await repository.create_application(
            make_application(
                "HL-2024-0002",
                created_at=base + timedelta(days=1),
                status="อนุมัติแล้ว",
                status_group=StatusGroup.APPROVED,
            )
        )

        assert [a.id for a in await repository.list_applications()] == [
            "HL-2024-0002",
            "HL-2024-0001",
        ]
        pending = await repository.list_applications(status_group=StatusGroup.PENDING)
        assert [a.id for a in pending] == ["HL-2024-0001"]
        assert await repository.count_applications(status_group=StatusGroup.APPROVED) == 1
        assert [a.id for a in await repository.list_applications(offset=1, limit=1)] == [
            "HL-2024-0001"
        ]

    async def test_returned_records_are_copies(self, repository, make_application):
        await repository.create_application(make_application())
        app = await repository.get_application_by_id("HL-2024-0001")
        app.status = "tampered"
        stored = await repository.get_application_by_id("HL-2024-0001")
        assert stored.status == "รอพิจารณา"


class TestUpdateStatus:
    async def test_unknown_case(self, repository):
        assert await repository.update_application_status("HL-2024-0404", _change()) is False

    async def test_writes_status_fields(self, repository, make_application):
        await repository.create_application(make_application())

        assert await repository.update_application_status("HL-2024-0001", _change()) is True

        app = await repository.get_application_by_id("HL-2024-0001")
        assert app.status == "อนุมัติแล้ว"
        assert app.status_group == StatusGroup.APPROVED
        assert app.credit_score == "780"
        assert app.officer_name == "วิทาวี ส."
        assert app.updated_at == datetime(2024, 4, 1, tzinfo=UTC)

    async def test_missing_collateral_keeps_stored_values(self, repository, make_application):
        await repository.create_application(
            make_application(collateral_value=Decimal("5460000"), ltv="91.6%")
        )

        await repository.update_application_status("HL-2024-0001", _change())

        app = await repository.get_application_by_id("HL-2024-0001")
        assert app.collateral_value == Decimal("5460000")
        assert app.ltv == "91.6%"

    async def test_supplied_collateral_overwrites(self, repository, make_application):
        await repository.create_application(
            make_application(collateral_value=Decimal("5460000"), ltv="91.6%")
        )

        await repository.update_application_status(
            "HL-2024-0001", _change(collateral_value=Decimal("5000000"), ltv="100.0%")
        )

        app = await repository.get_application_by_id("HL-2024-0001")
        assert app.collateral_value == Decimal("5000000")
        assert app.ltv == "100.0%"


class TestPurge:
    async def test_delete_case_and_logs(self, repository, make_application):
        await repository.create_application(make_application())
        await repository.append_conversation_log(
            ConversationLogEntry(
                case_id="HL-2024-0001",
                channel_id="U-1",
                role=ConversationRole.BOT,
                direction=Direction.OUTGOING,
                channel=ConversationChannel.INDIVIDUAL_CHAT,
                message_text="ok",
            )
        )

        await repository.delete_application("HL-2024-0001")
        await repository.delete_logs_for_case("HL-2024-0001")

        assert await repository.get_application_by_id("HL-2024-0001") is None
        assert await repository.list_conversation_logs("HL-2024-0001") == []
