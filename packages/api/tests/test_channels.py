# This project was developed with assistance from AI tools.
"""Tests for notification channel resolution."""

from unittest.mock import AsyncMock, MagicMock

from loandesk_db.enums import ChannelKind, ConversationChannel, ConversationRole, Direction

from loandesk.schemas.application import ChannelTarget, ConversationLogEntry
from loandesk.services.channels import resolve_channels


async def _log(repository, case_id, channel_id, channel=ConversationChannel.INDIVIDUAL_CHAT):
    await repository.append_conversation_log(
        ConversationLogEntry(
            case_id=case_id,
            channel_id=channel_id,
            role=ConversationRole.PARTNER,
            direction=Direction.INCOMING,
            channel=channel,
            message_text="#เช็คเคส " + case_id,
        )
    )


async def _partner(repository, channel_id, kind=ChannelKind.INDIVIDUAL):
    await repository.create_partner(f"partner-{channel_id}", channel_id, kind)
    return await repository.find_partner_by_channel(channel_id)


async def test_every_channel_that_discussed_the_case(repository, make_application):
    owner = await _partner(repository, "U-1")
    await _partner(repository, "C-group", ChannelKind.GROUP)
    await repository.create_application(make_application(partner_id=owner.id))
    await _log(repository, "HL-2024-0001", "U-1")
    await _log(repository, "HL-2024-0001", "C-group", ConversationChannel.GROUP_CHAT)
    await _log(repository, "HL-2024-0001", "U-1")

    targets = await resolve_channels(repository, "HL-2024-0001")

    assert sorted(t.channel_id for t in targets) == ["C-group", "U-1"]
    kinds = {t.channel_id: t.channel_kind for t in targets}
    assert kinds["C-group"] == ChannelKind.GROUP


async def test_logs_for_other_cases_are_ignored(repository, make_application):
    owner = await _partner(repository, "U-1")
    await _partner(repository, "U-2")
    await repository.create_application(make_application(partner_id=owner.id))
    await _log(repository, "HL-2024-0001", "U-1")
    await _log(repository, "HL-2024-9999", "U-2")

    targets = await resolve_channels(repository, "HL-2024-0001")

    assert [t.channel_id for t in targets] == ["U-1"]


async def test_falls_back_to_owning_partner(repository, make_application):
    owner = await _partner(repository, "U-owner")
    await repository.create_application(make_application(partner_id=owner.id))

    targets = await resolve_channels(repository, "HL-2024-0001")

    assert targets == [ChannelTarget(channel_id="U-owner", channel_kind=ChannelKind.INDIVIDUAL)]


async def test_no_owner_no_channels(repository, make_application):
    await repository.create_application(make_application(partner_id=None))
    assert await resolve_channels(repository, "HL-2024-0001") == []


async def test_unknown_case(repository):
    assert await resolve_channels(repository, "HL-2024-0404") == []


async def test_duplicates_from_adapter_are_collapsed():
    repo = MagicMock()
    repo.resolve_channels_for_case = AsyncMock(
        return_value=[
            ChannelTarget(channel_id="U-1"),
            ChannelTarget(channel_id="U-1"),
            ChannelTarget(channel_id="C-1", channel_kind=ChannelKind.GROUP),
        ]
    )

    targets = await resolve_channels(repo, "HL-2024-0001")

    assert [t.channel_id for t in targets] == ["U-1", "C-1"]
    repo.get_application_by_id.assert_not_called()
