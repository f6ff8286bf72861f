# This project was developed with assistance from AI tools.
"""
Domain enums for the home-loan case backoffice.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class StatusGroup(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChannelKind(str, enum.Enum):
    """Kind of chat identity a partner record is bound to."""

    INDIVIDUAL = "user"
    GROUP = "group"


class ConversationRole(str, enum.Enum):
    PARTNER = "partner"
    BANK = "bank"
    BOT = "bot"


class Direction(str, enum.Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class ConversationChannel(str, enum.Enum):
    """Where a logged message travelled."""

    INDIVIDUAL_CHAT = "line"
    GROUP_CHAT = "line-group"
    BACKOFFICE = "backoffice"

    @classmethod
    def for_kind(cls, kind: ChannelKind | str) -> "ConversationChannel":
        """Map a partner channel kind to the conversation channel it logs under."""
        return cls.GROUP_CHAT if ChannelKind(kind) == ChannelKind.GROUP else cls.INDIVIDUAL_CHAT
