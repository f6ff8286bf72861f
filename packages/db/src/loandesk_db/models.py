# This project was developed with assistance from AI tools.
"""
Home-loan backoffice -- domain models

Partners (referral agents bound to a chat identity), loan applications
("cases") and the append-only conversation log that ties chat traffic
back to cases.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import ChannelKind, ConversationChannel, ConversationRole, Direction, StatusGroup


def _enum_values(enum_cls):
    # Persist the enum values ("line-group"), not the member names.
    return [member.value for member in enum_cls]


class Partner(Base):
    """Referral agent, created lazily on first contact from a chat identity."""

    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    channel_id = Column(String(255), unique=True, nullable=False, index=True)
    channel_type = Column(
        Enum(
            ChannelKind,
            name="channel_kind",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=ChannelKind.INDIVIDUAL,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    applications = relationship("Application", back_populates="partner")

    def __repr__(self):
        return f"<Partner(id={self.id}, channel_id='{self.channel_id}')>"


class Application(Base):
    """Home-loan case, identified by a shareable ``HL-YYYY-NNNN`` id."""

    __tablename__ = "applications"

    id = Column(String(20), primary_key=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    partner_id = Column(
        Integer, ForeignKey("partners.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    partner_name = Column(String(255), nullable=True)
    bank_name = Column(String(100), nullable=True)
    customer_name = Column(String(255), nullable=False, index=True)
    monthly_income = Column(Numeric(14, 2), nullable=True)
    property_type = Column(String(255), nullable=False, default="")
    project_name = Column(String(255), nullable=False, default="")
    loan_amount = Column(Numeric(14, 2), nullable=True)
    collateral_value = Column(Numeric(14, 2), nullable=True)
    ltv = Column(String(32), nullable=True)
    credit_score = Column(String(32), nullable=True)
    status = Column(String(100), nullable=False)
    status_group = Column(
        Enum(
            StatusGroup,
            name="status_group",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=StatusGroup.PENDING,
        index=True,
    )
    last_status_updated = Column(DateTime(timezone=True), nullable=True)
    officer_name = Column(String(255), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    partner = relationship("Partner", back_populates="applications")

    def __repr__(self):
        return f"<Application(id='{self.id}', status='{self.status}')>"


class ConversationLog(Base):
    """One chat message in or out. INSERT + SELECT only -- never updated."""

    __tablename__ = "conversation_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    case_id = Column(String(20), nullable=True, index=True)
    channel_id = Column(String(255), nullable=True, index=True)
    role = Column(
        Enum(
            ConversationRole,
            name="conversation_role",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    direction = Column(
        Enum(
            Direction,
            name="direction",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    channel = Column(
        Enum(
            ConversationChannel,
            name="conversation_channel",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    message_text = Column(Text, nullable=False)
    raw_payload = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<ConversationLog(id={self.id}, case_id='{self.case_id}', direction='{self.direction}')>"
