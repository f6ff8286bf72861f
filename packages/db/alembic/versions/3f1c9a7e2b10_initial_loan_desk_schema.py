# This project was developed with assistance from AI tools.
"""initial loan desk schema

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-17 09:12:41.503118

"""

import sqlalchemy as sa
from alembic import op

revision = "3f1c9a7e2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("channel_id", sa.String(255), nullable=False),
        sa.Column("channel_type", sa.String(20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_partners_channel_id", "partners", ["channel_id"], unique=True)

    op.create_table(
        "applications",
        sa.Column("id", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("partner_id", sa.Integer(), nullable=True),
        sa.Column("partner_name", sa.String(255), nullable=True),
        sa.Column("bank_name", sa.String(100), nullable=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("monthly_income", sa.Numeric(14, 2), nullable=True),
        sa.Column("property_type", sa.String(255), nullable=False),
        sa.Column("project_name", sa.String(255), nullable=False),
        sa.Column("loan_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("collateral_value", sa.Numeric(14, 2), nullable=True),
        sa.Column("ltv", sa.String(32), nullable=True),
        sa.Column("credit_score", sa.String(32), nullable=True),
        sa.Column("status", sa.String(100), nullable=False),
        sa.Column("status_group", sa.String(20), nullable=False),
        sa.Column("last_status_updated", sa.DateTime(timezone=True), nullable=True),
        sa.Column("officer_name", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["partner_id"], ["partners.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_applications_partner_id", "applications", ["partner_id"])
    op.create_index("ix_applications_customer_name", "applications", ["customer_name"])
    op.create_index("ix_applications_status_group", "applications", ["status_group"])

    op.create_table(
        "conversation_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("case_id", sa.String(20), nullable=True),
        sa.Column("channel_id", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("direction", sa.String(20), nullable=False),
        sa.Column("channel", sa.String(20), nullable=False),
        sa.Column("message_text", sa.Text(), nullable=False),
        sa.Column("raw_payload", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_conversation_logs_case_id", "conversation_logs", ["case_id"])
    op.create_index("ix_conversation_logs_channel_id", "conversation_logs", ["channel_id"])


def downgrade() -> None:
    op.drop_index("ix_conversation_logs_channel_id", table_name="conversation_logs")
    op.drop_index("ix_conversation_logs_case_id", table_name="conversation_logs")
    op.drop_table("conversation_logs")
    op.drop_index("ix_applications_status_group", table_name="applications")
    op.drop_index("ix_applications_customer_name", table_name="applications")
    op.drop_index("ix_applications_partner_id", table_name="applications")
    op.drop_table("applications")
    op.drop_index("ix_partners_channel_id", table_name="partners")
    op.drop_table("partners")
