# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for raw table browsing

Access the panel at: http://localhost:8000/sqladmin

Only mounted with the SQL repository backend. The business dashboard at
/admin/dashboard is the place to change case status; edits made here skip
status-group derivation and partner notification.
"""

from loandesk_db import Application, ConversationLog, Partner
from sqladmin import Admin, ModelView
from sqlalchemy import create_engine

from .core.config import settings


class PartnerAdmin(ModelView, model=Partner):
    column_list = [
        Partner.id,
        Partner.name,
        Partner.channel_id,
        Partner.channel_type,
        Partner.created_at,
    ]
    column_searchable_list = [Partner.name, Partner.channel_id]
    column_sortable_list = [Partner.id, Partner.created_at]
    column_default_sort = [(Partner.created_at, True)]
    name = "Partner"
    name_plural = "Partners"
    icon = "fa-solid fa-user"


class ApplicationAdmin(ModelView, model=Application):
    column_list = [
        Application.id,
        Application.customer_name,
        Application.partner_name,
        Application.loan_amount,
        Application.ltv,
        Application.status,
        Application.status_group,
        Application.created_at,
    ]
    column_searchable_list = [Application.id, Application.customer_name, Application.project_name]
    column_sortable_list = [Application.id, Application.status_group, Application.created_at]
    column_default_sort = [(Application.created_at, True)]
    can_create = False
    name = "Application"
    name_plural = "Applications"
    icon = "fa-solid fa-file-alt"


class ConversationLogAdmin(ModelView, model=ConversationLog):
    column_list = [
        ConversationLog.id,
        ConversationLog.case_id,
        ConversationLog.channel_id,
        ConversationLog.role,
        ConversationLog.direction,
        ConversationLog.channel,
        ConversationLog.created_at,
    ]
    column_searchable_list = [ConversationLog.case_id, ConversationLog.channel_id]
    column_sortable_list = [ConversationLog.id, ConversationLog.created_at]
    column_default_sort = [(ConversationLog.id, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Conversation Log"
    name_plural = "Conversation Logs"
    icon = "fa-solid fa-comments"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    # SQLAdmin requires a sync engine; derive from the async DATABASE_URL
    sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
    engine = create_engine(sync_url, echo=False)

    admin = Admin(app, engine, base_url="/sqladmin", title=f"{settings.APP_NAME} tables")
    admin.add_view(PartnerAdmin)
    admin.add_view(ApplicationAdmin)
    admin.add_view(ConversationLogAdmin)

    return admin
