# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, SessionLocal, get_db, get_db_service
from .enums import (
    ChannelKind,
    ConversationChannel,
    ConversationRole,
    Direction,
    StatusGroup,
)
from .models import Application, ConversationLog, Partner

__all__ = [
    "Base",
    "DatabaseService",
    "SessionLocal",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ChannelKind",
    "ConversationChannel",
    "ConversationRole",
    "Direction",
    "StatusGroup",
    # Models
    "Application",
    "ConversationLog",
    "Partner",
]
