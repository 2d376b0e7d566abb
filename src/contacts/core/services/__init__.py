"""Core services exports."""

from src.contacts.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
)

from .contact_directory import (
    CONTACTS_PATH,
    ActionResult,
    ContactDirectoryService,
    contact_path,
)
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .session.user_session import UserSessionService

__all__ = [
    # Contact directory
    "CONTACTS_PATH",
    "ActionResult",
    "contact_path",
    "ContactDirectoryService",
    # Session Services
    "UserSessionService",
    # Session Storage for testing
    "InMemorySessionStorage",
    "RedisSessionStorage",
    # Database Services
    "DbManageService",
    "DbSessionService",
]
