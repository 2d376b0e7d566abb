"""Entities organized by business concept.

Each entity package contains:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .contact import Contact, ContactRepository, ContactTable, Phone, PhoneTable
from .news_release import NewsRelease, NewsReleaseRepository, NewsReleaseTable
from .user import Role, User, UserRepository, UserTable

__all__ = [
    "Contact",
    "ContactRepository",
    "ContactTable",
    "Phone",
    "PhoneTable",
    "NewsRelease",
    "NewsReleaseRepository",
    "NewsReleaseTable",
    "Role",
    "User",
    "UserRepository",
    "UserTable",
]
