"""Schema management for the contact directory database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.contacts.core.services.database.db_session import build_engine
from src.contacts.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        self._engine = engine or build_engine(get_config())

    def create_all(self) -> None:
        """Create all database tables."""
        # Register every table with the metadata
        from src.contacts.entities.contact import ContactTable, PhoneTable  # noqa: F401
        from src.contacts.entities.news_release import NewsReleaseTable  # noqa: F401
        from src.contacts.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
