"""NewsRelease database table model."""

from datetime import date

from sqlmodel import Field

from src.contacts.entities._base import EntityTable


class NewsReleaseTable(EntityTable, table=True):
    """Database persistence model for news releases."""

    __tablename__ = "news_releases"

    title: str
    released_on: date = Field(index=True)
    body: str = ""
