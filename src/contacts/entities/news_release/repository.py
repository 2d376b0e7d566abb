import sqlalchemy as sa
from sqlmodel import Session, col, select

from src.contacts.entities.news_release.entity import NewsRelease
from src.contacts.entities.news_release.table import NewsReleaseTable


class NewsReleaseRepository:
    """Data-access layer for news releases."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, release_id: str) -> NewsRelease | None:
        row = self._session.get(NewsReleaseTable, release_id)
        if row is None:
            return None
        return NewsRelease.model_validate(row, from_attributes=True)

    def list_recent(self, limit: int | None = None) -> list[NewsRelease]:
        """Releases newest first."""
        statement = select(NewsReleaseTable).order_by(
            col(NewsReleaseTable.released_on).desc()
        )
        if limit is not None:
            statement = statement.limit(limit)
        return [
            NewsRelease.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]

    def count(self) -> int:
        statement = select(sa.func.count()).select_from(NewsReleaseTable)
        return self._session.exec(statement).one()

    def create(self, release: NewsRelease) -> NewsRelease:
        row = NewsReleaseTable(
            title=release.title,
            released_on=release.released_on,
            body=release.body,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return NewsRelease.model_validate(row, from_attributes=True)
