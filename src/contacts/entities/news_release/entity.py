"""Entity: NewsRelease."""

from datetime import date
from typing import Any

from pydantic import Field

from src.contacts.entities._base import Entity


class NewsRelease(Entity):
    """A dated announcement published by the organisation."""

    title: str = Field(description="Headline")
    released_on: date = Field(description="Publication date")
    body: str = Field(default="", description="Release text")

    def __eq__(self, other: Any) -> bool:
        """Compare releases by business attributes, ignoring timestamps."""
        if not isinstance(other, NewsRelease):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.released_on == other.released_on
            and self.body == other.body
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.released_on, self.body))
