"""User domain entity."""

from enum import StrEnum
from typing import Any

from pydantic import Field

from src.contacts.entities._base import Entity


class Role(StrEnum):
    """Roles a logged-in user can hold."""

    ADMIN = "admin"
    USER = "user"


class User(Entity):
    """An account that can sign in and manage contacts.

    Administrators and users currently have the same permissions on the
    contact directory; the role is carried for display and future policy.
    """

    email: str = Field(description="Login email address")
    name: str = Field(default="", description="Display name")
    role: Role = Field(default=Role.USER, description="Account role")
    password_hash: str = Field(default="", repr=False, description="bcrypt hash")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.email == other.email
            and self.name == other.name
            and self.role == other.role
        )

    def __hash__(self) -> int:
        return hash((self.id, self.email, self.name, self.role))
