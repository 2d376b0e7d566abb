"""Contact and phone database table models."""

from sqlmodel import Field, Relationship

from src.contacts.entities._base import EntityTable


class ContactTable(EntityTable, table=True):
    """Database persistence model for contacts.

    Phones are owned rows: they are written with the contact and deleted
    with it.
    """

    __tablename__ = "contacts"

    firstname: str = Field(index=True)
    lastname: str = Field(index=True)

    phones: list["PhoneTable"] = Relationship(
        back_populates="contact",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "PhoneTable.created_at",
        },
    )


class PhoneTable(EntityTable, table=True):
    """Database persistence model for phones."""

    __tablename__ = "phones"

    contact_id: str = Field(foreign_key="contacts.id", ondelete="CASCADE", index=True)
    number: str
    phone_type: str

    contact: ContactTable | None = Relationship(back_populates="phones")
