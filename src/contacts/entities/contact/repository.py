"""Contact repository: the validating store for contacts and their phones."""

import sqlalchemy as sa
from loguru import logger
from sqlmodel import Session, col, select

from src.contacts.core.errors import NotFound, ValidationFailed
from src.contacts.entities.contact.entity import Contact, Phone
from src.contacts.entities.contact.table import ContactTable, PhoneTable


class ContactRepository:
    """Data-access layer for contacts.

    Writes are staged on the session and flushed; committing is left to the
    caller so that a contact and its phones land in one transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: ContactTable) -> Contact:
        return Contact.model_validate(row, from_attributes=True)

    def _get_row(self, contact_id: str) -> ContactTable:
        row = self._session.get(ContactTable, contact_id)
        if row is None:
            raise NotFound("Contact", contact_id)
        return row

    def get(self, contact_id: str) -> Contact | None:
        row = self._session.get(ContactTable, contact_id)
        if row is None:
            return None
        return self._to_entity(row)

    def list_all(self, starting_letter: str | None = None) -> list[Contact]:
        """All contacts ordered by last name, then first name.

        ``starting_letter`` keeps only last names beginning with exactly
        that prefix (case-sensitive, unlike ``LIKE`` on SQLite).
        """
        statement = select(ContactTable).order_by(
            col(ContactTable.lastname), col(ContactTable.firstname)
        )
        if starting_letter:
            statement = statement.where(
                sa.func.substr(ContactTable.lastname, 1, len(starting_letter))
                == starting_letter
            )
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def count(self) -> int:
        statement = select(sa.func.count()).select_from(ContactTable)
        return self._session.exec(statement).one()

    def create(self, contact: Contact) -> Contact:
        """Validate and stage a new contact with all of its phones.

        Raises:
            ValidationFailed: The contact or one of its phones is invalid.
                Nothing is added to the session.
        """
        errors = contact.validation_errors()
        if errors:
            raise ValidationFailed(errors)

        row = ContactTable(firstname=contact.firstname, lastname=contact.lastname)
        row.phones = [
            PhoneTable(number=phone.number, phone_type=phone.phone_type)
            for phone in contact.active_phones
        ]
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.debug("Staged contact {} with {} phones", row.id, len(row.phones))
        return self._to_entity(row)

    def update(self, contact: Contact) -> Contact:
        """Validate ``contact`` and write it over the stored row.

        Validation happens before the stored row is touched, so a rejected
        update leaves the row exactly as it was.

        Raises:
            NotFound: No stored contact has ``contact.id``.
            ValidationFailed: The new state is invalid.
        """
        row = self._get_row(contact.id)

        errors = contact.validation_errors()
        if errors:
            raise ValidationFailed(errors)

        row.firstname = contact.firstname
        row.lastname = contact.lastname

        stored_phones = {phone_row.id: phone_row for phone_row in row.phones}
        for phone in contact.phones:
            self._sync_phone(row, stored_phones, phone)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def _sync_phone(
        self,
        row: ContactTable,
        stored_phones: dict[str, PhoneTable],
        phone: Phone,
    ) -> None:
        if phone.id is None:
            if phone.is_kept:
                row.phones.append(
                    PhoneTable(number=phone.number, phone_type=phone.phone_type)
                )
            return

        phone_row = stored_phones.get(phone.id)
        if phone_row is None:
            raise NotFound("Phone", phone.id)
        if phone.marked_for_destruction:
            row.phones.remove(phone_row)
            return
        phone_row.number = phone.number
        phone_row.phone_type = phone.phone_type

    def delete(self, contact_id: str) -> bool:
        """Stage deletion of a contact and its phones. False if it did not exist."""
        row = self._session.get(ContactTable, contact_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
