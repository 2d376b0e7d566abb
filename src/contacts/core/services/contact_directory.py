"""Contact directory service.

Every operation takes the caller identity explicitly (``None`` for a guest),
runs it past the authorization guard before touching the store, and answers
with an :class:`ActionResult` describing either a view to render or a
location to redirect to.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from pydantic import ValidationError
from sqlmodel import Session

from src.contacts.core.authorization import Action, authorize
from src.contacts.core.errors import NotFound, ValidationFailed
from src.contacts.entities.contact import Contact, ContactAttributes, ContactRepository
from src.contacts.entities.user import User

CONTACTS_PATH = "/contacts"


def contact_path(contact_id: str) -> str:
    return f"{CONTACTS_PATH}/{contact_id}"


def _coerce_attributes(
    attributes: ContactAttributes | Mapping[str, Any],
) -> ContactAttributes:
    """Validate raw submitted fields, reporting malformed input as a rejection."""
    if isinstance(attributes, ContactAttributes):
        return attributes
    try:
        return ContactAttributes.model_validate(attributes)
    except ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field_name = ".".join(str(part) for part in error["loc"]) or "contact"
            errors.setdefault(field_name, []).append("is invalid")
        raise ValidationFailed(errors) from exc


def _keep_entered_names(
    contact: Contact, attributes: ContactAttributes | Mapping[str, Any]
) -> None:
    """Copy well-formed names from input that could not be parsed as a whole."""
    if not isinstance(attributes, Mapping):
        return
    for field_name in ("firstname", "lastname"):
        value = attributes.get(field_name)
        if isinstance(value, str):
            setattr(contact, field_name, value.strip())


@dataclass
class ActionResult:
    """Outcome of a directory action: a rendered view or a redirect."""

    view: str | None = None
    redirect_to: str | None = None
    status_code: int = 200
    assigns: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def render(cls, view: str, status_code: int = 200, **assigns: Any) -> "ActionResult":
        return cls(view=view, status_code=status_code, assigns=assigns)

    @classmethod
    def redirect(cls, location: str, **assigns: Any) -> "ActionResult":
        return cls(redirect_to=location, status_code=303, assigns=assigns)

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None


class ContactDirectoryService:
    """List, show, create, edit and delete contacts on behalf of a caller."""

    def __init__(self, db_session: Session) -> None:
        self._session = db_session
        self._contacts = ContactRepository(db_session)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def _find(self, contact_id: str) -> Contact:
        contact = self._contacts.get(contact_id)
        if contact is None:
            raise NotFound("Contact", contact_id)
        return contact

    def list(self, identity: User | None, starting_letter: str | None = None) -> ActionResult:
        """All contacts by (lastname, firstname), optionally by last-name prefix."""
        authorize(Action.LIST, identity)
        contacts = self._contacts.list_all(starting_letter or None)
        return ActionResult.render(
            "index", contacts=contacts, letter=starting_letter or None
        )

    def show(self, identity: User | None, contact_id: str) -> ActionResult:
        authorize(Action.SHOW, identity)
        return ActionResult.render("show", contact=self._find(contact_id))

    def new_form(self, identity: User | None) -> ActionResult:
        authorize(Action.NEW_FORM, identity)
        return ActionResult.render("new", contact=Contact.scaffold(), errors={})

    def edit_form(self, identity: User | None, contact_id: str) -> ActionResult:
        authorize(Action.EDIT_FORM, identity)
        return ActionResult.render("edit", contact=self._find(contact_id), errors={})

    def create(
        self, identity: User | None, attributes: ContactAttributes | Mapping[str, Any]
    ) -> ActionResult:
        """Persist a new contact and its phones, or re-render the new form.

        On failure the returned contact is the unpersisted one carrying
        the values that were entered, with a row for every phone type.
        """
        authorize(Action.CREATE, identity)

        contact = Contact()
        try:
            try:
                coerced = _coerce_attributes(attributes)
            except ValidationFailed:
                _keep_entered_names(contact, attributes)
                raise
            contact.assign_attributes(coerced)
            with self._transaction():
                created = self._contacts.create(contact)
        except ValidationFailed as exc:
            logger.bind(user_id=identity.id).info(
                "Contact rejected: {}", ", ".join(sorted(exc.errors))
            )
            contact.fill_phone_rows()
            return ActionResult.render(
                "new",
                status_code=422,
                contact=contact,
                errors=exc.errors,
                error_messages=exc.messages(),
            )

        logger.bind(user_id=identity.id, contact_id=created.id).info("Contact created")
        return ActionResult.redirect(contact_path(created.id), contact=created)

    def update(
        self,
        identity: User | None,
        contact_id: str,
        attributes: ContactAttributes | Mapping[str, Any],
    ) -> ActionResult:
        """Apply the submitted fields, or re-render the edit form.

        A rejected update leaves the stored contact unchanged; the edit form
        gets the attempted values back.
        """
        authorize(Action.UPDATE, identity)

        contact = self._find(contact_id)
        try:
            try:
                coerced = _coerce_attributes(attributes)
            except ValidationFailed:
                _keep_entered_names(contact, attributes)
                raise
            contact.assign_attributes(coerced)
            with self._transaction():
                updated = self._contacts.update(contact)
        except ValidationFailed as exc:
            logger.bind(user_id=identity.id, contact_id=contact_id).info(
                "Contact update rejected: {}", ", ".join(sorted(exc.errors))
            )
            return ActionResult.render(
                "edit",
                status_code=422,
                contact=contact,
                errors=exc.errors,
                error_messages=exc.messages(),
            )

        logger.bind(user_id=identity.id, contact_id=contact_id).info("Contact updated")
        return ActionResult.redirect(contact_path(updated.id), contact=updated)

    def destroy(self, identity: User | None, contact_id: str) -> ActionResult:
        """Delete a contact and its phones."""
        authorize(Action.DESTROY, identity)

        with self._transaction():
            if not self._contacts.delete(contact_id):
                raise NotFound("Contact", contact_id)

        logger.bind(user_id=identity.id, contact_id=contact_id).info("Contact deleted")
        return ActionResult.redirect(CONTACTS_PATH)
