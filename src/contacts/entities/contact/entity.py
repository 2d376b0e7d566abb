"""Entities: Contact and Phone."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.contacts.core.errors import NotFound
from src.contacts.entities._base import Entity

PHONE_TYPES = ("home", "office", "mobile")

BLANK = "can't be blank"
TAKEN = "has already been taken"


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class PhoneAttributes(BaseModel):
    """One nested phone row as submitted with a contact form."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    number: str | None = None
    phone_type: str | None = None
    destroy: bool = Field(default=False, alias="_destroy")

    @field_validator("id", mode="before")
    @classmethod
    def _empty_id_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_blank(self) -> bool:
        """A new row where nothing was typed in."""
        return self.id is None and _blank(self.number)


class ContactAttributes(BaseModel):
    """Attributes accepted by create and update.

    Fields left unset are not touched by an update.
    """

    firstname: str | None = None
    lastname: str | None = None
    phones_attributes: list[PhoneAttributes] | None = None

    @field_validator("phones_attributes", mode="before")
    @classmethod
    def _indexed_rows_to_list(cls, value: Any) -> Any:
        # HTML forms post rows keyed by index: {"0": {...}, "1": {...}}
        if isinstance(value, dict):
            return [
                row
                for _, row in sorted(
                    value.items(), key=lambda item: (len(str(item[0])), str(item[0]))
                )
            ]
        return value


class Phone(Entity):
    """A phone number owned by exactly one contact."""

    number: str = Field(default="", description="Phone number")
    phone_type: str = Field(default="", description="home, office or mobile")
    contact_id: str | None = Field(default=None, description="Owning contact")
    marked_for_destruction: bool = Field(default=False, exclude=True)
    # An empty new row, kept only so a re-rendered form shows it again
    placeholder: bool = Field(default=False, exclude=True)

    @property
    def is_kept(self) -> bool:
        return not (self.marked_for_destruction or self.placeholder)

    def __eq__(self, other: Any) -> bool:
        """Compare phones by business attributes, ignoring timestamps."""
        if not isinstance(other, Phone):
            return False

        return (
            self.id == other.id
            and self.number == other.number
            and self.phone_type == other.phone_type
        )

    def __hash__(self) -> int:
        return hash((self.id, self.number, self.phone_type))


class Contact(Entity):
    """A person with a name and phone numbers.

    This is the domain model that carries the validation rules the store
    enforces before anything is written.
    """

    firstname: str = Field(default="", description="Given name")
    lastname: str = Field(default="", description="Family name")
    phones: list[Phone] = Field(default_factory=list, description="Owned phones")

    @classmethod
    def scaffold(cls) -> "Contact":
        """An unpersisted contact with one empty phone per standard type."""
        return cls(phones=[Phone(phone_type=phone_type) for phone_type in PHONE_TYPES])

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.firstname, self.lastname) if part)

    @property
    def active_phones(self) -> list[Phone]:
        return [phone for phone in self.phones if phone.is_kept]

    def assign_attributes(self, attributes: ContactAttributes) -> None:
        """Apply submitted attributes in place.

        Only fields present in ``attributes`` change. Nested phone rows with
        an ``id`` update (or, with ``_destroy``, remove) that phone; rows
        without one add a phone. Blank new rows become placeholders, which
        are shown on the form but never validated or saved.

        Raises:
            NotFound: A row references a phone this contact does not own.
        """
        for field_name in ("firstname", "lastname"):
            value = getattr(attributes, field_name)
            if field_name in attributes.model_fields_set and value is not None:
                setattr(self, field_name, value.strip())

        for row in attributes.phones_attributes or []:
            if row.id is None:
                if row.destroy:
                    continue
                self.phones.append(
                    Phone(
                        number=(row.number or "").strip(),
                        phone_type=(row.phone_type or "").strip(),
                        contact_id=self.id,
                        placeholder=row.is_blank(),
                    )
                )
                continue

            phone = next((p for p in self.phones if p.id == row.id), None)
            if phone is None:
                raise NotFound("Phone", row.id)
            if row.destroy:
                phone.marked_for_destruction = True
                continue
            if row.number is not None:
                phone.number = row.number.strip()
            if row.phone_type is not None:
                phone.phone_type = row.phone_type.strip()

    def fill_phone_rows(self) -> None:
        """Add an empty row for each standard phone type not on the contact."""
        present = {
            phone.phone_type for phone in self.phones if not phone.marked_for_destruction
        }
        self.phones.extend(
            Phone(phone_type=phone_type, contact_id=self.id, placeholder=True)
            for phone_type in PHONE_TYPES
            if phone_type not in present
        )

    def validation_errors(self) -> dict[str, list[str]]:
        """Field name -> messages; empty when the contact may be saved."""
        errors: dict[str, list[str]] = {}

        if _blank(self.firstname):
            errors.setdefault("firstname", []).append(BLANK)
        if _blank(self.lastname):
            errors.setdefault("lastname", []).append(BLANK)

        seen_numbers: set[str] = set()
        for index, phone in enumerate(self.phones):
            if not phone.is_kept:
                continue
            if _blank(phone.number):
                errors.setdefault(f"phones[{index}].number", []).append(BLANK)
            elif phone.number in seen_numbers:
                errors.setdefault(f"phones[{index}].number", []).append(TAKEN)
            else:
                seen_numbers.add(phone.number)
            if _blank(phone.phone_type):
                errors.setdefault(f"phones[{index}].phone_type", []).append(BLANK)

        return errors

    def __eq__(self, other: Any) -> bool:
        """Compare contacts by business attributes, ignoring timestamps."""
        if not isinstance(other, Contact):
            return False

        return (
            self.id == other.id
            and self.firstname == other.firstname
            and self.lastname == other.lastname
            and self.active_phones == other.active_phones
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.firstname,
            self.lastname,
            tuple(self.active_phones),
        ))
