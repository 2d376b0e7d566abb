"""Data layer tests.

Covers the Contact, Phone, User and NewsRelease entities and their
repositories against a real in-memory SQLite database.
"""

from datetime import date, timedelta

import pytest
from sqlmodel import Session, select

from src.contacts.core.errors import NotFound, ValidationFailed
from src.contacts.entities.contact import (
    Contact,
    ContactAttributes,
    ContactRepository,
    ContactTable,
    Phone,
    PhoneTable,
)
from src.contacts.entities.news_release import NewsRelease, NewsReleaseRepository
from src.contacts.entities.user import Role, User, UserRepository
from tests.fixtures.factories import build_contact


class TestContactEntity:
    """Test Contact domain entity."""

    def test_new_contact_has_no_id(self):
        contact = Contact(firstname="Ada", lastname="Lovelace")

        assert contact.id is None
        assert contact.is_new
        assert contact.name == "Ada Lovelace"

    def test_scaffold_has_one_phone_per_type(self):
        contact = Contact.scaffold()

        assert [phone.phone_type for phone in contact.phones] == [
            "home",
            "office",
            "mobile",
        ]
        assert all(phone.number == "" for phone in contact.phones)
        assert contact.is_new

    def test_valid_contact_has_no_errors(self):
        contact = build_contact()

        assert contact.validation_errors() == {}

    def test_blank_names_are_reported(self):
        contact = Contact(firstname=" ", lastname="")

        errors = contact.validation_errors()

        assert errors["firstname"] == ["can't be blank"]
        assert errors["lastname"] == ["can't be blank"]

    def test_phone_needs_number_and_type(self):
        contact = Contact(
            firstname="Ada",
            lastname="Lovelace",
            phones=[Phone(number="", phone_type="")],
        )

        errors = contact.validation_errors()

        assert errors["phones[0].number"] == ["can't be blank"]
        assert errors["phones[0].phone_type"] == ["can't be blank"]

    def test_duplicate_number_within_contact_is_rejected(self):
        contact = Contact(
            firstname="Ada",
            lastname="Lovelace",
            phones=[
                Phone(number="555-0100", phone_type="home"),
                Phone(number="555-0100", phone_type="office"),
            ],
        )

        assert contact.validation_errors() == {
            "phones[1].number": ["has already been taken"]
        }

    def test_assign_attributes_only_changes_given_fields(self):
        contact = Contact(firstname="Ada", lastname="Lovelace")

        contact.assign_attributes(ContactAttributes(firstname="  Augusta "))

        assert contact.firstname == "Augusta"
        assert contact.lastname == "Lovelace"

    def test_assign_attributes_keeps_blank_new_rows_as_placeholders(self):
        contact = Contact(firstname="Ada", lastname="Lovelace")

        contact.assign_attributes(
            ContactAttributes.model_validate(
                {
                    "phones_attributes": {
                        "0": {"number": "555-0100", "phone_type": "home"},
                        "1": {"number": "", "phone_type": "office"},
                    }
                }
            )
        )

        assert [(p.number, p.phone_type) for p in contact.phones] == [
            ("555-0100", "home"),
            ("", "office"),
        ]
        assert [p.placeholder for p in contact.phones] == [False, True]
        assert [p.number for p in contact.active_phones] == ["555-0100"]
        assert contact.validation_errors() == {}

    def test_fill_phone_rows_adds_missing_types(self):
        contact = Contact(firstname="Ada", lastname="Lovelace")
        contact.assign_attributes(
            ContactAttributes.model_validate(
                {"phones_attributes": [{"number": "555-0100", "phone_type": "office"}]}
            )
        )

        contact.fill_phone_rows()

        assert [p.phone_type for p in contact.phones] == ["office", "home", "mobile"]
        assert contact.active_phones == [Phone(number="555-0100", phone_type="office")]

    def test_indexed_rows_keep_numeric_order(self):
        rows = {str(i): {"number": f"555-01{i:02d}", "phone_type": "home"} for i in range(12)}

        attributes = ContactAttributes.model_validate({"phones_attributes": rows})

        assert [row.number for row in attributes.phones_attributes] == [
            f"555-01{i:02d}" for i in range(12)
        ]

    def test_unknown_phone_id_raises(self):
        contact = Contact(firstname="Ada", lastname="Lovelace")

        with pytest.raises(NotFound):
            contact.assign_attributes(
                ContactAttributes(phones_attributes=[{"id": "missing", "number": "1"}])
            )

    def test_contact_equality_ignores_timestamps(self):
        first = Contact(id="c1", firstname="Ada", lastname="Lovelace")
        second = first.model_copy(update={"created_at": None})

        assert first == second
        assert first != Contact(id="c1", firstname="Ada", lastname="Byron")


class TestContactRepository:
    """Test ContactRepository operations against SQLite."""

    def test_create_assigns_ids(self, session: Session):
        repository = ContactRepository(session)

        created = repository.create(build_contact(firstname="Ada", lastname="Lovelace"))
        session.commit()

        assert created.id is not None
        assert len(created.phones) == 3
        assert all(phone.contact_id == created.id for phone in created.phones)
        assert repository.get(created.id) == created

    def test_create_rejects_invalid_contact(self, session: Session):
        repository = ContactRepository(session)

        with pytest.raises(ValidationFailed) as exc_info:
            repository.create(Contact(firstname="", lastname="Lovelace"))

        assert "firstname" in exc_info.value.errors
        assert exc_info.value.messages() == ["Firstname can't be blank"]
        assert repository.count() == 0

    def test_placeholder_rows_are_not_stored(self, session: Session):
        repository = ContactRepository(session)
        contact = Contact(firstname="Ada", lastname="Lovelace")
        contact.fill_phone_rows()

        created = repository.create(contact)
        session.commit()

        assert created.phones == []
        assert session.exec(select(PhoneTable)).all() == []

    def test_get_missing_returns_none(self, session: Session):
        assert ContactRepository(session).get("does-not-exist") is None

    def test_list_orders_by_lastname_then_firstname(self, session: Session):
        repository = ContactRepository(session)
        for firstname, lastname in [("Zoe", "Adams"), ("Bob", "Smith"), ("Amy", "Adams")]:
            repository.create(build_contact(firstname=firstname, lastname=lastname))
        session.commit()

        names = [(c.lastname, c.firstname) for c in repository.list_all()]

        assert names == [("Adams", "Amy"), ("Adams", "Zoe"), ("Smith", "Bob")]

    def test_list_filters_by_case_sensitive_prefix(self, session: Session):
        repository = ContactRepository(session)
        for lastname in ["Smith", "Jones", "smythe"]:
            repository.create(build_contact(lastname=lastname))
        session.commit()

        assert [c.lastname for c in repository.list_all("S")] == ["Smith"]
        assert [c.lastname for c in repository.list_all("sm")] == ["smythe"]
        assert repository.list_all("Q") == []
        assert len(repository.list_all()) == 3

    def test_update_changes_fields_and_phones(self, session: Session, contact_factory):
        contact = contact_factory(firstname="Ada", lastname="Lovelace")
        home, office, mobile = contact.phones
        repository = ContactRepository(session)

        contact.assign_attributes(
            ContactAttributes.model_validate(
                {
                    "lastname": "King",
                    "phones_attributes": [
                        {"id": home.id, "number": "555-9999"},
                        {"id": office.id, "_destroy": "1"},
                        {"number": "555-1234", "phone_type": "mobile"},
                    ],
                }
            )
        )
        updated = repository.update(contact)
        session.commit()

        assert updated.lastname == "King"
        numbers = {phone.number for phone in updated.phones}
        assert numbers == {"555-9999", mobile.number, "555-1234"}
        assert session.get(PhoneTable, office.id) is None

    def test_rejected_update_leaves_row_unchanged(
        self, session: Session, contact_factory
    ):
        contact = contact_factory(firstname="Ada", lastname="Lovelace")
        repository = ContactRepository(session)

        contact.assign_attributes(ContactAttributes(firstname=""))
        with pytest.raises(ValidationFailed):
            repository.update(contact)
        session.rollback()

        assert repository.get(contact.id).firstname == "Ada"

    def test_update_missing_contact_raises(self, session: Session):
        with pytest.raises(NotFound):
            ContactRepository(session).update(
                Contact(id="missing", firstname="Ada", lastname="Lovelace")
            )

    def test_delete_removes_contact_and_phones(self, session: Session, contact_factory):
        contact = contact_factory()
        repository = ContactRepository(session)

        assert repository.delete(contact.id) is True
        session.commit()

        assert repository.get(contact.id) is None
        assert session.exec(select(PhoneTable)).all() == []
        assert repository.delete(contact.id) is False

    def test_count(self, session: Session, contact_factory):
        contact_factory()
        contact_factory()

        assert ContactRepository(session).count() == 2
        assert len(session.exec(select(ContactTable)).all()) == 2


class TestUserRepository:
    """Test UserRepository operations."""

    def test_create_and_lookup_by_email(self, session: Session):
        repository = UserRepository(session)

        created = repository.create(
            User(email="Ada@Example.com", name="Ada", role=Role.ADMIN)
        )
        session.commit()

        assert created.id is not None
        assert created.email == "ada@example.com"
        assert created.is_admin
        assert repository.get_by_email("ADA@example.com ") == created
        assert repository.get(created.id) == created

    def test_list_and_delete(self, session: Session):
        repository = UserRepository(session)
        bob = repository.create(User(email="bob@example.com"))
        repository.create(User(email="amy@example.com"))
        session.commit()

        assert [u.email for u in repository.list_all()] == [
            "amy@example.com",
            "bob@example.com",
        ]
        assert repository.delete(bob.id) is True
        assert repository.delete(bob.id) is False
        assert repository.get_by_email("bob@example.com") is None


class TestNewsReleaseRepository:
    """Test NewsReleaseRepository operations."""

    def test_factory_defaults(self, news_release_factory):
        release = news_release_factory()

        assert release.id is not None
        assert release.title == "Test news release"
        assert release.released_on == date.today() - timedelta(days=1)
        assert release.body

    def test_list_recent_newest_first(self, session: Session, news_release_factory):
        today = date.today()
        older = news_release_factory(released_on=today - timedelta(days=10))
        newest = news_release_factory(released_on=today)
        middle = news_release_factory(released_on=today - timedelta(days=3))
        repository = NewsReleaseRepository(session)

        assert repository.list_recent() == [newest, middle, older]
        assert repository.list_recent(limit=1) == [newest]
        assert repository.count() == 3

    def test_get(self, session: Session):
        repository = NewsReleaseRepository(session)
        created = repository.create(
            NewsRelease(title="Launch", released_on=date(2024, 1, 2), body="Hello")
        )
        session.commit()

        assert repository.get(created.id) == created
        assert repository.get("missing") is None
