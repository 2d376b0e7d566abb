"""End-to-end tests for the contact pages, per kind of caller.

Administrators and users share one set of expectations; guests may only
list and show contacts and are sent to the login page for everything else.
"""

import pytest
from sqlmodel import Session

from src.contacts.entities.contact import ContactRepository
from tests.fixtures.factories import contact_form_data

pytestmark = pytest.mark.integration


@pytest.fixture(params=["admin_user", "regular_user"])
def member_client(request, client_as):
    """A client signed in as each kind of user in turn."""
    return client_as(request.getfixturevalue(request.param))


@pytest.fixture
def guest_client(client_as):
    return client_as(None)


@pytest.fixture
def contact(contact_factory):
    return contact_factory(firstname="Lawrence", lastname="Smith")


def _count(session: Session) -> int:
    return ContactRepository(session).count()


class TestMemberAccess:
    """Behaviour shared by administrators and users."""

    def test_index_lists_contacts(self, member_client, contact):
        response = member_client.get("/contacts")

        assert response.status_code == 200
        assert response.template.name == "contacts/index.html"
        assert response.context["contacts"] == [contact]

    def test_index_filters_by_letter(self, member_client, contact, contact_factory):
        contact_factory(lastname="Jones")

        response = member_client.get("/contacts", params={"letter": "S"})

        assert response.context["contacts"] == [contact]
        assert response.context["letter"] == "S"

    def test_show(self, member_client, contact):
        response = member_client.get(f"/contacts/{contact.id}")

        assert response.status_code == 200
        assert response.template.name == "contacts/show.html"
        assert response.context["contact"] == contact
        assert "Lawrence Smith" in response.text

    def test_new_assigns_scaffold_with_phones(self, member_client):
        response = member_client.get("/contacts/new")

        assert response.status_code == 200
        assert response.template.name == "contacts/new.html"
        new_contact = response.context["contact"]
        assert new_contact.is_new
        assert [p.phone_type for p in new_contact.phones] == ["home", "office", "mobile"]

    def test_edit(self, member_client, contact):
        response = member_client.get(f"/contacts/{contact.id}/edit")

        assert response.status_code == 200
        assert response.template.name == "contacts/edit.html"
        assert response.context["contact"] == contact

    def test_create_saves_and_redirects(self, member_client, session):
        form = contact_form_data(
            firstname="Ada",
            lastname="Lovelace",
            phones=[
                {"phone_type": "home", "number": "555-0100"},
                {"phone_type": "office", "number": "555-0101"},
                {"phone_type": "mobile", "number": ""},
            ],
        )

        response = member_client.post("/contacts", data=form)

        assert _count(session) == 1
        created = ContactRepository(session).list_all()[0]
        assert response.status_code == 303
        assert response.headers["location"] == f"/contacts/{created.id}"
        assert created.name == "Ada Lovelace"
        assert [p.number for p in created.phones] == ["555-0100", "555-0101"]

    def test_create_invalid_rerenders_new(self, member_client, session):
        form = contact_form_data(firstname="Ada", lastname="")

        response = member_client.post("/contacts", data=form)

        assert _count(session) == 0
        assert response.status_code == 422
        assert response.template.name == "contacts/new.html"
        assert response.context["contact"].firstname == "Ada"
        assert "Lastname can&#39;t be blank" in response.text

    def test_create_invalid_keeps_blank_phone_rows(self, member_client, session):
        blank_rows = [
            {"number": "", "phone_type": phone_type}
            for phone_type in ("home", "office", "mobile")
        ]
        form = contact_form_data(firstname="Ada", lastname="", phones=blank_rows)

        response = member_client.post("/contacts", data=form)

        assert _count(session) == 0
        assert response.status_code == 422
        phones = response.context["contact"].phones
        assert [p.phone_type for p in phones] == ["home", "office", "mobile"]
        for index in range(3):
            assert f'name="contact[phones_attributes][{index}][number]"' in response.text

    def test_update_saves_and_redirects(self, member_client, contact, session):
        form = contact_form_data(firstname="Larry", lastname="Smith")

        response = member_client.patch(f"/contacts/{contact.id}", data=form)

        assert response.status_code == 303
        assert response.headers["location"] == f"/contacts/{contact.id}"
        stored = ContactRepository(session).get(contact.id)
        assert stored.firstname == "Larry"
        assert stored.lastname == "Smith"

    def test_update_via_form_post(self, member_client, contact, session):
        home = contact.phones[0]
        form = contact_form_data(
            phones=[{"id": home.id, "number": home.number, "_destroy": "1"}]
        )

        response = member_client.post(f"/contacts/{contact.id}", data=form)

        assert response.status_code == 303
        stored = ContactRepository(session).get(contact.id)
        assert home.id not in {p.id for p in stored.phones}
        assert len(stored.phones) == 2

    def test_update_invalid_rerenders_edit(self, member_client, contact, session):
        form = contact_form_data(firstname="Larry", lastname="")

        response = member_client.put(f"/contacts/{contact.id}", data=form)

        assert response.status_code == 422
        assert response.template.name == "contacts/edit.html"
        assert response.context["contact"].id == contact.id
        stored = ContactRepository(session).get(contact.id)
        assert stored.firstname == "Lawrence"
        assert stored.lastname == "Smith"

    def test_destroy(self, member_client, contact, session):
        response = member_client.delete(f"/contacts/{contact.id}")

        assert response.status_code == 303
        assert response.headers["location"] == "/contacts"
        assert _count(session) == 0

    def test_destroy_via_form_post(self, member_client, contact, session):
        response = member_client.post(f"/contacts/{contact.id}/delete")

        assert response.status_code == 303
        assert _count(session) == 0

    def test_missing_contact_is_404(self, member_client):
        response = member_client.get("/contacts/does-not-exist/edit")

        assert response.status_code == 404
        assert response.template.name == "errors/404.html"


class TestGuestAccess:
    """Guests can read the directory but not change it."""

    def test_index(self, guest_client, contact):
        response = guest_client.get("/contacts")

        assert response.status_code == 200
        assert response.context["contacts"] == [contact]

    def test_show(self, guest_client, contact):
        response = guest_client.get(f"/contacts/{contact.id}")

        assert response.status_code == 200
        assert response.context["contact"] == contact

    def test_show_missing_contact_is_404(self, guest_client):
        assert guest_client.get("/contacts/does-not-exist").status_code == 404

    @pytest.mark.parametrize("suffix", ["/new", "/{id}/edit"])
    def test_forms_require_login(self, guest_client, contact, suffix):
        path = "/contacts" + suffix.format(id=contact.id)

        response = guest_client.get(path)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/login?return_to=")

    def test_create_requires_login(self, guest_client, session):
        form = contact_form_data(firstname="Ada", lastname="Lovelace")

        response = guest_client.post("/contacts", data=form)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/login")
        assert _count(session) == 0

    def test_update_requires_login(self, guest_client, contact, session):
        form = contact_form_data(firstname="Larry", lastname="Smith")

        response = guest_client.patch(f"/contacts/{contact.id}", data=form)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/login")
        assert ContactRepository(session).get(contact.id).firstname == "Lawrence"

    def test_destroy_requires_login(self, guest_client, contact, session):
        response = guest_client.delete(f"/contacts/{contact.id}")

        assert response.status_code == 303
        assert response.headers["location"].startswith("/login")
        assert _count(session) == 1

    def test_guest_is_refused_even_for_missing_contact(self, guest_client):
        response = guest_client.delete("/contacts/does-not-exist")

        assert response.status_code == 303
