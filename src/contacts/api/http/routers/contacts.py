"""Contact directory pages: list, show, new, edit, create, update and delete."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from src.contacts.api.http.deps import (
    get_contact_directory,
    get_current_user,
    require_csrf,
)
from src.contacts.api.http.forms import parse_nested_form
from src.contacts.api.http.templating import render
from src.contacts.core.services import ActionResult, ContactDirectoryService
from src.contacts.entities.user import User

router = APIRouter(
    prefix="/contacts",
    tags=["contacts"],
    default_response_class=HTMLResponse,
    dependencies=[Depends(require_csrf)],
)


def _respond(request: Request, result: ActionResult) -> Response:
    if result.is_redirect:
        return RedirectResponse(result.redirect_to, status_code=result.status_code)
    return render(
        request,
        f"contacts/{result.view}.html",
        result.assigns,
        status_code=result.status_code,
    )


async def _submitted_contact(request: Request) -> dict[str, Any]:
    """The ``contact[...]`` fields of the posted form."""
    form = await request.form()
    contact = parse_nested_form(form.multi_items()).get("contact")
    return contact if isinstance(contact, dict) else {}


@router.get("", name="contacts_index")
def index(
    request: Request,
    letter: str | None = None,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    """List contacts, optionally only those whose last name starts with ``letter``."""
    return _respond(request, directory.list(user, starting_letter=letter))


@router.get("/new", name="new_contact")
def new(
    request: Request,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    return _respond(request, directory.new_form(user))


@router.post("", name="create_contact")
async def create(
    request: Request,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    attributes = await _submitted_contact(request)
    result = await run_in_threadpool(directory.create, user, attributes)
    return _respond(request, result)


@router.get("/{contact_id}", name="contact")
def show(
    request: Request,
    contact_id: str,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    return _respond(request, directory.show(user, contact_id))


@router.get("/{contact_id}/edit", name="edit_contact")
def edit(
    request: Request,
    contact_id: str,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    return _respond(request, directory.edit_form(user, contact_id))


# HTML forms can only POST, so POST doubles as update
@router.api_route("/{contact_id}", methods=["PUT", "PATCH", "POST"], name="update_contact")
async def update(
    request: Request,
    contact_id: str,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    attributes = await _submitted_contact(request)
    result = await run_in_threadpool(directory.update, user, contact_id, attributes)
    return _respond(request, result)


@router.delete("/{contact_id}", name="destroy_contact")
@router.post("/{contact_id}/delete", name="destroy_contact_form")
def destroy(
    request: Request,
    contact_id: str,
    user: User | None = Depends(get_current_user),
    directory: ContactDirectoryService = Depends(get_contact_directory),
) -> Response:
    return _respond(request, directory.destroy(user, contact_id))
