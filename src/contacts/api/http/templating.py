"""Jinja2 template rendering for HTML views."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from src.contacts.entities.contact import PHONE_TYPES

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["phone_types"] = PHONE_TYPES


def render(
    request: Request,
    template_name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
):
    """Render ``template_name`` with the signed-in user and CSRF token in scope."""
    page_context: dict[str, Any] = {
        "current_user": getattr(request.state, "user", None),
        "csrf_token": getattr(request.state, "csrf_token", None),
    }
    page_context.update(context or {})
    return templates.TemplateResponse(
        request, template_name, page_context, status_code=status_code
    )
