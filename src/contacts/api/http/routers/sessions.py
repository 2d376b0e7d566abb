"""Sign-in and sign-out with a server-side session cookie."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from loguru import logger
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from src.contacts.api.http.deps import (
    get_db_session,
    get_user_session_service,
    require_csrf,
)
from src.contacts.api.http.templating import render
from src.contacts.core.security import sanitize_return_url, verify_password
from src.contacts.core.services import CONTACTS_PATH, UserSessionService
from src.contacts.entities.user import User, UserRepository
from src.contacts.runtime.context import get_config

router = APIRouter(tags=["sessions"], default_response_class=HTMLResponse)


def _cookie_settings() -> dict[str, Any]:
    """Session cookie attributes.

    HttpOnly keeps the id away from scripts; Secure is only forced in
    production so the app stays usable over plain HTTP on localhost.
    """
    config = get_config()
    return {
        "httponly": True,
        "secure": config.security.secure_cookies
        and config.app.environment == "production",
        "samesite": config.security.cookie_samesite,
        "path": "/",
    }


def _authenticate(db: Session, email: str, password: str) -> User | None:
    user = UserRepository(db).get_by_email(email) if email else None
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


@router.get("/login", name="login_form")
def login_form(request: Request, return_to: str | None = None) -> Response:
    return render(
        request,
        "sessions/new.html",
        {"return_to": sanitize_return_url(return_to), "email": "", "error": None},
    )


@router.post("/login", name="login")
async def login(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> Response:
    """Check credentials, start a session and send the user back where they were."""
    form = await request.form()
    email = str(form.get("email") or "").strip()
    password = str(form.get("password") or "")
    return_to = sanitize_return_url(str(form.get("return_to") or ""))

    user = await run_in_threadpool(_authenticate, db, email, password)
    if user is None:
        logger.bind(email=email).warning("Failed sign-in attempt")
        return render(
            request,
            "sessions/new.html",
            {
                "return_to": return_to,
                "email": email,
                "error": "Invalid email or password",
            },
            status_code=401,
        )

    session_id = await user_session_service.create_user_session(user.id, user.role.value)
    logger.bind(user_id=user.id).info("User signed in")

    response = RedirectResponse(return_to, status_code=303)
    response.set_cookie(
        key=get_config().security.session_cookie_name,
        value=session_id,
        max_age=get_config().app.session_max_age,
        **_cookie_settings(),
    )
    return response


@router.post("/logout", name="logout", dependencies=[Depends(require_csrf)])
async def logout(
    request: Request,
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> Response:
    cookie_name = get_config().security.session_cookie_name
    session_id = request.cookies.get(cookie_name)
    if session_id:
        await user_session_service.delete_user_session(session_id)
        logger.info("User signed out")

    response = RedirectResponse(CONTACTS_PATH, status_code=303)
    response.delete_cookie(cookie_name, path="/")
    return response
