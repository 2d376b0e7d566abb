"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from loguru import logger
from sqlmodel import Session

from src.contacts.api.http.app_data import ApplicationDependencies
from src.contacts.core.security import generate_csrf_token, validate_csrf_token
from src.contacts.core.services import ContactDirectoryService, UserSessionService
from src.contacts.entities.user import User, UserRepository
from src.contacts.runtime.context import get_config


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session for the duration of one request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    db = app_deps.database_service.get_session()
    try:
        yield db
    finally:
        db.close()


def get_user_session_service(request: Request) -> UserSessionService:
    """Get the User Session service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_session_service


def get_contact_directory(
    db: Session = Depends(get_db_session),
) -> ContactDirectoryService:
    return ContactDirectoryService(db)


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> User | None:
    """Resolve the signed-in user from the session cookie.

    Returns ``None`` for a guest. A missing, expired or unreadable session
    is treated as a guest rather than an error, so public pages keep working
    when the session store is down.
    """
    request.state.user = None

    session_id = request.cookies.get(get_config().security.session_cookie_name)
    if not session_id:
        return None

    try:
        user_session = await user_session_service.get_user_session(session_id)
    except RuntimeError:
        logger.exception("Session lookup failed; continuing as guest")
        return None
    if user_session is None:
        return None

    user = UserRepository(db).get(user_session.user_id)
    if user is None:
        logger.bind(user_id=user_session.user_id).warning(
            "Session refers to a missing user"
        )
        return None

    request.state.session_id = session_id
    request.state.user_session = user_session
    request.state.user = user
    request.state.csrf_token = generate_csrf_token(session_id)
    return user


async def require_csrf(request: Request) -> None:
    """Require a valid CSRF token on state-changing requests from a session.

    The token is read from the configured header, or from the form field
    the HTML forms embed.
    """
    if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
        return

    cfg = get_config()
    if cfg.app.environment == "development" or cfg.app.environment == "test":
        return

    session_id = request.cookies.get(cfg.security.session_cookie_name)
    if not session_id:
        # Guests have no session to forge requests with
        return

    token = request.headers.get(cfg.security.csrf_header_name)
    if not token:
        form = await request.form()
        field_value = form.get(cfg.security.csrf_form_field)
        token = field_value if isinstance(field_value, str) else None

    if not validate_csrf_token(
        session_id, token, max_age_hours=cfg.security.csrf_token_max_age_hours
    ):
        logger.warning("Rejected request with missing or invalid CSRF token")
        raise HTTPException(status_code=403, detail="Invalid CSRF token")
