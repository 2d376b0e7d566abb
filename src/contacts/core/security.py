"""Security utilities: passwords, session tokens, CSRF and redirects."""

import base64
import hashlib
import hmac
import secrets
import time

import bcrypt

from src.contacts.runtime.context import get_config


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token.

    Args:
        length: Number of random bytes to generate (default 32)

    Returns:
        URL-safe base64 encoded token
    """
    return (
        base64.urlsafe_b64encode(secrets.token_bytes(length))
        .decode("utf-8")
        .rstrip("=")
    )


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


def _csrf_secret() -> bytes:
    config = get_config()
    secret = config.app.csrf_signing_secret
    return secret.encode() if secret else b"dev-secret"


def generate_csrf_token(session_id: str, timestamp: int | None = None) -> str:
    """Generate CSRF token bound to session and time.

    Args:
        session_id: Session identifier to bind token to
        timestamp: Optional timestamp (defaults to current hour)

    Returns:
        HMAC-based CSRF token prefixed with its hour timestamp
    """
    if timestamp is None:
        timestamp = int(time.time() // 3600)

    message = f"{session_id}:{timestamp}"
    csrf_token = hmac.new(_csrf_secret(), message.encode(), hashlib.sha256).hexdigest()

    return f"{timestamp}:{csrf_token}"


def validate_csrf_token(
    session_id: str, csrf_token: str | None, max_age_hours: int = 12
) -> bool:
    """Validate CSRF token for session.

    Args:
        session_id: Session identifier
        csrf_token: CSRF token to validate
        max_age_hours: Maximum age of token in hours

    Returns:
        True if valid, False otherwise
    """
    if not csrf_token:
        return False

    try:
        token_timestamp, token_value = csrf_token.split(":", 1)
        timestamp = int(token_timestamp)
    except ValueError:
        return False

    current_hour = int(time.time() // 3600)
    if current_hour - timestamp > max_age_hours:
        return False

    expected_value = generate_csrf_token(session_id, timestamp).split(":", 1)[1]
    return hmac.compare_digest(expected_value, token_value)


def sanitize_return_url(return_to: str | None, fallback: str = "/contacts") -> str:
    """Sanitize a post-login redirect target to prevent open redirects.

    Only relative paths are accepted; anything else becomes ``fallback``.
    """
    if not return_to:
        return fallback

    return_to = return_to.strip()

    if return_to.startswith("/") and not return_to.startswith("//"):
        # No control characters or backslash tricks
        if all(ord(c) >= 32 for c in return_to) and "\\" not in return_to:
            return return_to

    return fallback
