"""Session storage abstractions."""

from .session_storage import SessionStorage, get_session_storage

__all__ = ["SessionStorage", "get_session_storage"]
