"""Shared pytest fixtures and helpers."""

from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .factories import *  # noqa: F401,F403
