"""Authorization guard for contact directory actions.

The policy has two tiers. Listing and showing contacts are public; every
action that renders a form or writes to the store needs a signed-in user.
Administrators and users are not distinguished here.
"""

from enum import StrEnum

from loguru import logger

from src.contacts.core.errors import Unauthorized
from src.contacts.entities.user import User


class Action(StrEnum):
    LIST = "list"
    SHOW = "show"
    NEW_FORM = "new_form"
    EDIT_FORM = "edit_form"
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"


PUBLIC_ACTIONS = frozenset({Action.LIST, Action.SHOW})
FULL_ACCESS_ACTIONS = frozenset(set(Action) - PUBLIC_ACTIONS)


def is_allowed(action: Action, identity: User | None) -> bool:
    """Whether ``identity`` (None for a guest) may perform ``action``."""
    if action in PUBLIC_ACTIONS:
        return True
    return identity is not None


def authorize(action: Action, identity: User | None) -> None:
    """Raise Unauthorized unless ``identity`` may perform ``action``."""
    if not is_allowed(action, identity):
        logger.bind(action=action.value).warning("Guest denied {}", action.value)
        raise Unauthorized(action.value)
