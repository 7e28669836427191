"""Role-based authorization for product actions."""

from enum import StrEnum

from loguru import logger

from src.catalog.core.errors import AuthorizationError
from src.catalog.entities.core.user import User


class Action(StrEnum):
    VIEW_LIST = "view_list"
    VIEW_PRODUCT = "view_product"
    VIEW_CREATE_FORM = "view_create_form"
    CREATE = "create"
    VIEW_EDIT_FORM = "view_edit_form"
    UPDATE = "update"
    DELETE = "delete"


# (allowed for regular users, allowed for admins)
_DECISIONS: dict[Action, tuple[bool, bool]] = {
    Action.VIEW_LIST: (True, True),
    Action.VIEW_PRODUCT: (True, True),
    Action.VIEW_CREATE_FORM: (False, True),
    Action.CREATE: (False, True),
    Action.VIEW_EDIT_FORM: (False, True),
    Action.UPDATE: (False, True),
    Action.DELETE: (False, True),
}


def is_allowed(is_admin: bool, action: Action) -> bool:
    """Return whether a user with the given role may perform ``action``.

    Unknown actions are denied.
    """
    user_allowed, admin_allowed = _DECISIONS.get(action, (False, False))
    return admin_allowed if is_admin else user_allowed


def authorize(user: User, action: Action) -> None:
    """Raise ``AuthorizationError`` unless ``user`` may perform ``action``."""
    if not is_allowed(user.is_admin, action):
        logger.info("Denied {} to user {}", action, user.id)
        raise AuthorizationError()
