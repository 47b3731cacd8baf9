"""
Session dependencies for the form pages.
"""

from fastapi import Depends, Request

from taskboard.dependencies.services import get_user_store
from taskboard.models import User
from taskboard.services.stores import UserStore
from taskboard.utils.auth import extract_user_id_from_token

SESSION_COOKIE = "taskboard_session"


async def get_current_user_optional(
    request: Request,
    users: UserStore = Depends(get_user_store),
) -> User | None:
    """
    The user behind the session cookie, or None when the cookie is absent,
    expired, forged or points at a user that no longer exists.
    """
    user_id = extract_user_id_from_token(request.cookies.get(SESSION_COOKIE))
    if user_id is None:
        return None
    return await users.get_user(user_id)
