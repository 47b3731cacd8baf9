from taskboard.dependencies.auth import SESSION_COOKIE, get_current_user_optional
from taskboard.dependencies.services import (
    CSRF_COOKIE,
    get_auth_service,
    get_csrf_manager,
    get_password_hasher,
    get_task_service,
    get_task_store,
    get_user_store,
)

__all__ = [
    "CSRF_COOKIE",
    "SESSION_COOKIE",
    "get_auth_service",
    "get_csrf_manager",
    "get_current_user_optional",
    "get_password_hasher",
    "get_task_service",
    "get_task_store",
    "get_user_store",
]
