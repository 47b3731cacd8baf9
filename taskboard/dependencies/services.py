"""
FastAPI dependencies wiring the services to their stores.

Tests replace ``get_task_store`` / ``get_user_store`` through
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from taskboard.db_handlers import TaskDBHandler, UserDBHandler
from taskboard.services import AuthService, TaskService
from taskboard.services.stores import TaskStore, UserStore
from taskboard.utils.auth import BcryptPasswordHasher, CsrfTokenManager

CSRF_COOKIE = "taskboard_csrf"


def get_task_store() -> TaskStore:
    return TaskDBHandler()


def get_user_store() -> UserStore:
    return UserDBHandler()


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher()


def get_csrf_manager(request: Request) -> CsrfTokenManager:
    """CSRF manager bound to the nonce stored in this browser's cookie."""
    return CsrfTokenManager(nonce=request.cookies.get(CSRF_COOKIE))


def get_task_service(store: TaskStore = Depends(get_task_store)) -> TaskService:
    return TaskService(store)


def get_auth_service(
    users: UserStore = Depends(get_user_store),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
    csrf: CsrfTokenManager = Depends(get_csrf_manager),
) -> AuthService:
    return AuthService(users, hasher, csrf)
