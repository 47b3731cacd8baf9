"""
Cookie helpers for the browser session: login session, flash bag and CSRF nonce.
"""

from fastapi import Request, Response

from taskboard.config import settings
from taskboard.dependencies import CSRF_COOKIE, SESSION_COOKIE
from taskboard.schemas import FlashMessage
from taskboard.utils.auth import (
    CsrfTokenManager,
    create_access_token,
    create_flash_token,
    read_flash_token,
)

FLASH_COOKIE = "taskboard_flash"


def _set_cookie(response: Response, key: str, value: str, max_age: int | None = None):
    response.set_cookie(
        key,
        value,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def start_session(response: Response, user_id: int) -> None:
    _set_cookie(
        response,
        SESSION_COOKIE,
        create_access_token(user_id),
        max_age=settings.access_token_expire_minutes * 60,
    )


def end_session(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE)


def remember_csrf_nonce(response: Response, csrf: CsrfTokenManager) -> None:
    if csrf.is_new:
        _set_cookie(response, CSRF_COOKIE, csrf.nonce)


def store_flash(
    response: Response,
    flashes: list[FlashMessage],
    auth_error: str | None = None,
    last_username: str | None = None,
) -> None:
    """Carry flash messages and the last login attempt across the redirect."""
    payload = {"flashes": [flash.model_dump() for flash in flashes]}
    if auth_error is not None:
        payload["auth_error"] = auth_error
    if last_username is not None:
        payload["last_username"] = last_username
    _set_cookie(response, FLASH_COOKIE, create_flash_token(payload))


def consume_flash(request: Request, response: Response) -> dict:
    """Read the flash bag once; the cookie is cleared on the same response."""
    token = request.cookies.get(FLASH_COOKIE)
    if token is None:
        return {"flashes": []}
    response.delete_cookie(FLASH_COOKIE)
    data = read_flash_token(token)
    flashes = []
    for item in data.get("flashes", []):
        if isinstance(item, dict):
            flashes.append(FlashMessage.model_validate(item))
    return {
        "flashes": flashes,
        "auth_error": data.get("auth_error"),
        "last_username": data.get("last_username"),
    }
