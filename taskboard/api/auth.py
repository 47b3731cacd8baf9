# Authentication routes: registration form, login form and logout

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import RedirectResponse

from taskboard.api.session import (
    consume_flash,
    end_session,
    remember_csrf_nonce,
    start_session,
    store_flash,
)
from taskboard.dependencies import (
    get_auth_service,
    get_csrf_manager,
    get_current_user_optional,
)
from taskboard.models import User
from taskboard.schemas import LoginPage, RegisterPage, RegistrationForm
from taskboard.services import AuthOutcome, AuthService
from taskboard.services.auth_service import CSRF_TOKEN_ID, LOGIN_ROUTE
from taskboard.utils.auth import CsrfTokenManager

router = APIRouter(tags=["Authentication"])


def _redirect(outcome: AuthOutcome) -> RedirectResponse:
    response = RedirectResponse(outcome.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    if outcome.flashes or outcome.auth_error is not None:
        store_flash(
            response,
            outcome.flashes,
            auth_error=outcome.auth_error,
            last_username=outcome.last_username,
        )
    return response


@router.get("/register", response_model=RegisterPage)
async def register_form(
    request: Request,
    response: Response,
    csrf: CsrfTokenManager = Depends(get_csrf_manager),
):
    """Context for the registration form."""
    remember_csrf_nonce(response, csrf)
    flash = consume_flash(request, response)
    return RegisterPage(csrf_token=csrf.issue(CSRF_TOKEN_ID), flashes=flash["flashes"])


@router.post("/register", status_code=status.HTTP_303_SEE_OTHER)
async def register_user(
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    password_confirmation: str = Form(""),
    csrf_token: str = Form("", alias="_csrf_token"),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user, then redirect to the login form (or back on error)."""
    form = RegistrationForm(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        password_confirmation=password_confirmation,
        csrf_token=csrf_token,
    )
    outcome = await auth_service.register(form)
    return _redirect(outcome)


@router.get("/login", response_model=LoginPage)
async def login_form(
    request: Request,
    response: Response,
    csrf: CsrfTokenManager = Depends(get_csrf_manager),
    current_user: User | None = Depends(get_current_user_optional),
):
    """Context for the login form, with the last authentication error if any."""
    remember_csrf_nonce(response, csrf)
    flash = consume_flash(request, response)
    return LoginPage(
        csrf_token=csrf.issue(CSRF_TOKEN_ID),
        last_username=flash.get("last_username") or "",
        error=flash.get("auth_error"),
        flashes=flash["flashes"],
        current_user=current_user.email if current_user else None,
    )


@router.post("/login", status_code=status.HTTP_303_SEE_OTHER)
async def login_user(
    email: str = Form(""),
    password: str = Form(""),
    csrf_token: str = Form("", alias="_csrf_token"),
    auth_service: AuthService = Depends(get_auth_service),
):
    outcome = await auth_service.login(email, password, csrf_token)
    response = _redirect(outcome)
    if outcome.succeeded:
        start_session(response, outcome.user.id)
    return response


@router.api_route("/logout", methods=["GET", "POST"])
async def logout():
    response = RedirectResponse(LOGIN_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
    end_session(response)
    return response
