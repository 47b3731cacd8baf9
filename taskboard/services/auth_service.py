"""
Registration and login.

Both operations answer with an ``AuthOutcome`` describing where the browser
goes next and which flash messages it should see there. Turning that into
cookies and a redirect is the HTTP layer's job.
"""

from dataclasses import dataclass, field

from taskboard.models.user import User
from taskboard.schemas import FlashMessage, RegistrationForm
from taskboard.services.stores import CsrfValidator, PasswordHasher, UserStore
from taskboard.utils.auth import BCRYPT_MAX_PASSWORD_BYTES
from taskboard.utils.logger import setup_logger

logger = setup_logger("auth_service")

# Token id shared by the registration and login forms
CSRF_TOKEN_ID = "authenticate"

REGISTER_ROUTE = "/register"
LOGIN_ROUTE = "/login"
HOME_ROUTE = "/"

INVALID_CSRF_MESSAGE = "Invalid CSRF token."
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
PASSWORD_TOO_LONG_MESSAGE = "Password is too long."
REGISTERED_MESSAGE = "Registration successful! You can now log in."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


@dataclass
class AuthOutcome:
    redirect_to: str
    flashes: list[FlashMessage] = field(default_factory=list)
    user: User | None = None
    # Login only: shown on the login page together with last_username
    auth_error: str | None = None
    last_username: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.user is not None


def _error(redirect_to: str, message: str) -> AuthOutcome:
    return AuthOutcome(
        redirect_to=redirect_to,
        flashes=[FlashMessage(level="error", message=message)],
    )


class AuthService:
    def __init__(
        self, users: UserStore, hasher: PasswordHasher, csrf: CsrfValidator
    ):
        self.users = users
        self.hasher = hasher
        self.csrf = csrf

    async def register(self, form: RegistrationForm) -> AuthOutcome:
        if not self.csrf.validate(CSRF_TOKEN_ID, form.csrf_token):
            logger.warning("Registration rejected: invalid CSRF token")
            return _error(REGISTER_ROUTE, INVALID_CSRF_MESSAGE)

        if form.password != form.password_confirmation:
            logger.info("Registration rejected: password confirmation mismatch")
            return _error(REGISTER_ROUTE, PASSWORD_MISMATCH_MESSAGE)

        if len(form.password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            return _error(REGISTER_ROUTE, PASSWORD_TOO_LONG_MESSAGE)

        user = await self.users.create_user(
            {
                "first_name": form.first_name,
                "last_name": form.last_name,
                "email": form.email,
                "password": self.hasher.hash(form.password),
            }
        )
        logger.info(f"Registered user {user.id}")

        return AuthOutcome(
            redirect_to=LOGIN_ROUTE,
            flashes=[FlashMessage(level="success", message=REGISTERED_MESSAGE)],
            user=user,
        )

    async def login(self, email: str, password: str, csrf_token: str) -> AuthOutcome:
        if not self.csrf.validate(CSRF_TOKEN_ID, csrf_token):
            logger.warning("Login rejected: invalid CSRF token")
            return AuthOutcome(
                redirect_to=LOGIN_ROUTE,
                auth_error=INVALID_CSRF_MESSAGE,
                last_username=email,
            )

        user = await self.users.get_user_by_email(email)
        hashed = user.password if user is not None else self.hasher.dummy_hash
        if not self.hasher.verify(password, hashed) or user is None:
            logger.info("Login failed: invalid credentials")
            return AuthOutcome(
                redirect_to=LOGIN_ROUTE,
                auth_error=INVALID_CREDENTIALS_MESSAGE,
                last_username=email,
            )

        if self.hasher.needs_rehash(user.password):
            new_hash = self.hasher.hash(password)
            await self.users.upgrade_password(user.id, new_hash)
            user.password = new_hash
            logger.info(f"Upgraded password hash for user {user.id}")

        logger.info(f"User {user.id} logged in")
        return AuthOutcome(redirect_to=HOME_ROUTE, user=user)
