"""
Registration and login outcomes with in-memory users and real bcrypt/CSRF helpers.
"""

import pytest

from taskboard.schemas import RegistrationForm
from taskboard.services import AuthService
from taskboard.services.auth_service import (
    CSRF_TOKEN_ID,
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_CSRF_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    PASSWORD_TOO_LONG_MESSAGE,
    REGISTERED_MESSAGE,
)
from taskboard.utils.auth import BcryptPasswordHasher, CsrfTokenManager


@pytest.fixture
def service(user_store, hasher, csrf) -> AuthService:
    return AuthService(user_store, hasher, csrf)


def make_form(csrf: CsrfTokenManager, **overrides) -> RegistrationForm:
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": "s3cret-pass",
        "password_confirmation": "s3cret-pass",
        "csrf_token": csrf.issue(CSRF_TOKEN_ID),
    }
    data.update(overrides)
    return RegistrationForm(**data)


@pytest.mark.asyncio
async def test_register_persists_one_user_with_hashed_password(
    service, user_store, hasher, csrf
):
    outcome = await service.register(make_form(csrf))

    assert outcome.redirect_to == "/login"
    assert [f.message for f in outcome.flashes] == [REGISTERED_MESSAGE]
    assert outcome.flashes[0].level == "success"
    assert len(user_store.users) == 1

    user = user_store.users[0]
    assert (user.first_name, user.last_name, user.email) == (
        "Ada",
        "Lovelace",
        "ada@example.com",
    )
    assert user.password != "s3cret-pass"
    assert hasher.verify("s3cret-pass", user.password)


@pytest.mark.asyncio
async def test_register_with_mismatched_confirmation_persists_nothing(
    service, user_store, csrf
):
    outcome = await service.register(
        make_form(csrf, password_confirmation="something-else")
    )

    assert outcome.redirect_to == "/register"
    assert outcome.flashes[0].level == "error"
    assert outcome.flashes[0].message == PASSWORD_MISMATCH_MESSAGE
    assert user_store.users == []


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", "not-a-token"])
async def test_register_with_invalid_csrf_persists_nothing(
    service, user_store, csrf, token
):
    outcome = await service.register(make_form(csrf, csrf_token=token))

    assert outcome.redirect_to == "/register"
    assert outcome.flashes[0].message == INVALID_CSRF_MESSAGE
    assert user_store.users == []


@pytest.mark.asyncio
async def test_register_with_token_from_another_browser_is_rejected(
    service, user_store
):
    other_browser = CsrfTokenManager(nonce="someone-else")

    outcome = await service.register(make_form(other_browser))

    assert outcome.flashes[0].message == INVALID_CSRF_MESSAGE
    assert user_store.users == []


@pytest.mark.asyncio
async def test_register_rejects_password_longer_than_bcrypt_limit(
    service, user_store, csrf
):
    long_password = "p" * 73

    outcome = await service.register(
        make_form(csrf, password=long_password, password_confirmation=long_password)
    )

    assert outcome.flashes[0].message == PASSWORD_TOO_LONG_MESSAGE
    assert user_store.users == []


@pytest.mark.asyncio
async def test_register_does_not_check_email_uniqueness(service, user_store, csrf):
    await service.register(make_form(csrf))
    await service.register(make_form(csrf))

    assert len(user_store.users) == 2


@pytest.mark.asyncio
async def test_login_with_valid_credentials(service, user_store, csrf):
    await service.register(make_form(csrf))

    outcome = await service.login(
        "ada@example.com", "s3cret-pass", csrf.issue(CSRF_TOKEN_ID)
    )

    assert outcome.succeeded
    assert outcome.redirect_to == "/"
    assert outcome.user.email == "ada@example.com"
    assert outcome.auth_error is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password",
    [("ada@example.com", "wrong-pass"), ("nobody@example.com", "s3cret-pass")],
)
async def test_login_failure_reports_error_and_last_username(
    service, csrf, email, password
):
    await service.register(make_form(csrf))

    outcome = await service.login(email, password, csrf.issue(CSRF_TOKEN_ID))

    assert not outcome.succeeded
    assert outcome.redirect_to == "/login"
    assert outcome.auth_error == INVALID_CREDENTIALS_MESSAGE
    assert outcome.last_username == email


@pytest.mark.asyncio
async def test_login_with_invalid_csrf_is_rejected(service, csrf):
    await service.register(make_form(csrf))

    outcome = await service.login("ada@example.com", "s3cret-pass", "forged")

    assert not outcome.succeeded
    assert outcome.auth_error == INVALID_CSRF_MESSAGE


@pytest.mark.asyncio
async def test_login_upgrades_hash_made_with_another_cost(user_store, hasher, csrf):
    old_hasher = BcryptPasswordHasher(rounds=5)
    user = await user_store.create_user(
        {
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@example.com",
            "password": old_hasher.hash("cobol"),
        }
    )
    service = AuthService(user_store, hasher, csrf)

    outcome = await service.login("grace@example.com", "cobol", csrf.issue(CSRF_TOKEN_ID))

    assert outcome.succeeded
    assert user_store.upgrades == [user.id]
    assert not hasher.needs_rehash(user.password)
    assert hasher.verify("cobol", user.password)


@pytest.mark.asyncio
async def test_login_keeps_current_hash(service, user_store, csrf):
    await service.register(make_form(csrf))
    stored = user_store.users[0].password

    await service.login("ada@example.com", "s3cret-pass", csrf.issue(CSRF_TOKEN_ID))

    assert user_store.upgrades == []
    assert user_store.users[0].password == stored


class RecordingHasher(BcryptPasswordHasher):
    def __init__(self, rounds: int):
        super().__init__(rounds=rounds)
        self.verified: list[str] = []

    def verify(self, password: str, hashed_password: str) -> bool:
        self.verified.append(hashed_password)
        return super().verify(password, hashed_password)


@pytest.mark.asyncio
async def test_unknown_email_is_checked_against_a_dummy_hash(user_store, csrf):
    hasher = RecordingHasher(rounds=4)
    service = AuthService(user_store, hasher, csrf)

    outcome = await service.login(
        "nobody@example.com", "s3cret-pass", csrf.issue(CSRF_TOKEN_ID)
    )

    assert outcome.auth_error == INVALID_CREDENTIALS_MESSAGE
    assert hasher.verified == [hasher.dummy_hash]
    assert not hasher.needs_rehash(hasher.dummy_hash)


def test_dummy_hash_is_reused_per_cost(hasher):
    assert hasher.dummy_hash == BcryptPasswordHasher(rounds=4).dummy_hash
    assert hasher.dummy_hash != BcryptPasswordHasher(rounds=5).dummy_hash
