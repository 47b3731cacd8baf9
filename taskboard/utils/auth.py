"""
Authentication utilities: bcrypt password hashing and JWT-signed tokens.

Three kinds of signed tokens share the application secret and HS256:
- session access tokens (subject = user id)
- CSRF tokens, bound to a per-browser nonce and a token id
- flash payloads carried across a redirect
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from taskboard.config import settings

ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher:
    """Password hashing backed by bcrypt with a configurable cost factor."""

    # One throwaway hash per cost factor, shared by all instances
    _dummy_hashes: dict[int, str] = {}

    def __init__(self, rounds: int | None = None):
        self.rounds = rounds if rounds is not None else settings.bcrypt_rounds

    @property
    def dummy_hash(self) -> str:
        """A random-password hash with this cost, verified for unknown emails."""
        dummy = self._dummy_hashes.get(self.rounds)
        if dummy is None:
            dummy = self.hash(secrets.token_urlsafe(32))
            self._dummy_hashes[self.rounds] = dummy
        return dummy

    def hash(self, password: str) -> str:
        """Hash a plain text password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a plain text password against a hashed password."""
        pwd_bytes = password.encode("utf-8")
        if len(pwd_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(pwd_bytes, hashed_password.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def needs_rehash(self, hashed_password: str) -> bool:
        """True when the hash was produced with a different cost factor."""
        # Layout: $2b$<cost>$<salt+digest>
        parts = hashed_password.split("$")
        if len(parts) != 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self.rounds


def _encode(claims: dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str | None) -> dict | None:
    """Decode and verify a signed token; None when missing, expired or forged."""
    if not token:
        return None
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create a session access token for ``user_id``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return _encode({"sub": str(user_id), "typ": "access"}, expires_delta)


def extract_user_id_from_token(token: str | None) -> int | None:
    payload = decode_token(token)
    if payload is None or payload.get("typ") != "access":
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def create_flash_token(payload: dict[str, Any]) -> str:
    """Sign flash data so it survives one redirect without server-side storage."""
    return _encode({"typ": "flash", "data": payload}, timedelta(minutes=5))


def read_flash_token(token: str | None) -> dict[str, Any]:
    payload = decode_token(token)
    if payload is None or payload.get("typ") != "flash":
        return {}
    data = payload.get("data")
    return data if isinstance(data, dict) else {}


def generate_csrf_nonce() -> str:
    return secrets.token_urlsafe(16)


class CsrfTokenManager:
    """
    Issues and validates CSRF tokens for one browser.

    A token is only valid for the token id it was issued for and for the
    nonce stored in that browser's CSRF cookie, so a token lifted from one
    browser is useless in another.
    """

    def __init__(self, nonce: str | None = None, ttl_minutes: int | None = None):
        self.is_new = not nonce
        self.nonce = nonce or generate_csrf_nonce()
        self.ttl = timedelta(
            minutes=ttl_minutes
            if ttl_minutes is not None
            else settings.csrf_token_expire_minutes
        )

    def issue(self, token_id: str) -> str:
        return _encode({"typ": "csrf", "tid": token_id, "nonce": self.nonce}, self.ttl)

    def validate(self, token_id: str, token: str | None) -> bool:
        # A nonce minted for this request cannot match any submitted token
        if self.is_new:
            return False
        payload = decode_token(token)
        if payload is None or payload.get("typ") != "csrf":
            return False
        return payload.get("tid") == token_id and secrets.compare_digest(
            str(payload.get("nonce", "")), self.nonce
        )
