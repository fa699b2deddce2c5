"""Token creation and verification service."""

import hashlib
from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel

from tenx_cards.config import get_settings

ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
RESET_TOKEN_TYPE = "password_reset"


class TokenPair(BaseModel):
    """Bearer token handed out on sign-in and sign-up."""

    access_token: str
    token_type: str
    expires_in: int


def _password_fingerprint(hashed_password: str | None) -> str:
    # Binds a reset token to the password it was issued for, so it stops
    # working once the password has been changed.
    return hashlib.sha256((hashed_password or "").encode("utf-8")).hexdigest()[:16]


def _decode(token: str, expected_type: str) -> dict[str, object] | None:
    try:
        payload = jwt.decode(token, get_settings().SECRET_KEY, algorithms=[ALGORITHM])
    except InvalidTokenError:
        return None
    if payload.get("type") != expected_type:
        return None
    return payload


def create_access_token(user_id: int) -> str:
    """Create an access token for a user."""
    minutes = get_settings().ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(UTC) + timedelta(minutes=minutes)
    to_encode = {"sub": str(user_id), "exp": expire, "type": ACCESS_TOKEN_TYPE}
    return jwt.encode(to_encode, get_settings().SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> int | None:
    """Verify an access token and return the user_id if valid."""
    payload = _decode(token, ACCESS_TOKEN_TYPE)
    if payload is None:
        return None
    try:
        return int(str(payload["sub"]))
    except (KeyError, ValueError):
        return None


def create_token_pair(user_id: int) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id),
        token_type="bearer",  # noqa: S106
        expires_in=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def create_reset_token(user_id: int, hashed_password: str | None) -> str:
    """Create a short-lived password reset token."""
    minutes = get_settings().RESET_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(UTC) + timedelta(minutes=minutes)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
        "type": RESET_TOKEN_TYPE,
        "pwd": _password_fingerprint(hashed_password),
    }
    return jwt.encode(to_encode, get_settings().SECRET_KEY, algorithm=ALGORITHM)


def verify_reset_token(token: str) -> tuple[int, str] | None:
    """Return ``(user_id, password_fingerprint)`` for a valid reset token."""
    payload = _decode(token, RESET_TOKEN_TYPE)
    if payload is None:
        return None
    try:
        return int(str(payload["sub"])), str(payload["pwd"])
    except (KeyError, ValueError):
        return None


def password_fingerprint(hashed_password: str | None) -> str:
    return _password_fingerprint(hashed_password)
