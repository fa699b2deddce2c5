"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from tenx_cards.core import container
from tenx_cards.database import DatabaseSession
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.domain.identity.exceptions import UserNotFoundError
from tenx_cards.exceptions import CredentialsException
from tenx_cards.infrastructure.identity.auth.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def _load_user(user_id: int, db: DatabaseSession) -> User:
    try:
        container.db.override(db)
        use_case = container.authentication_use_case()
    finally:
        container.db.reset_override()

    try:
        return use_case.get_user_by_id(user_id)
    except UserNotFoundError:
        raise CredentialsException from None


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Raises:
        CredentialsException: If token is invalid or user not found
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException
    return _load_user(user_id, db)


async def get_optional_user(
    token: Annotated[str | None, Depends(optional_oauth2_scheme)], db: DatabaseSession
) -> User | None:
    """Like ``get_current_user`` but anonymous requests yield None."""
    if token is None:
        return None
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException
    return _load_user(user_id, db)
