"""Identity context schemas."""

from tenx_cards.infrastructure.identity.schemas.user_schemas import (
    MessageResponse,
    PasswordResetRequest,
    PasswordUpdateRequest,
    UserLoginRequest,
    UserRegisterRequest,
)

__all__ = [
    "MessageResponse",
    "PasswordResetRequest",
    "PasswordUpdateRequest",
    "UserLoginRequest",
    "UserRegisterRequest",
]
