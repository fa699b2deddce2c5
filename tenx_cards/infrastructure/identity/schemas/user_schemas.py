"""Pydantic schemas for the auth endpoints."""

from pydantic import BaseModel, Field, model_validator

MIN_PASSWORD_LENGTH = 8
# bcrypt-era limit kept so passwords stay portable between hashers
MAX_PASSWORD_LENGTH = 72


class UserRegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)


class UserLoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=100)


class PasswordUpdateRequest(BaseModel):
    """New password plus either the current password or a reset token."""

    new_password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    current_password: str | None = None
    reset_token: str | None = None

    @model_validator(mode="after")
    def require_proof(self) -> "PasswordUpdateRequest":
        if not self.current_password and not self.reset_token:
            raise ValueError("Wymagane jest obecne hasło lub token resetujący")
        return self


class MessageResponse(BaseModel):
    message: str
