"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime

from tenx_cards.domain.common.entity import Entity
from tenx_cards.domain.common.exceptions import ValidationError
from tenx_cards.domain.common.value_objects import UserId

MAX_EMAIL_LENGTH = 100


def _validate_email(email: str) -> None:
    if not email or "@" not in email:
        raise ValidationError("Nieprawidłowy adres email", field="email", value=email)
    if len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(
            f"Email nie może przekraczać {MAX_EMAIL_LENGTH} znaków", field="email", value=email
        )


@dataclass
class User(Entity[UserId]):
    """
    An account that owns flashcards and generation records.

    Business Rules:
    - Email is required, unique (enforced by the repository) and at most MAX_EMAIL_LENGTH chars
    - Passwords are stored hashed; hashing is an infrastructure concern
    """

    id: UserId
    email: str
    hashed_password: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        _validate_email(self.email)

    def has_password(self) -> bool:
        return self.hashed_password is not None

    def update_password(self, new_hashed_password: str) -> None:
        """
        Replace the stored password hash.

        Args:
            new_hashed_password: Already hashed password
        """
        self.hashed_password = new_hashed_password

    @classmethod
    def create(cls, email: str, hashed_password: str | None = None) -> "User":
        """Create a new user (ID will be 0 until persisted)."""
        return cls(
            id=UserId.generate(),
            email=email.strip().lower(),
            hashed_password=hashed_password,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        email: str,
        hashed_password: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            email=email,
            hashed_password=hashed_password,
            created_at=created_at,
            updated_at=updated_at,
        )
