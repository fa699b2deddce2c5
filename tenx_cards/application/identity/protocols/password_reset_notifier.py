from typing import Protocol

from tenx_cards.domain.identity.entities.user import User


class PasswordResetNotifierProtocol(Protocol):
    """Delivers a password reset token to the account owner."""

    def send_reset_link(self, user: User, reset_token: str) -> None: ...
