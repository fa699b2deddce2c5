"""Use case for password reset and password change."""

import hmac

import structlog

from tenx_cards.application.identity.protocols import (
    PasswordResetNotifierProtocol,
    PasswordServiceProtocol,
    TokenServiceProtocol,
    UserRepositoryProtocol,
)
from tenx_cards.domain.common.value_objects import UserId
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.domain.identity.exceptions import (
    InvalidResetTokenError,
    PasswordVerificationError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


class PasswordManagementUseCase:
    """Issues reset tokens and replaces passwords."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
        reset_notifier: PasswordResetNotifierProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service
        self.reset_notifier = reset_notifier

    def request_password_reset(self, email: str) -> None:
        """
        Send a reset link if the account exists.

        Unknown addresses are accepted silently so the endpoint does not
        reveal which emails are registered.
        """
        user = self.user_repository.find_by_email(email)
        if user is None:
            logger.info("password_reset_requested_for_unknown_email")
            return

        token = self.token_service.create_reset_token(user.id.value, user.hashed_password)
        self.reset_notifier.send_reset_link(user, token)
        logger.info("password_reset_requested", user_id=user.id.value)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> User:
        """
        Change the password of a signed-in user.

        Raises:
            UserNotFoundError: If user is not found
            PasswordVerificationError: If current_password is incorrect
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)

        if not user.hashed_password or not self.password_service.verify_password(
            current_password, user.hashed_password
        ):
            raise PasswordVerificationError

        user.update_password(self.password_service.hash_password(new_password))
        user = self.user_repository.save(user)

        logger.info("user_password_changed", user_id=user_id)
        return user

    def reset_password(self, reset_token: str, new_password: str) -> User:
        """
        Set a new password using a token from a reset link.

        Raises:
            InvalidResetTokenError: If the token is invalid, expired or already used
        """
        verified = self.token_service.verify_reset_token(reset_token)
        if verified is None:
            raise InvalidResetTokenError
        user_id, fingerprint = verified

        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            raise InvalidResetTokenError

        expected = self.token_service.password_fingerprint(user.hashed_password)
        if not hmac.compare_digest(expected, fingerprint):
            raise InvalidResetTokenError

        user.update_password(self.password_service.hash_password(new_password))
        user = self.user_repository.save(user)

        logger.info("user_password_reset", user_id=user_id)
        return user
