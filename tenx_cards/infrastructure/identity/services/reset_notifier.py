import structlog

from tenx_cards.domain.identity.entities.user import User

logger = structlog.get_logger(__name__)


class LoggingPasswordResetNotifier:
    """
    Records that a reset link should be sent.

    The token itself is never written to the log. Deployments that deliver
    e-mail register their own notifier in the container.
    """

    def send_reset_link(self, user: User, reset_token: str) -> None:
        logger.info(
            "password_reset_link_issued",
            user_id=user.id.value,
            token_length=len(reset_token),
        )
