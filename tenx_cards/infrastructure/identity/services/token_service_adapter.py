from tenx_cards.infrastructure.identity.auth import token_service
from tenx_cards.infrastructure.identity.auth.token_service import TokenPair


class TokenServiceAdapter:
    """Adapter wrapping token service functions for DI."""

    def create_token_pair(self, user_id: int) -> TokenPair:
        return token_service.create_token_pair(user_id)

    def create_reset_token(self, user_id: int, hashed_password: str | None) -> str:
        return token_service.create_reset_token(user_id, hashed_password)

    def verify_reset_token(self, token: str) -> tuple[int, str] | None:
        return token_service.verify_reset_token(token)

    def password_fingerprint(self, hashed_password: str | None) -> str:
        return token_service.password_fingerprint(hashed_password)
