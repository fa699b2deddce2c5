from typing import Protocol

from tenx_cards.infrastructure.identity.auth.token_service import TokenPair


class TokenServiceProtocol(Protocol):
    def create_token_pair(self, user_id: int) -> TokenPair: ...

    def create_reset_token(self, user_id: int, hashed_password: str | None) -> str: ...

    def verify_reset_token(self, token: str) -> tuple[int, str] | None: ...

    def password_fingerprint(self, hashed_password: str | None) -> str: ...
