"""Tests for the User entity."""

import pytest

from tenx_cards.domain.common.exceptions import ValidationError
from tenx_cards.domain.identity.entities.user import User


class TestUser:
    """Test suite for User."""

    def test_create_normalizes_email(self) -> None:
        user = User.create(email="  Someone@Example.COM ", hashed_password="hash")

        assert user.email == "someone@example.com"
        assert user.has_password()

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@" + "b" * 100])
    def test_invalid_email_rejected(self, email: str) -> None:
        with pytest.raises(ValidationError):
            User.create(email=email)

    def test_update_password(self) -> None:
        user = User.create(email="a@example.com")
        assert not user.has_password()

        user.update_password("new-hash")

        assert user.hashed_password == "new-hash"
