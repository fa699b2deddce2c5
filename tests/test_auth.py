"""Tests for authentication endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tenx_cards import models
from tenx_cards.config import get_settings
from tenx_cards.core import container
from tenx_cards.infrastructure.identity.auth import token_service
from tenx_cards.infrastructure.identity.services.reset_notifier import (
    LoggingPasswordResetNotifier,
)

from conftest import TEST_PASSWORD


def _login(client: TestClient, email: str, password: str) -> str:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == status.HTTP_200_OK
    return response.json()["access_token"]


class TestRegister:
    """Test suite for POST /api/auth/register."""

    def test_register_returns_token(self, anon_client: TestClient, db_session: Session) -> None:
        response = anon_client.post(
            "/api/auth/register",
            json={"email": "New@Example.com", "password": "long-enough-password"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60

        user = db_session.query(models.User).filter_by(email="new@example.com").one()
        assert user.hashed_password != "long-enough-password"
        assert token_service.verify_access_token(body["access_token"]) == user.id

    def test_duplicate_email(self, anon_client: TestClient, test_user: models.User) -> None:
        response = anon_client.post(
            "/api/auth/register",
            json={"email": test_user.email, "password": "long-enough-password"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == "Ten adres email jest już zarejestrowany"

    def test_short_password(self, anon_client: TestClient) -> None:
        response = anon_client.post(
            "/api/auth/register", json={"email": "a@example.com", "password": "short"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_email(self, anon_client: TestClient) -> None:
        response = anon_client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "long-enough-password"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == "Nieprawidłowy adres email"

    def test_registration_disabled(
        self, anon_client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(get_settings(), "ALLOW_USER_REGISTRATIONS", False)

        response = anon_client.post(
            "/api/auth/register",
            json={"email": "a@example.com", "password": "long-enough-password"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestLogin:
    """Test suite for POST /api/auth/login."""

    def test_login_success(self, anon_client: TestClient, test_user: models.User) -> None:
        token = _login(anon_client, test_user.email, TEST_PASSWORD)

        assert token_service.verify_access_token(token) == test_user.id

    def test_login_is_case_insensitive_on_email(
        self, anon_client: TestClient, test_user: models.User
    ) -> None:
        token = _login(anon_client, test_user.email.upper(), TEST_PASSWORD)

        assert token_service.verify_access_token(token) == test_user.id

    @pytest.mark.parametrize(
        ("email", "password"),
        [("test@example.com", "wrong-password"), ("nobody@example.com", TEST_PASSWORD)],
    )
    def test_login_failure(
        self, anon_client: TestClient, test_user: models.User, email: str, password: str
    ) -> None:
        response = anon_client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["details"] == "Nieprawidłowy email lub hasło"

    def test_token_grants_access(self, anon_client: TestClient, test_user: models.User) -> None:
        token = _login(anon_client, test_user.email, TEST_PASSWORD)

        response = anon_client.get(
            "/api/flashcards", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_200_OK

    def test_garbage_token_rejected(self, anon_client: TestClient) -> None:
        response = anon_client.get(
            "/api/flashcards", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_reset_token_is_not_an_access_token(
        self, anon_client: TestClient, test_user: models.User
    ) -> None:
        reset_token = token_service.create_reset_token(test_user.id, test_user.hashed_password)

        response = anon_client.get(
            "/api/flashcards", headers={"Authorization": f"Bearer {reset_token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestLogout:
    def test_logout(self, anon_client: TestClient) -> None:
        response = anon_client.post("/api/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert "message" in response.json()


class TestPasswordReset:
    """Test suite for the reset-password and update-password flow."""

    def test_reset_request_is_neutral(
        self,
        anon_client: TestClient,
        test_user: models.User,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        sent: list[str] = []
        monkeypatch.setattr(
            LoggingPasswordResetNotifier,
            "send_reset_link",
            lambda self, user, token: sent.append(user.email),
        )

        known = anon_client.post("/api/auth/reset-password", json={"email": test_user.email})
        unknown = anon_client.post(
            "/api/auth/reset-password", json={"email": "nobody@example.com"}
        )

        assert known.status_code == status.HTTP_200_OK
        assert unknown.status_code == status.HTTP_200_OK
        assert known.json() == unknown.json()
        assert sent == [test_user.email]

    def test_update_with_reset_token(
        self, anon_client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        reset_token = token_service.create_reset_token(test_user.id, test_user.hashed_password)

        response = anon_client.post(
            "/api/auth/update-password",
            json={"new_password": "brand-new-password", "reset_token": reset_token},
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(test_user)
        assert test_user.hashed_password is not None
        assert container.password_service().verify_password(
            "brand-new-password", test_user.hashed_password
        )

    def test_reset_token_is_single_use(
        self, anon_client: TestClient, test_user: models.User
    ) -> None:
        reset_token = token_service.create_reset_token(test_user.id, test_user.hashed_password)
        payload = {"new_password": "brand-new-password", "reset_token": reset_token}

        first = anon_client.post("/api/auth/update-password", json=payload)
        second = anon_client.post("/api/auth/update-password", json=payload)

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_with_invalid_reset_token(self, anon_client: TestClient) -> None:
        response = anon_client.post(
            "/api/auth/update-password",
            json={"new_password": "brand-new-password", "reset_token": "garbage"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_signed_in_with_current_password(
        self, anon_client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        token = _login(anon_client, test_user.email, TEST_PASSWORD)

        response = anon_client.post(
            "/api/auth/update-password",
            json={"new_password": "brand-new-password", "current_password": TEST_PASSWORD},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        _login(anon_client, test_user.email, "brand-new-password")

    def test_update_signed_in_with_wrong_current_password(
        self, anon_client: TestClient, test_user: models.User
    ) -> None:
        token = _login(anon_client, test_user.email, TEST_PASSWORD)

        response = anon_client.post(
            "/api/auth/update-password",
            json={"new_password": "brand-new-password", "current_password": "nope-nope"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == "Obecne hasło jest nieprawidłowe"

    def test_update_without_proof(self, anon_client: TestClient) -> None:
        response = anon_client.post(
            "/api/auth/update-password", json={"new_password": "brand-new-password"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_current_password_without_session(self, anon_client: TestClient) -> None:
        response = anon_client.post(
            "/api/auth/update-password",
            json={"new_password": "brand-new-password", "current_password": "whatever-pass"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
