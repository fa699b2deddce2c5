"""Tests for the flashcard generation endpoint."""

from collections.abc import Generator

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tenx_cards import models
from tenx_cards.application.learning.use_cases.dtos import CostUsage, GeneratedFlashcard
from tenx_cards.core import container
from tenx_cards.infrastructure.ai.errors import (
    AIServiceError,
    CostLimitError,
    InvalidModelError,
    NetworkError,
    RateLimitError,
)

VALID_TEXT = "a" * 1500


def _pairs(body: dict) -> list[tuple[str, str]]:
    return [(card["front"], card["back"]) for card in body["flashcards"]]


class StubGenerator:
    """Flashcard generator returning fixed cards or raising a fixed error."""

    def __init__(
        self,
        flashcards: list[GeneratedFlashcard] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.flashcards = flashcards or []
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    @property
    def is_mock_mode(self) -> bool:
        return False

    @property
    def default_model(self) -> str:
        return "stub/model:free"

    async def generate_flashcards(
        self, source_text: str, model: str | None = None
    ) -> list[GeneratedFlashcard]:
        self.calls.append((source_text, model))
        if self.error is not None:
            raise self.error
        return self.flashcards

    def usage(self) -> CostUsage:
        return CostUsage()


@pytest.fixture
def stub_generator() -> Generator[StubGenerator, None, None]:
    stub = StubGenerator()
    container.flashcard_generator.override(providers.Object(stub))
    yield stub
    container.flashcard_generator.reset_override()


class TestCreateGeneration:
    """Test suite for POST /api/generations."""

    def test_mock_mode_returns_candidates(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        """A valid text in mock mode yields numbered ai-full candidates."""
        response = client.post("/api/generations", json={"source_text": VALID_TEXT})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert len(data["flashcards"]) >= 1
        assert data["stats"]["source_text_length"] == 1500
        assert data["stats"]["generated_count"] == len(data["flashcards"])
        assert [card["id"] for card in data["flashcards"]] == list(
            range(1, len(data["flashcards"]) + 1)
        )
        assert all(card["source"] == "ai-full" for card in data["flashcards"])

        generation = db_session.get(models.Generation, data["generation_id"])
        assert generation is not None
        assert generation.user_id == test_user.id
        assert generation.generated_count == len(data["flashcards"])
        assert generation.accepted_unedited_count == 0
        assert generation.accepted_edited_count == 0
        assert len(generation.source_text_hash) == 64

    def test_mock_mode_ignores_text_content(self, client: TestClient) -> None:
        """Mock output does not depend on the submitted text."""
        first = client.post("/api/generations", json={"source_text": "x" * 1000})
        second = client.post("/api/generations", json={"source_text": "y" * 2000})

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_201_CREATED
        assert _pairs(first.json()) == _pairs(second.json())
        assert first.json()["generation_id"] != second.json()["generation_id"]

    @pytest.mark.parametrize("length", [999, 10001])
    def test_length_out_of_bounds_rejected_before_generation(
        self, client: TestClient, db_session: Session, length: int
    ) -> None:
        """Texts outside 1000..10000 fail with 400 and leave no record behind."""
        response = client.post("/api/generations", json={"source_text": "a" * length})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "Nieprawidłowe dane wejściowe"
        assert body["details"][0]["field"] == "source_text"
        assert db_session.query(models.Generation).count() == 0

    def test_length_is_counted_in_utf16_units(self, client: TestClient) -> None:
        """Astral characters count twice, as they do in the browser."""
        response = client.post("/api/generations", json={"source_text": "😀" * 500})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["stats"]["source_text_length"] == 1000

    def test_overlong_model_rejected(self, client: TestClient, db_session: Session) -> None:
        response = client.post(
            "/api/generations", json={"source_text": VALID_TEXT, "model": "m" * 256}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"][0]["field"] == "model"
        assert db_session.query(models.Generation).count() == 0

    def test_missing_source_text(self, client: TestClient) -> None:
        response = client.post("/api/generations", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, anon_client: TestClient) -> None:
        response = anon_client.post("/api/generations", json={"source_text": VALID_TEXT})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_model_is_passed_to_generator(
        self, client: TestClient, stub_generator: StubGenerator, db_session: Session
    ) -> None:
        stub_generator.flashcards = [GeneratedFlashcard(front="Q", back="A")]

        response = client.post(
            "/api/generations",
            json={"source_text": VALID_TEXT, "model": "custom/model:free"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert stub_generator.calls == [(VALID_TEXT, "custom/model:free")]
        generation = db_session.get(models.Generation, response.json()["generation_id"])
        assert generation is not None
        assert generation.model == "custom/model:free"


class TestGenerationFailures:
    """Provider failures are mapped to status codes and logged."""

    @pytest.mark.parametrize(
        ("error", "expected_status", "expected_code"),
        [
            (RateLimitError("slow down"), 429, "RATE_LIMIT_ERROR"),
            (CostLimitError(limit=10.0, usage=10.5), 403, "COST_LIMIT_ERROR"),
            (NetworkError("connection refused"), 503, "NETWORK_ERROR"),
            (InvalidModelError("No endpoints found for x", 404), 400, "INVALID_MODEL"),
        ],
    )
    def test_error_is_mapped(
        self,
        client: TestClient,
        stub_generator: StubGenerator,
        error: AIServiceError,
        expected_status: int,
        expected_code: str,
    ) -> None:
        stub_generator.error = error

        response = client.post("/api/generations", json={"source_text": VALID_TEXT})

        assert response.status_code == expected_status
        body = response.json()
        assert body["error"] == "Błąd usługi AI"
        assert body["code"] == expected_code
        assert body["details"] == error.user_message

    def test_failure_is_written_to_error_log(
        self,
        client: TestClient,
        stub_generator: StubGenerator,
        db_session: Session,
        test_user: models.User,
    ) -> None:
        stub_generator.error = NetworkError("connection refused")

        client.post("/api/generations", json={"source_text": VALID_TEXT})

        logs = db_session.query(models.GenerationErrorLog).all()
        assert len(logs) == 1
        assert logs[0].user_id == test_user.id
        assert logs[0].error_code == "NETWORK_ERROR"
        assert logs[0].error_message == NetworkError.user_message
        assert logs[0].source_text_length == 1500

        # The record created before the call remains with zero counters
        generation = db_session.query(models.Generation).one()
        assert generation.generated_count == 0

    def test_unexpected_failure_is_written_to_error_log(
        self,
        client: TestClient,
        stub_generator: StubGenerator,
        db_session: Session,
        test_user: models.User,
    ) -> None:
        stub_generator.error = RuntimeError("provider sent garbage")

        response = client.post("/api/generations", json={"source_text": VALID_TEXT})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        logs = db_session.query(models.GenerationErrorLog).all()
        assert len(logs) == 1
        assert logs[0].user_id == test_user.id
        assert logs[0].error_code == "AI_ERROR"
        assert logs[0].error_message == "provider sent garbage"

    def test_rate_limit_sets_retry_after(
        self, client: TestClient, stub_generator: StubGenerator
    ) -> None:
        stub_generator.error = RateLimitError("slow down", retry_after=30)

        response = client.post("/api/generations", json={"source_text": VALID_TEXT})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.headers["retry-after"] == "30"
