"""Tests for the model listing endpoint."""

from collections.abc import Generator

import httpx
import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient

from tenx_cards.config import DEFAULT_AI_MODEL
from tenx_cards.core import container
from tenx_cards.infrastructure.ai.completion_client import OpenRouterClient
from tenx_cards.infrastructure.ai.flashcard_generator import FlashcardGenerationService

MODELS_PAYLOAD = {
    "data": [
        {"id": "google/gemma-3n-e2b-it:free", "name": "Gemma 3n", "pricing": {"prompt": "0"}},
        {"id": "openai/gpt-4o", "name": "GPT-4o", "pricing": {"prompt": "0.0000025"}},
        {"id": "meta/llama-free-tier", "pricing": {"prompt": "0.0001"}},
        {"id": "vendor/zero-cost", "name": "Zero", "pricing": {"prompt": 0}},
    ]
}


@pytest.fixture
def live_generator() -> Generator[FlashcardGenerationService, None, None]:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/models")
        return httpx.Response(200, json=MODELS_PAYLOAD)

    client = OpenRouterClient(
        api_key="sk-test",
        base_url="https://openrouter.test/api/v1",
        transport=httpx.MockTransport(handler),
    )
    generator = FlashcardGenerationService(
        completion_client=client, default_model="openai/gpt-4o"
    )
    container.flashcard_generator.override(providers.Object(generator))
    yield generator
    container.flashcard_generator.reset_override()


class TestListModels:
    """Test suite for GET /api/models."""

    def test_mock_mode_lists_default_model_only(self, client: TestClient) -> None:
        response = client.get("/api/models")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["default_model"] == DEFAULT_AI_MODEL
        assert [model["id"] for model in body["data"]] == [DEFAULT_AI_MODEL]

    def test_live_mode_lists_free_models(
        self, client: TestClient, live_generator: FlashcardGenerationService
    ) -> None:
        response = client.get("/api/models")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["default_model"] == "openai/gpt-4o"
        assert [model["id"] for model in body["data"]] == [
            "google/gemma-3n-e2b-it:free",
            "meta/llama-free-tier",
            "vendor/zero-cost",
        ]
        # Models without a display name fall back to their id
        assert body["data"][1]["name"] == "meta/llama-free-tier"

    def test_requires_authentication(self, anon_client: TestClient) -> None:
        response = anon_client.get("/api/models")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
