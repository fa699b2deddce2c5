"""HTTP client for the 10x Cards REST API."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from tenx_cards.client.review import NewFlashcard

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class ApiRequestError(Exception):
    """
    Non-2xx answer from the API.

    ``message`` is the human readable text of the error envelope, suitable for
    showing to the user as is.
    """

    def __init__(self, message: str, status_code: int, code: str | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


@dataclass(frozen=True)
class GeneratedCandidates:
    generation_id: int
    flashcards: list[tuple[str, str]]
    generated_count: int
    source_text_length: int


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None
    if not isinstance(body, dict):
        return response.reason_phrase, None

    details = body.get("details")
    code = body.get("code")
    if isinstance(details, str) and details:
        return details, code
    if isinstance(details, list) and details:
        messages = [str(item.get("message")) for item in details if isinstance(item, dict)]
        if messages:
            return "; ".join(messages), code
    return str(body.get("error") or response.reason_phrase), code


class CardsApiClient:
    """Async client for the generation and flashcard endpoints."""

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def login(self, email: str, password: str) -> None:
        """Sign in and keep the access token for later calls."""
        response = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}, auth=False
        )
        self._access_token = response.json()["access_token"]
        logger.info("Authenticated with 10x Cards API")

    async def _request(
        self, method: str, path: str, *, auth: bool = True, **kwargs: Any
    ) -> httpx.Response:
        headers = {}
        if auth and self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        response = await self._client.request(
            method, f"{API_PREFIX}{path}", headers=headers, **kwargs
        )
        if response.is_error:
            message, code = _error_message(response)
            raise ApiRequestError(message, response.status_code, code)
        return response

    # --- Generation endpoints ---

    async def generate(self, source_text: str, model: str | None = None) -> GeneratedCandidates:
        payload: dict[str, Any] = {"source_text": source_text}
        if model:
            payload["model"] = model
        response = await self._request("POST", "/generations", json=payload)
        data = response.json()
        return GeneratedCandidates(
            generation_id=data["generation_id"],
            flashcards=[(card["front"], card["back"]) for card in data["flashcards"]],
            generated_count=data["stats"]["generated_count"],
            source_text_length=data["stats"]["source_text_length"],
        )

    # --- Flashcard endpoints ---

    async def create_flashcards(self, flashcards: list[NewFlashcard]) -> list[dict[str, Any]]:
        response = await self._request(
            "POST",
            "/flashcards",
            json={"flashcards": [card.to_payload() for card in flashcards]},
        )
        return response.json()["data"]

    async def list_flashcards(self) -> list[dict[str, Any]]:
        response = await self._request("GET", "/flashcards")
        return response.json()["data"]

    async def get_flashcard(self, flashcard_id: int) -> dict[str, Any]:
        response = await self._request("GET", "/flashcards", params={"id": flashcard_id})
        return response.json()["data"]

    async def update_flashcard(self, flashcard_id: int, **changes: str) -> dict[str, Any]:
        response = await self._request(
            "PUT", "/flashcards", params={"id": flashcard_id}, json=changes
        )
        return response.json()["data"]

    async def delete_flashcard(self, flashcard_id: int) -> None:
        await self._request("DELETE", "/flashcards", params={"id": flashcard_id})
