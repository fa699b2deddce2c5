"""Drives a review session against the API: generate, review, save."""

from typing import Protocol

import httpx
import structlog

from tenx_cards.client.api_client import ApiRequestError, GeneratedCandidates
from tenx_cards.client.review import NewFlashcard, ReviewSession
from tenx_cards.domain.common.value_objects import utf16_length

logger = structlog.get_logger(__name__)

MIN_SOURCE_TEXT_LENGTH = 1000
MAX_SOURCE_TEXT_LENGTH = 10000

GENERATE_FAILED_MESSAGE = "Nie udało się wygenerować fiszek"
SAVE_FAILED_MESSAGE = "Nie udało się zapisać fiszek"


class CardsApi(Protocol):
    async def generate(
        self, source_text: str, model: str | None = None
    ) -> GeneratedCandidates: ...

    async def create_flashcards(self, flashcards: list[NewFlashcard]) -> list[dict]: ...


def validate_source_text(text: str) -> list[str]:
    errors = []
    length = utf16_length(text)
    if length < MIN_SOURCE_TEXT_LENGTH:
        errors.append(f"Tekst musi mieć co najmniej {MIN_SOURCE_TEXT_LENGTH} znaków")
    if length > MAX_SOURCE_TEXT_LENGTH:
        errors.append(f"Tekst nie może przekraczać {MAX_SOURCE_TEXT_LENGTH} znaków")
    return errors


def _failure_message(error: Exception, fallback: str) -> str:
    if isinstance(error, ApiRequestError) and error.message:
        return error.message
    return fallback


class ReviewController:
    """
    State of the generate-and-review screen.

    Failed calls never discard what the user has: a failed generation keeps
    the source text, a failed save keeps every candidate and decision.
    """

    def __init__(self, api: CardsApi, model: str | None = None) -> None:
        self.api = api
        self.model = model
        self.source_text = ""
        self.session = ReviewSession()
        self.is_generating = False
        self.is_saving = False
        self.error: str | None = None
        self.validation_errors: list[str] = []

    @property
    def generation_id(self) -> int | None:
        return self.session.generation_id

    def update_source_text(self, text: str) -> list[str]:
        self.source_text = text
        self.validation_errors = validate_source_text(text)
        return self.validation_errors

    async def generate(self) -> bool:
        """Request candidates for the current source text. Returns success."""
        self.validation_errors = validate_source_text(self.source_text)
        if self.validation_errors:
            return False

        self.is_generating = True
        self.error = None
        self.session = ReviewSession()
        try:
            result = await self.api.generate(self.source_text, self.model)
        except (ApiRequestError, httpx.HTTPError) as e:
            self.error = _failure_message(e, GENERATE_FAILED_MESSAGE)
            logger.warning("generation_request_failed", error=str(e))
            return False
        finally:
            self.is_generating = False

        self.session = ReviewSession.from_generation(result.generation_id, result.flashcards)
        logger.info(
            "candidates_received",
            generation_id=result.generation_id,
            count=len(result.flashcards),
        )
        return True

    async def save_all(self) -> int:
        """
        Save every accepted or edited candidate in one request.

        Returns the number of saved cards; 0 when nothing was eligible or the
        request failed.
        """
        commands = self.session.build_save_commands()
        if not commands:
            return 0

        self.is_saving = True
        self.error = None
        try:
            saved = await self.api.create_flashcards(commands)
        except (ApiRequestError, httpx.HTTPError) as e:
            self.error = _failure_message(e, SAVE_FAILED_MESSAGE)
            logger.warning("save_request_failed", error=str(e), count=len(commands))
            return 0
        finally:
            self.is_saving = False

        logger.info("flashcards_saved", count=len(saved), generation_id=self.generation_id)
        self.reset()
        return len(saved)

    def reset(self) -> None:
        self.source_text = ""
        self.session = ReviewSession()
        self.is_generating = False
        self.is_saving = False
        self.error = None
        self.validation_errors = []

    def dismiss_error(self) -> None:
        self.error = None
