"""Builds the AI services from application settings."""

from tenx_cards.config import Settings
from tenx_cards.infrastructure.ai.completion_client import OpenRouterClient, RetryConfig
from tenx_cards.infrastructure.ai.flashcard_generator import FlashcardGenerationService


def create_completion_client(settings: Settings) -> OpenRouterClient | None:
    """Provider client, or None when flashcards are mocked."""
    if settings.ai_mock_mode:
        return None
    return OpenRouterClient(
        api_key=settings.OPENROUTER_API_KEY,
        base_url=settings.OPENROUTER_BASE_URL,
        timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        cost_limit=settings.AI_COST_LIMIT,
        retry_config=RetryConfig(
            max_retries=settings.AI_MAX_RETRIES,
            backoff_multiplier=settings.AI_BACKOFF_MULTIPLIER,
            initial_delay_ms=settings.AI_INITIAL_DELAY_MS,
        ),
    )


def create_flashcard_generator(
    settings: Settings, completion_client: OpenRouterClient | None
) -> FlashcardGenerationService:
    return FlashcardGenerationService(
        completion_client=completion_client,
        default_model=settings.AI_DEFAULT_MODEL,
        mock_mode=settings.ai_mock_mode,
        request_json_response=settings.AI_REQUEST_JSON_RESPONSE,
    )
