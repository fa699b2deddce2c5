"""Flashcard generation on top of the completion client."""

import json
import re
from typing import Any

import structlog

from tenx_cards.application.learning.use_cases.dtos import CostUsage, GeneratedFlashcard
from tenx_cards.infrastructure.ai.completion_client import OpenRouterClient
from tenx_cards.infrastructure.ai.completion_types import (
    ChatMessage,
    CompletionOptions,
    CompletionResult,
    ProviderModel,
    ResponseFormat,
)
from tenx_cards.infrastructure.ai.errors import AIConfigError, FlashcardParseError

logger = structlog.get_logger(__name__)

GENERATION_TEMPERATURE = 0.3
GENERATION_MAX_TOKENS = 1000

_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")

FLASHCARDS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "flashcards": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "front": {"type": "string"},
                    "back": {"type": "string"},
                },
                "required": ["front", "back"],
            },
        }
    },
    "required": ["flashcards"],
}

PROMPT_TEMPLATE = """You are an expert educational content creator specializing in creating flashcards. Your task is to create high-quality question-answer pairs from the provided text.

Create high-quality flashcards from the following text. Generate between 5-15 flashcards focusing on key concepts, definitions, processes, and important facts.

Guidelines:
- Each flashcard should have a clear question (front) and concise answer (back)
- Questions should test understanding, not just recall
- Answers should be 1-3 sentences maximum
- Cover the most important concepts from the text
- Avoid duplicating content between flashcards

Return ONLY a valid JSON object in this exact format:
{{
  "flashcards": [
    {{
      "front": "What is the main concept?",
      "back": "The main concept is..."
    }},
    {{
      "front": "How does this process work?",
      "back": "This process works by..."
    }}
  ]
}}

Text to analyze:
{text}
"""

MOCK_FLASHCARDS: tuple[GeneratedFlashcard, ...] = (
    GeneratedFlashcard(
        front="Co to jest spaced repetition?",
        back=(
            "Spaced repetition to technika nauki, która polega na powtarzaniu materiału "
            "w optymalnych odstępach czasu."
        ),
    ),
    GeneratedFlashcard(
        front="Jaka jest zaleta używania fiszek do nauki?",
        back=(
            "Fiszki umożliwiają aktywne przypominanie informacji, co jest bardziej "
            "efektywne niż bierne czytanie."
        ),
    ),
    GeneratedFlashcard(
        front="Co to jest krzywa zapominania?",
        back=(
            "Krzywa zapominania pokazuje jak szybko zapominamy informacje w czasie, "
            "jeśli nie są powtarzane."
        ),
    ),
)


def sanitize_source_text(text: str) -> str:
    """Neutralize sequences that could break out of the prompt's text block."""
    sanitized = text.strip()
    sanitized = sanitized.replace("```", "\\```")
    sanitized = sanitized.replace("//", "\\/\\/")
    return _EXCESS_NEWLINES_PATTERN.sub("\n\n", sanitized)


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


def _extract_flashcard_list(payload: Any) -> list[Any] | None:
    if isinstance(payload, dict) and isinstance(payload.get("flashcards"), list):
        return payload["flashcards"]
    if isinstance(payload, list):
        return payload
    return None


def _decode_content(content: str) -> Any:
    """Parse model text as JSON, falling back to the first ``{...}`` block."""
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        match = _JSON_OBJECT_PATTERN.search(content)
        if match is None:
            raise FlashcardParseError(
                "Failed to parse AI response: Could not parse JSON from AI response"
            ) from None
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise FlashcardParseError(f"Failed to parse AI response: {e}") from e


def _validate_flashcards(entries: list[Any]) -> list[GeneratedFlashcard]:
    flashcards: list[GeneratedFlashcard] = []
    for index, entry in enumerate(entries):
        front = entry.get("front") if isinstance(entry, dict) else None
        back = entry.get("back") if isinstance(entry, dict) else None
        if not isinstance(front, str) or not isinstance(back, str):
            raise FlashcardParseError(
                f"Failed to parse AI response: Flashcard at index {index} "
                "is missing front or back content"
            )
        front, back = front.strip(), back.strip()
        if not front or not back:
            raise FlashcardParseError(
                f"Failed to parse AI response: Flashcard at index {index} "
                "is missing front or back content"
            )
        flashcards.append(GeneratedFlashcard(front=front, back=back))
    return flashcards


def parse_flashcards(result: CompletionResult) -> list[GeneratedFlashcard]:
    """
    Turn a completion into validated flashcards.

    Precedence: the payload already decoded by the client, then the raw
    content as JSON, then the first JSON object embedded in the content.
    Any invalid entry fails the whole batch.

    Raises:
        FlashcardParseError: If no non-empty list of valid flashcards can be extracted
    """
    if not result.choices:
        raise FlashcardParseError("AI model returned empty response")

    choice = result.choices[0]
    entries = _extract_flashcard_list(choice.parsed) if choice.parsed is not None else None

    if entries is None:
        content = choice.message.content
        if not content or not content.strip():
            raise FlashcardParseError("Failed to parse AI response: Invalid AI response format")
        entries = _extract_flashcard_list(_decode_content(content.strip()))
        if entries is None:
            raise FlashcardParseError(
                "Failed to parse AI response: AI response does not contain flashcards array"
            )

    if not entries:
        raise FlashcardParseError("AI model returned empty or invalid flashcards")

    return _validate_flashcards(entries)


class FlashcardGenerationService:
    """
    Generates candidate flashcards from source text.

    In mock mode no provider is contacted and a fixed set of cards is returned
    whatever the input.
    """

    def __init__(
        self,
        completion_client: OpenRouterClient | None,
        default_model: str,
        mock_mode: bool = False,
        request_json_response: bool = False,
    ) -> None:
        """
        Initialize the service.

        Args:
            completion_client: Provider client, may be None in mock mode
            default_model: Model used when the caller does not pick one
            mock_mode: Return canned flashcards instead of calling the provider
            request_json_response: Ask the provider for a json_object response

        Raises:
            AIConfigError: If mock mode is off and no client is available
        """
        if not mock_mode and completion_client is None:
            raise AIConfigError("OpenRouter API key is not configured and mock mode is disabled")

        self._client = completion_client
        self._default_model = default_model
        self._mock_mode = mock_mode
        self._request_json_response = request_json_response

    @property
    def is_mock_mode(self) -> bool:
        return self._mock_mode

    @property
    def default_model(self) -> str:
        return self._default_model

    async def generate_flashcards(
        self, source_text: str, model: str | None = None
    ) -> list[GeneratedFlashcard]:
        """
        Generate flashcards for a piece of text.

        Args:
            source_text: Text to build flashcards from
            model: Provider model identifier, defaults to the configured model

        Returns:
            Non-empty list of trimmed front/back pairs

        Raises:
            AIServiceError: Any completion failure, propagated unchanged
            FlashcardParseError: If the model output cannot be parsed
        """
        if self._mock_mode or self._client is None:
            logger.debug("mock_flashcards_returned", count=len(MOCK_FLASHCARDS))
            return list(MOCK_FLASHCARDS)

        model_name = model or self._default_model
        options = CompletionOptions(
            temperature=GENERATION_TEMPERATURE,
            max_tokens=GENERATION_MAX_TOKENS,
        )
        if self._request_json_response:
            options.response_format = ResponseFormat(
                type="json_object", json_schema=FLASHCARDS_SCHEMA
            )

        prompt = build_prompt(sanitize_source_text(source_text))
        result = await self._client.complete(
            model_name,
            [ChatMessage(role="user", content=prompt)],
            options,
        )

        try:
            flashcards = parse_flashcards(result)
        except FlashcardParseError as e:
            logger.warning("flashcard_parse_failed", model=model_name, error=e.message)
            raise

        logger.info("flashcards_generated", model=model_name, count=len(flashcards))
        return flashcards

    def usage(self) -> CostUsage:
        """Provider usage so far; all zeros in mock mode."""
        if self._mock_mode or self._client is None:
            return CostUsage()
        return self._client.usage()

    async def available_models(self) -> list[ProviderModel]:
        """Free provider models; only the default model in mock mode."""
        if self._mock_mode or self._client is None:
            return [ProviderModel(id=self._default_model, name=self._default_model)]
        models = await self._client.list_models()
        return [m for m in models if m.is_free]
