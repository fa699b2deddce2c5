"""HTTP client for OpenRouter chat completions with cost tracking."""

import asyncio
import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from tenx_cards.application.learning.use_cases.dtos import CostUsage, TokenUsage
from tenx_cards.infrastructure.ai.completion_types import (
    ChatMessage,
    CompletionChoice,
    CompletionOptions,
    CompletionResult,
    CompletionUsage,
    ProviderModel,
    ResponseFormat,
)
from tenx_cards.infrastructure.ai.errors import (
    AIConfigError,
    ApiError,
    CompletionTimeoutError,
    CostLimitError,
    InvalidApiKeyError,
    InvalidModelError,
    NetworkError,
    RateLimitError,
    ResponseFormatError,
)

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
APP_URL = "https://10x-cards.app"
APP_TITLE = "10x Cards App"

# Approximate USD price per 1K tokens
PROMPT_COST_PER_1K = 0.01
COMPLETION_COST_PER_1K = 0.03

SUPPORTED_RESPONSE_FORMATS = ("json_object", "text")


@dataclass(frozen=True)
class RetryConfig:
    """
    Retry policy for transient provider failures.

    Only validated; the client never retries on its own and every retry is
    initiated by the user resubmitting.
    """

    max_retries: int = 3
    backoff_multiplier: float = 2.0
    initial_delay_ms: int = 500

    def __post_init__(self) -> None:
        if not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise AIConfigError("max_retries must be a non-negative integer")
        if self.backoff_multiplier <= 0:
            raise AIConfigError("backoff_multiplier must be positive")
        if self.initial_delay_ms <= 0:
            raise AIConfigError("initial_delay_ms must be positive")


def _parse_retry_after(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _provider_message(response: httpx.Response) -> str:
    """Extract the human readable error from a provider response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
        if body.get("message"):
            return str(body["message"])
    return response.text or response.reason_phrase


class OpenRouterClient:
    """
    Chat completion client for OpenRouter.

    Keeps a running total of token usage and approximate cost for the lifetime
    of the instance and refuses new requests once the cost limit is reached.
    One instance is shared per process through the DI container.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        cost_limit: float = 10.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: OpenRouter API key
            base_url: API root, without trailing slash
            timeout_seconds: Per-request timeout
            cost_limit: Ceiling for the accumulated cost in USD
            retry_config: Validated retry policy (not applied automatically)
            transport: Custom httpx transport, used by tests

        Raises:
            AIConfigError: If the key is missing or a limit is not positive
        """
        if not api_key:
            raise AIConfigError("OpenRouter API key is required")
        if cost_limit <= 0:
            raise AIConfigError("Cost limit must be a positive number")
        if timeout_seconds <= 0:
            raise AIConfigError("Timeout must be a positive number")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.cost_limit = cost_limit
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "HTTP-Referer": APP_URL,
                "X-Title": APP_TITLE,
            },
        )

        self._lock = asyncio.Lock()
        self._prompt_tokens = 0
        self._completion_tokens = 0
        self._total_cost = 0.0
        self._structured_attempts = 0
        self._structured_failures = 0

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def complete(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        options: CompletionOptions | None = None,
    ) -> CompletionResult:
        """
        Send a chat completion request.

        Args:
            model: Provider model identifier
            messages: Conversation to complete
            options: Sampling and response format options

        Returns:
            Parsed completion; ``choice.parsed`` holds decoded JSON when a
            json_object response was requested and the content was valid JSON

        Raises:
            ResponseFormatError: If the requested response format is unsupported
            CostLimitError: If the cost limit was already reached
            CompletionTimeoutError: If the provider did not answer in time
            NetworkError: If no response was received
            InvalidApiKeyError: On HTTP 401
            RateLimitError: On HTTP 429
            InvalidModelError: If the provider has no endpoint for the model
            ApiError: On any other provider failure
        """
        options = options or CompletionOptions()
        self._validate_response_format(options.response_format)

        async with self._lock:
            if self._total_cost >= self.cost_limit:
                raise CostLimitError(self.cost_limit, self._total_cost)

        payload = self._build_payload(model, messages, options)
        response = await self._request("POST", "/chat/completions", json=payload)
        result = self._parse_completion(response)

        if result.usage is not None:
            await self._record_usage(result.usage)

        if options.response_format is not None and options.response_format.type == "json_object":
            for choice in result.choices:
                self._decode_structured(choice)

        logger.info(
            "completion_finished",
            model=model,
            choices=len(result.choices),
            prompt_tokens=result.usage.prompt_tokens if result.usage else 0,
            completion_tokens=result.usage.completion_tokens if result.usage else 0,
        )
        return result

    async def list_models(self) -> list[ProviderModel]:
        """List the models the provider currently serves."""
        response = await self._request("GET", "/models")
        try:
            data = response.json().get("data", [])
            return [ProviderModel.model_validate(item) for item in data]
        except (ValueError, AttributeError, PydanticValidationError) as e:
            raise ApiError("Invalid models response from provider", response.status_code) from e

    async def validate_api_key(self) -> bool:
        """Check the API key against the provider; False when it is rejected."""
        try:
            await self.list_models()
        except InvalidApiKeyError:
            return False
        return True

    def usage(self) -> CostUsage:
        """Snapshot of token usage and accumulated cost."""
        return CostUsage(
            total_cost=self._total_cost,
            token_usage=TokenUsage(
                prompt=self._prompt_tokens,
                completion=self._completion_tokens,
            ),
            limit_reached=self._total_cost >= self.cost_limit,
            cost_limit=self.cost_limit,
            structured_parse_failures=self._structured_failures,
        )

    async def reset_usage(self) -> None:
        async with self._lock:
            self._prompt_tokens = 0
            self._completion_tokens = 0
            self._total_cost = 0.0
            self._structured_attempts = 0
            self._structured_failures = 0

    @staticmethod
    def _validate_response_format(response_format: ResponseFormat | None) -> None:
        if response_format is None:
            return
        if response_format.type not in SUPPORTED_RESPONSE_FORMATS:
            raise ResponseFormatError(
                f"Unsupported response format type '{response_format.type}'"
            )
        if response_format.type == "json_object" and not response_format.json_schema:
            raise ResponseFormatError("json_object response format requires a schema")

    @staticmethod
    def _build_payload(
        model: str, messages: Sequence[ChatMessage], options: CompletionOptions
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [message.model_dump() for message in messages],
        }
        if options.temperature is not None:
            payload["temperature"] = options.temperature
        if options.max_tokens is not None:
            payload["max_tokens"] = options.max_tokens
        if options.response_format is not None:
            response_format: dict[str, Any] = {"type": options.response_format.type}
            if options.response_format.json_schema:
                response_format["schema"] = options.response_format.json_schema
            payload["response_format"] = response_format
        return payload

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and map every failure onto the error taxonomy."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("completion_request_timeout", path=path, timeout=self.timeout_seconds)
            raise CompletionTimeoutError(self.timeout_seconds) from e
        except httpx.TransportError as e:
            logger.warning("completion_request_failed", path=path, error=str(e))
            raise NetworkError(f"Network error while contacting OpenRouter: {e}") from e
        except httpx.RequestError as e:
            # Undecodable body or redirect loop: no usable response came back
            logger.warning(
                "completion_request_failed",
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(f"Invalid response from OpenRouter: {e}") from e

        if response.is_success:
            return response

        message = _provider_message(response)
        logger.warning(
            "completion_provider_error",
            path=path,
            status_code=response.status_code,
            message=message,
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise InvalidApiKeyError(message)
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitError(
                message, retry_after=_parse_retry_after(response.headers.get("retry-after"))
            )
        if "No endpoints found" in message:
            raise InvalidModelError(message, response.status_code)
        raise ApiError(message, response.status_code)

    @staticmethod
    def _parse_completion(response: httpx.Response) -> CompletionResult:
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError("Provider returned a non-JSON body", response.status_code) from e

        # OpenRouter can report upstream failures with a 200 status
        if isinstance(body, dict) and body.get("error") and not body.get("choices"):
            error = body["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            if "No endpoints found" in message:
                raise InvalidModelError(message, response.status_code)
            raise ApiError(message, response.status_code)

        try:
            return CompletionResult.model_validate(body)
        except PydanticValidationError as e:
            raise ApiError("Unexpected completion response shape", response.status_code) from e

    async def _record_usage(self, usage: CompletionUsage) -> None:
        cost = (
            usage.prompt_tokens / 1000 * PROMPT_COST_PER_1K
            + usage.completion_tokens / 1000 * COMPLETION_COST_PER_1K
        )
        async with self._lock:
            self._prompt_tokens += usage.prompt_tokens
            self._completion_tokens += usage.completion_tokens
            self._total_cost += cost

    def _decode_structured(self, choice: CompletionChoice) -> None:
        """Best-effort JSON decode; the raw content is always kept."""
        content = (choice.message.content or "").strip()
        if not content.startswith(("{", "[")):
            return

        self._structured_attempts += 1
        try:
            choice.parsed = json.loads(content)
        except json.JSONDecodeError as e:
            self._structured_failures += 1
            logger.warning(
                "structured_response_parse_failed",
                error=str(e),
                failures=self._structured_failures,
                attempts=self._structured_attempts,
                fallback_rate=round(self._structured_failures / self._structured_attempts, 3),
            )
