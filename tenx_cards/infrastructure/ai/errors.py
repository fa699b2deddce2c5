"""
Closed error taxonomy for the AI completion pipeline.

Every provider, transport and parsing failure is mapped to exactly one of
these classes at the client boundary. Each class fixes its HTTP status, its
stable code and the message shown to the user, so the HTTP layer never has to
probe the error for attributes.
"""

from enum import StrEnum

from tenx_cards.exceptions import AppError

AI_ERROR_SUMMARY = "Błąd usługi AI"


class AIErrorCode(StrEnum):
    API_ERROR = "API_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    COST_LIMIT_ERROR = "COST_LIMIT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    INVALID_API_KEY = "INVALID_API_KEY"
    INVALID_MODEL = "INVALID_MODEL"
    AI_ERROR = "AI_ERROR"


class AIServiceError(AppError):
    """Base class for AI pipeline failures."""

    error_code: AIErrorCode = AIErrorCode.API_ERROR
    http_status: int = 503
    user_message: str = "Nie udało się wygenerować fiszek"

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            status_code=self.http_status,
            code=self.error_code.value,
            summary=AI_ERROR_SUMMARY,
        )


class AIConfigError(AIServiceError):
    """Provider credentials or limits are misconfigured."""

    error_code = AIErrorCode.CONFIG_ERROR
    http_status = 500
    user_message = "Usługa AI jest nieprawidłowo skonfigurowana"


class ResponseFormatError(AIServiceError):
    """Requested response format is not supported."""

    error_code = AIErrorCode.VALIDATION_ERROR
    http_status = 400
    user_message = "Nieprawidłowy format odpowiedzi dla usługi AI"


class CostLimitError(AIServiceError):
    """Accumulated provider spend reached the configured ceiling."""

    error_code = AIErrorCode.COST_LIMIT_ERROR
    http_status = 403
    user_message = "Przekroczono limit kosztów dla usługi AI."

    def __init__(self, limit: float, usage: float) -> None:
        self.limit = limit
        self.usage = usage
        super().__init__(f"Cost limit of ${limit:.2f} reached (current usage ${usage:.4f})")


class RateLimitError(AIServiceError):
    """Provider answered 429."""

    error_code = AIErrorCode.RATE_LIMIT_ERROR
    http_status = 429
    user_message = "Przekroczono limit zapytań do usługi AI. Spróbuj ponownie za kilka minut."

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class CompletionTimeoutError(AIServiceError):
    """Provider did not answer within the configured timeout."""

    error_code = AIErrorCode.TIMEOUT_ERROR
    http_status = 504
    user_message = "Upłynął limit czasu zapytania do usługi AI. Spróbuj ponownie później."

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Request timed out after {timeout:g}s")


class NetworkError(AIServiceError):
    """No response was received from the provider."""

    error_code = AIErrorCode.NETWORK_ERROR
    http_status = 503
    user_message = "Problem z połączeniem do usługi AI. Spróbuj ponownie później."


class InvalidApiKeyError(AIServiceError):
    """Provider rejected the API key."""

    error_code = AIErrorCode.INVALID_API_KEY
    http_status = 401
    user_message = "Nieprawidłowy klucz API dla usługi AI"


class ApiError(AIServiceError):
    """Any other non-2xx provider response."""

    error_code = AIErrorCode.API_ERROR
    http_status = 503
    user_message = "Usługa AI zwróciła błąd. Spróbuj ponownie później."

    def __init__(self, message: str, provider_status: int) -> None:
        self.provider_status = provider_status
        super().__init__(message)


class InvalidModelError(ApiError):
    """Requested model is not served by the provider."""

    error_code = AIErrorCode.INVALID_MODEL
    http_status = 400
    user_message = "Wybrany model AI nie jest dostępny. Spróbuj z innym modelem."


class FlashcardParseError(AIServiceError):
    """Model output could not be turned into flashcards."""

    error_code = AIErrorCode.AI_ERROR
    http_status = 503
    user_message = "Nie udało się przetworzyć odpowiedzi usługi AI. Spróbuj ponownie."
