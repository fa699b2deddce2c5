"""Wire models for the OpenRouter chat completions API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ResponseFormat(BaseModel):
    """
    Requested output format.

    ``type`` is checked by the client rather than by pydantic so that an
    unsupported value surfaces as ``ResponseFormatError``.
    """

    type: str = "text"
    json_schema: dict[str, Any] | None = None


class CompletionOptions(BaseModel):
    temperature: float | None = Field(default=None, ge=0, le=2)
    max_tokens: int | None = Field(default=None, gt=0)
    response_format: ResponseFormat | None = None


class CompletionUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionMessage(BaseModel):
    role: str = "assistant"
    content: str | None = None


class CompletionChoice(BaseModel):
    index: int = 0
    message: CompletionMessage
    finish_reason: str | None = None
    # Filled by the client when a JSON response was requested and decoded
    parsed: Any = None


class CompletionResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    model: str | None = None
    choices: list[CompletionChoice] = Field(default_factory=list)
    usage: CompletionUsage | None = None


class ProviderModel(BaseModel):
    """A model listed by the provider's /models endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str | None = None
    context_length: int | None = None
    pricing: dict[str, Any] | None = None

    @property
    def is_free(self) -> bool:
        if "free" in self.id:
            return True
        prompt_price = (self.pricing or {}).get("prompt")
        return prompt_price in ("0", 0)
