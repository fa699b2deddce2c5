"""Pydantic schemas for the flashcard generation endpoint."""

from pydantic import BaseModel, Field, field_validator

from tenx_cards.domain.common.value_objects import utf16_length
from tenx_cards.domain.learning.entities.flashcard import FlashcardSource

MIN_SOURCE_TEXT_LENGTH = 1000
MAX_SOURCE_TEXT_LENGTH = 10000


class GenerationCreateRequest(BaseModel):
    """Text to generate flashcards from."""

    source_text: str = Field(..., description="Source text, 1000-10000 characters")
    model: str | None = Field(
        None, min_length=1, max_length=255, description="Provider model identifier"
    )

    @field_validator("source_text")
    @classmethod
    def check_length(cls, value: str) -> str:
        length = utf16_length(value)
        if length < MIN_SOURCE_TEXT_LENGTH:
            raise ValueError(f"Tekst musi mieć co najmniej {MIN_SOURCE_TEXT_LENGTH} znaków")
        if length > MAX_SOURCE_TEXT_LENGTH:
            raise ValueError(f"Tekst nie może przekraczać {MAX_SOURCE_TEXT_LENGTH} znaków")
        return value


class CandidateFlashcardSchema(BaseModel):
    """A generated card awaiting review; ``id`` is its 1-based position."""

    id: int
    front: str
    back: str
    source: FlashcardSource


class GenerationStats(BaseModel):
    generated_count: int
    source_text_length: int


class GenerationCreateResponse(BaseModel):
    generation_id: int
    flashcards: list[CandidateFlashcardSchema]
    stats: GenerationStats


class ModelInfo(BaseModel):
    id: str
    name: str


class ModelListResponse(BaseModel):
    data: list[ModelInfo]
    default_model: str
