"""Pydantic schemas for flashcard request/response validation."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, model_validator

from tenx_cards.domain.common.value_objects import utf16_length
from tenx_cards.domain.learning.entities.flashcard import (
    MAX_BACK_LENGTH,
    MAX_FRONT_LENGTH,
    FlashcardSource,
)

MAX_FLASHCARDS_PER_REQUEST = 100


def _front_text(value: str) -> str:
    if not value.strip():
        raise ValueError('Pole "Przód" jest wymagane')
    if utf16_length(value) > MAX_FRONT_LENGTH:
        raise ValueError(f"Przód nie może przekraczać {MAX_FRONT_LENGTH} znaków")
    return value


def _back_text(value: str) -> str:
    if not value.strip():
        raise ValueError('Pole "Tył" jest wymagane')
    if utf16_length(value) > MAX_BACK_LENGTH:
        raise ValueError(f"Tył nie może przekraczać {MAX_BACK_LENGTH} znaków")
    return value


FrontText = Annotated[str, AfterValidator(_front_text)]
BackText = Annotated[str, AfterValidator(_back_text)]


class Flashcard(BaseModel):
    """Schema for a stored flashcard."""

    id: int
    front: str
    back: str
    source: FlashcardSource
    generation_id: int | None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FlashcardCreateItem(BaseModel):
    """One flashcard of a bulk create request."""

    front: FrontText = Field(..., description="Front side (question)")
    back: BackText = Field(..., description="Back side (answer)")
    source: FlashcardSource = Field(..., description="How the card was produced")
    generation_id: int | None = Field(None, ge=1, description="Generation the card came from")


class FlashcardsCreateRequest(BaseModel):
    """Schema for creating flashcards in one batch."""

    flashcards: list[FlashcardCreateItem] = Field(
        ..., min_length=1, max_length=MAX_FLASHCARDS_PER_REQUEST
    )


class FlashcardUpdateRequest(BaseModel):
    """Schema for updating a flashcard; at least one field is required."""

    front: FrontText | None = None
    back: BackText | None = None
    source: FlashcardSource | None = None

    @model_validator(mode="after")
    def require_any_field(self) -> "FlashcardUpdateRequest":
        if self.front is None and self.back is None and self.source is None:
            raise ValueError("Należy podać co najmniej jedno pole do aktualizacji")
        return self


class FlashcardResponse(BaseModel):
    data: Flashcard


class FlashcardListResponse(BaseModel):
    data: list[Flashcard]
    count: int


class FlashcardDeleteResponse(BaseModel):
    success: bool = Field(..., description="Whether the deletion was successful")
    message: str = Field(..., description="Response message")
