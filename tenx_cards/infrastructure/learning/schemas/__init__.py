"""Learning context schemas."""

from tenx_cards.infrastructure.learning.schemas.flashcard_schemas import (
    Flashcard,
    FlashcardCreateItem,
    FlashcardDeleteResponse,
    FlashcardListResponse,
    FlashcardResponse,
    FlashcardsCreateRequest,
    FlashcardUpdateRequest,
)
from tenx_cards.infrastructure.learning.schemas.generation_schemas import (
    CandidateFlashcardSchema,
    GenerationCreateRequest,
    GenerationCreateResponse,
    GenerationStats,
    ModelInfo,
    ModelListResponse,
)

__all__ = [
    "CandidateFlashcardSchema",
    "Flashcard",
    "FlashcardCreateItem",
    "FlashcardDeleteResponse",
    "FlashcardListResponse",
    "FlashcardResponse",
    "FlashcardUpdateRequest",
    "FlashcardsCreateRequest",
    "GenerationCreateRequest",
    "GenerationCreateResponse",
    "GenerationStats",
    "ModelInfo",
    "ModelListResponse",
]
