from .flashcard_repository import FlashcardRepository
from .generation_repository import GenerationErrorLogRepository, GenerationRepository

__all__ = [
    "FlashcardRepository",
    "GenerationErrorLogRepository",
    "GenerationRepository",
]
