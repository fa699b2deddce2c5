from .flashcard_generator import FlashcardGeneratorProtocol
from .flashcard_repository import FlashcardRepositoryProtocol
from .generation_repository import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)

__all__ = [
    "FlashcardGeneratorProtocol",
    "FlashcardRepositoryProtocol",
    "GenerationErrorLogRepositoryProtocol",
    "GenerationRepositoryProtocol",
]
