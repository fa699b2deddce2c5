from .generation_dtos import (
    CandidateFlashcard,
    CostUsage,
    CreateFlashcardCommand,
    GeneratedFlashcard,
    GenerationResult,
    TokenUsage,
)

__all__ = [
    "CandidateFlashcard",
    "CostUsage",
    "CreateFlashcardCommand",
    "GeneratedFlashcard",
    "GenerationResult",
    "TokenUsage",
]
