from .content_hash import ContentHash, utf16_length
from .ids import CandidateId, FlashcardId, GenerationErrorLogId, GenerationId, UserId

__all__ = [
    "CandidateId",
    "ContentHash",
    "FlashcardId",
    "GenerationErrorLogId",
    "GenerationId",
    "UserId",
    "utf16_length",
]
