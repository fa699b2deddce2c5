"""Error log entry written when a generation attempt fails."""

from dataclasses import dataclass
from datetime import datetime

from tenx_cards.domain.common.entity import Entity
from tenx_cards.domain.common.value_objects import ContentHash, GenerationErrorLogId, UserId


@dataclass
class GenerationErrorLog(Entity[GenerationErrorLogId]):
    """Failed generation attempt, kept for diagnostics."""

    id: GenerationErrorLogId
    user_id: UserId
    model: str
    source_text_hash: ContentHash
    source_text_length: int
    error_code: str | None = None
    error_message: str | None = None
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        user_id: UserId,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
        error_code: str | None = None,
        error_message: str | None = None,
    ) -> "GenerationErrorLog":
        return cls(
            id=GenerationErrorLogId.generate(),
            user_id=user_id,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
            error_code=error_code,
            error_message=error_message,
        )
