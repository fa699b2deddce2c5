"""
Generation record entity.

One record is written per AI generation attempt, before the provider is
called, so failed attempts are accounted for as well.
"""

from dataclasses import dataclass
from datetime import datetime

from tenx_cards.domain.common.entity import Entity
from tenx_cards.domain.common.exceptions import ValidationError
from tenx_cards.domain.common.value_objects import ContentHash, GenerationId, UserId


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValidationError(f"{name} cannot be negative", field=name, value=value)


@dataclass
class Generation(Entity[GenerationId]):
    """
    Metadata about a single generation attempt.

    Business Rules:
    - Counters start at zero and are never negative
    - Model must be non-empty
    """

    id: GenerationId
    user_id: UserId
    model: str
    source_text_hash: ContentHash
    source_text_length: int
    generated_count: int = 0
    accepted_unedited_count: int = 0
    accepted_edited_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.model or not self.model.strip():
            raise ValidationError("Model cannot be empty", field="model")
        _require_non_negative("source_text_length", self.source_text_length)
        _require_non_negative("generated_count", self.generated_count)
        _require_non_negative("accepted_unedited_count", self.accepted_unedited_count)
        _require_non_negative("accepted_edited_count", self.accepted_edited_count)

    def record_stats(
        self,
        generated_count: int,
        accepted_unedited_count: int | None = None,
        accepted_edited_count: int | None = None,
    ) -> None:
        """
        Overwrite the counters that were provided.

        Args:
            generated_count: Number of cards the model produced
            accepted_unedited_count: Cards saved without changes (optional)
            accepted_edited_count: Cards saved after editing (optional)

        Raises:
            ValidationError: If any counter is negative
        """
        _require_non_negative("generated_count", generated_count)
        self.generated_count = generated_count
        if accepted_unedited_count is not None:
            _require_non_negative("accepted_unedited_count", accepted_unedited_count)
            self.accepted_unedited_count = accepted_unedited_count
        if accepted_edited_count is not None:
            _require_non_negative("accepted_edited_count", accepted_edited_count)
            self.accepted_edited_count = accepted_edited_count

    @classmethod
    def create(
        cls,
        user_id: UserId,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
    ) -> "Generation":
        """Create a new generation record with zeroed counters."""
        return cls(
            id=GenerationId.generate(),
            user_id=user_id,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
        )
