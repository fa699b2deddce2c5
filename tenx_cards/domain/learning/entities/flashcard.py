"""
Flashcard entity.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from tenx_cards.domain.common.entity import Entity
from tenx_cards.domain.common.exceptions import ValidationError
from tenx_cards.domain.common.value_objects import (
    FlashcardId,
    GenerationId,
    UserId,
    utf16_length,
)

MAX_FRONT_LENGTH = 200
MAX_BACK_LENGTH = 500


class FlashcardSource(StrEnum):
    """Provenance of a persisted flashcard."""

    AI_FULL = "ai-full"
    AI_EDITED = "ai-edited"
    MANUAL = "manual"


def _validate_front(front: str) -> None:
    if not front or not front.strip():
        raise ValidationError('Pole "Przód" jest wymagane', field="front")
    if utf16_length(front) > MAX_FRONT_LENGTH:
        raise ValidationError(
            f"Przód nie może przekraczać {MAX_FRONT_LENGTH} znaków", field="front"
        )


def _validate_back(back: str) -> None:
    if not back or not back.strip():
        raise ValidationError('Pole "Tył" jest wymagane', field="back")
    if utf16_length(back) > MAX_BACK_LENGTH:
        raise ValidationError(f"Tył nie może przekraczać {MAX_BACK_LENGTH} znaków", field="back")


@dataclass
class Flashcard(Entity[FlashcardId]):
    """
    A study card owned by a single user.

    Business Rules:
    - Front is required and at most MAX_FRONT_LENGTH characters
    - Back is required and at most MAX_BACK_LENGTH characters
    - Owner never changes after creation
    - May reference the generation it came from (same owner only, checked by the service)
    """

    id: FlashcardId
    user_id: UserId
    front: str
    back: str
    source: FlashcardSource
    generation_id: GenerationId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        _validate_front(self.front)
        _validate_back(self.back)

    def update_content(
        self,
        front: str | None = None,
        back: str | None = None,
        source: FlashcardSource | None = None,
    ) -> None:
        """
        Apply a partial update.

        Args:
            front: New front text
            back: New back text
            source: New provenance tag

        Raises:
            ValidationError: If front or back violates its length rules
        """
        if front is not None:
            _validate_front(front)
            self.front = front.strip()
        if back is not None:
            _validate_back(back)
            self.back = back.strip()
        if source is not None:
            self.source = source

    @classmethod
    def create(
        cls,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        generation_id: GenerationId | None = None,
    ) -> "Flashcard":
        """Create a new flashcard (ID will be 0 until persisted)."""
        _validate_front(front)
        _validate_back(back)
        return cls(
            id=FlashcardId.generate(),
            user_id=user_id,
            front=front.strip(),
            back=back.strip(),
            source=source,
            generation_id=generation_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: FlashcardId,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        generation_id: GenerationId | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Flashcard":
        """Reconstitute a flashcard from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            generation_id=generation_id,
            created_at=created_at,
            updated_at=updated_at,
        )
