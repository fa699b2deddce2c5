"""DTOs for the flashcard generation pipeline."""

from dataclasses import dataclass, field

from tenx_cards.domain.common.value_objects import CandidateId, GenerationId, UserId
from tenx_cards.domain.learning.entities.flashcard import FlashcardSource


@dataclass(frozen=True)
class GeneratedFlashcard:
    """A front/back pair proposed by the model, already trimmed and validated."""

    front: str
    back: str


@dataclass(frozen=True)
class TokenUsage:
    prompt: int = 0
    completion: int = 0

    @property
    def total(self) -> int:
        return self.prompt + self.completion


@dataclass(frozen=True)
class CostUsage:
    """Read-only snapshot of what the completion provider has cost so far."""

    total_cost: float = 0.0
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    limit_reached: bool = False
    cost_limit: float = 0.0
    structured_parse_failures: int = 0


@dataclass(frozen=True)
class CandidateFlashcard:
    """A generated card as returned to the reviewer, keyed by its position."""

    id: CandidateId
    front: str
    back: str
    source: FlashcardSource = FlashcardSource.AI_FULL


@dataclass(frozen=True)
class GenerationResult:
    generation_id: GenerationId
    flashcards: list[CandidateFlashcard]
    generated_count: int
    source_text_length: int


@dataclass(frozen=True)
class CreateFlashcardCommand:
    """One row of a bulk flashcard insert."""

    user_id: UserId
    front: str
    back: str
    source: FlashcardSource
    generation_id: GenerationId | None = None
