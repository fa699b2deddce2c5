from dataclasses import dataclass

from ..entity import EntityId
from ..value_object import ValueObject


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class FlashcardId(EntityId):
    """Strongly-typed identifier of a persisted flashcard."""


@dataclass(frozen=True)
class GenerationId(EntityId):
    """Strongly-typed generation record identifier."""


@dataclass(frozen=True)
class GenerationErrorLogId(EntityId):
    """Strongly-typed generation error log identifier."""


@dataclass(frozen=True)
class CandidateId(ValueObject):
    """
    1-based position of an AI-proposed card within one generation.

    Not an entity id: candidate ids are reassigned on every generation and
    live in their own namespace, so they can never be passed where a
    ``FlashcardId`` is expected.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("CandidateId must be a positive position")

    def __int__(self) -> int:
        return self.value
