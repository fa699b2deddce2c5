"""Protocol for Flashcard repository in learning context."""

from typing import Protocol

from tenx_cards.domain.common.value_objects import FlashcardId, UserId
from tenx_cards.domain.learning.entities.flashcard import Flashcard


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        ...

    def find_by_user(self, user_id: UserId) -> list[Flashcard]:
        """
        Get all flashcards of a user, newest first.

        Args:
            user_id: Owner of the flashcards

        Returns:
            List of flashcard entities ordered by created_at DESC
        """
        ...

    def save(self, flashcard: Flashcard) -> Flashcard:
        """Create or update a single flashcard."""
        ...

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert new flashcards in a single transaction.

        Args:
            flashcards: Unpersisted flashcard entities

        Returns:
            Persisted entities in the same order

        Raises:
            GenerationReferenceError: If the datastore rejects a generation reference
        """
        ...

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """Delete a flashcard; False if it does not exist for this user."""
        ...
