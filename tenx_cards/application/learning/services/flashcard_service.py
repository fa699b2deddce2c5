"""Service for persisting and managing user flashcards."""

import structlog

from tenx_cards.application.learning.protocols import (
    FlashcardRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from tenx_cards.application.learning.use_cases.dtos import CreateFlashcardCommand
from tenx_cards.domain.common.value_objects import FlashcardId, UserId
from tenx_cards.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from tenx_cards.exceptions import (
    FlashcardNotFoundError,
    GenerationReferenceError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class FlashcardService:
    """Owner-scoped flashcard persistence."""

    def __init__(
        self,
        flashcard_repository: FlashcardRepositoryProtocol,
        generation_repository: GenerationRepositoryProtocol,
    ) -> None:
        """Initialize service with repository protocols."""
        self.flashcard_repository = flashcard_repository
        self.generation_repository = generation_repository

    def create_flashcards(self, commands: list[CreateFlashcardCommand]) -> list[Flashcard]:
        """
        Bulk insert flashcards for a single user.

        The batch is all-or-nothing: it is rejected before any write if the
        commands belong to different users or reference a generation the user
        does not own.

        Args:
            commands: Flashcards to create

        Returns:
            Persisted flashcards in command order

        Raises:
            ValidationError: If the commands belong to more than one user
            GenerationReferenceError: If a generation_id is missing or foreign
        """
        if not commands:
            return []

        owners = {command.user_id for command in commands}
        if len(owners) > 1:
            raise ValidationError("Wszystkie fiszki muszą należeć do tego samego użytkownika")
        user_id = commands[0].user_id

        referenced_ids = {
            command.generation_id.value
            for command in commands
            if command.generation_id is not None
        }
        if referenced_ids:
            owned_ids = self.generation_repository.find_owned_ids(referenced_ids, user_id)
            missing_ids = referenced_ids - owned_ids
            if missing_ids:
                logger.warning(
                    "flashcards_rejected_foreign_generation",
                    user_id=user_id.value,
                    generation_ids=sorted(missing_ids),
                )
                raise GenerationReferenceError(missing_ids)

        flashcards = [
            Flashcard.create(
                user_id=command.user_id,
                front=command.front,
                back=command.back,
                source=command.source,
                generation_id=command.generation_id,
            )
            for command in commands
        ]
        saved = self.flashcard_repository.save_all(flashcards)

        logger.info(
            "flashcards_created",
            user_id=user_id.value,
            count=len(saved),
            generation_ids=sorted(referenced_ids),
        )
        return saved

    def update_flashcard(
        self,
        flashcard_id: int,
        user_id: int,
        front: str | None = None,
        back: str | None = None,
        source: FlashcardSource | None = None,
    ) -> Flashcard:
        """
        Update a flashcard's content or source.

        Args:
            flashcard_id: ID of the flashcard
            user_id: ID of the user (for ownership verification)
            front: New front text (optional)
            back: New back text (optional)
            source: New provenance tag (optional)

        Returns:
            Updated flashcard entity

        Raises:
            FlashcardNotFoundError: If flashcard is not found or not owned by user
        """
        flashcard = self.flashcard_repository.find_by_id(
            FlashcardId(flashcard_id), UserId(user_id)
        )
        if flashcard is None:
            raise FlashcardNotFoundError(flashcard_id)

        flashcard.update_content(front=front, back=back, source=source)
        flashcard = self.flashcard_repository.save(flashcard)

        logger.info("updated_flashcard", flashcard_id=flashcard_id, user_id=user_id)
        return flashcard

    def delete_flashcard(self, flashcard_id: int, user_id: int) -> None:
        """
        Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If flashcard is not found or not owned by user
        """
        deleted = self.flashcard_repository.delete(FlashcardId(flashcard_id), UserId(user_id))
        if not deleted:
            raise FlashcardNotFoundError(flashcard_id)

        logger.info("deleted_flashcard", flashcard_id=flashcard_id, user_id=user_id)

    def get_user_flashcards(self, user_id: int) -> list[Flashcard]:
        """Get all flashcards of a user, newest first."""
        return self.flashcard_repository.find_by_user(UserId(user_id))

    def get_flashcard_by_id(self, flashcard_id: int, user_id: int) -> Flashcard | None:
        """Get a single flashcard; None when it does not exist for this user."""
        return self.flashcard_repository.find_by_id(FlashcardId(flashcard_id), UserId(user_id))
