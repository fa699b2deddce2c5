"""Service for generation metadata records and their error logs."""

import structlog

from tenx_cards.application.learning.protocols import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from tenx_cards.domain.common.value_objects import ContentHash, GenerationId, UserId
from tenx_cards.domain.learning.entities.generation import Generation
from tenx_cards.domain.learning.entities.generation_error_log import GenerationErrorLog
from tenx_cards.exceptions import NotFoundError

logger = structlog.get_logger(__name__)


class GenerationNotFoundError(NotFoundError):
    """Generation record missing or owned by another user."""

    def __init__(self, generation_id: int) -> None:
        self.generation_id = generation_id
        super().__init__(f"Generacja o id {generation_id} nie została znaleziona")


class GenerationRecordService:
    """Creates generation records, updates their counters and logs failures."""

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        error_log_repository: GenerationErrorLogRepositoryProtocol,
    ) -> None:
        self.generation_repository = generation_repository
        self.error_log_repository = error_log_repository

    def create_generation(
        self,
        user_id: int,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
    ) -> GenerationId:
        """
        Create a generation record with zeroed counters.

        Called before the provider is contacted so that failed attempts still
        leave a record behind.

        Args:
            user_id: Owner of the generation
            model: Model identifier the generation will use
            source_text_hash: Fingerprint of the source text
            source_text_length: Source text length in UTF-16 code units

        Returns:
            Identifier assigned by the database

        Raises:
            DatabaseError: If the record cannot be written
        """
        generation = Generation.create(
            user_id=UserId(user_id),
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
        )
        generation = self.generation_repository.save(generation)

        logger.info(
            "generation_created",
            generation_id=generation.id.value,
            user_id=user_id,
            model=model,
            source_text_length=source_text_length,
        )
        return generation.id

    def update_stats(
        self,
        generation_id: GenerationId,
        user_id: int,
        generated_count: int,
        accepted_unedited_count: int | None = None,
        accepted_edited_count: int | None = None,
    ) -> Generation:
        """
        Overwrite the counters of a generation record.

        Args:
            generation_id: Record to update
            user_id: Owner, for ownership verification
            generated_count: Number of cards the model produced
            accepted_unedited_count: Cards saved unchanged (left as is when None)
            accepted_edited_count: Cards saved after editing (left as is when None)

        Returns:
            Updated generation record

        Raises:
            GenerationNotFoundError: If the record does not exist for this user
        """
        generation = self.generation_repository.find_by_id(generation_id, UserId(user_id))
        if generation is None:
            raise GenerationNotFoundError(generation_id.value)

        generation.record_stats(
            generated_count=generated_count,
            accepted_unedited_count=accepted_unedited_count,
            accepted_edited_count=accepted_edited_count,
        )
        generation = self.generation_repository.save(generation)

        logger.info(
            "generation_stats_updated",
            generation_id=generation_id.value,
            generated_count=generated_count,
        )
        return generation

    def get_generation(self, generation_id: int, user_id: int) -> Generation | None:
        return self.generation_repository.find_by_id(GenerationId(generation_id), UserId(user_id))

    def log_error(
        self,
        user_id: int,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
        error_code: str | None = None,
        error_message: str | None = None,
    ) -> None:
        """
        Record a failed generation attempt.

        Best effort: a failure to write the log is logged and dropped so the
        caller can still surface the original generation error.
        """
        error_log = GenerationErrorLog.create(
            user_id=UserId(user_id),
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
            error_code=error_code,
            error_message=error_message,
        )
        try:
            self.error_log_repository.save(error_log)
        except Exception:
            logger.error(
                "generation_error_log_failed",
                user_id=user_id,
                model=model,
                error_code=error_code,
                exc_info=True,
            )
            return

        logger.info("generation_error_logged", user_id=user_id, error_code=error_code)
