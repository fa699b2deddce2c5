"""Use case for generating candidate flashcards from source text."""

import structlog

from tenx_cards.application.learning.protocols import FlashcardGeneratorProtocol
from tenx_cards.application.learning.services.generation_record_service import (
    GenerationRecordService,
)
from tenx_cards.application.learning.use_cases.dtos import CandidateFlashcard, GenerationResult
from tenx_cards.domain.common.value_objects import CandidateId, ContentHash, utf16_length
from tenx_cards.infrastructure.ai.errors import AIErrorCode, AIServiceError

logger = structlog.get_logger(__name__)


class GenerateFlashcardsUseCase:
    """Runs one generation: record, call the model, store stats or log the failure."""

    def __init__(
        self,
        generation_record_service: GenerationRecordService,
        flashcard_generator: FlashcardGeneratorProtocol,
    ) -> None:
        self.generation_record_service = generation_record_service
        self.flashcard_generator = flashcard_generator

    async def generate(
        self, user_id: int, source_text: str, model: str | None = None
    ) -> GenerationResult:
        """
        Generate candidate flashcards for a user.

        A generation record is written before the model is called. On failure
        the attempt is added to the error log and the original error is
        re-raised.

        Args:
            user_id: ID of the requesting user
            source_text: Text to build flashcards from (length already validated)
            model: Provider model identifier (optional)

        Returns:
            Generation id, candidates numbered from 1, and stats

        Raises:
            DatabaseError: If the generation record cannot be created
            AIServiceError: If the provider call or parsing fails
        """
        model_name = model or self.flashcard_generator.default_model
        text_hash = ContentHash.compute(source_text)
        text_length = utf16_length(source_text)

        generation_id = self.generation_record_service.create_generation(
            user_id=user_id,
            model=model_name,
            source_text_hash=text_hash,
            source_text_length=text_length,
        )

        try:
            generated = await self.flashcard_generator.generate_flashcards(source_text, model_name)
            self.generation_record_service.update_stats(
                generation_id, user_id, generated_count=len(generated)
            )
        except AIServiceError as e:
            logger.warning(
                "flashcard_generation_failed",
                generation_id=generation_id.value,
                user_id=user_id,
                model=model_name,
                error_code=e.code,
                error=e.message,
            )
            self.generation_record_service.log_error(
                user_id=user_id,
                model=model_name,
                source_text_hash=text_hash,
                source_text_length=text_length,
                error_code=e.code,
                error_message=e.user_message,
            )
            raise
        except Exception as e:
            logger.exception(
                "flashcard_generation_failed_unexpectedly",
                generation_id=generation_id.value,
                user_id=user_id,
                model=model_name,
            )
            self.generation_record_service.log_error(
                user_id=user_id,
                model=model_name,
                source_text_hash=text_hash,
                source_text_length=text_length,
                error_code=AIErrorCode.AI_ERROR.value,
                error_message=str(e) or type(e).__name__,
            )
            raise

        usage = self.flashcard_generator.usage()
        logger.info(
            "generation_cost",
            generation_id=generation_id.value,
            total_cost=usage.total_cost,
            total_tokens=usage.token_usage.total,
            limit_reached=usage.limit_reached,
        )

        candidates = [
            CandidateFlashcard(id=CandidateId(position), front=card.front, back=card.back)
            for position, card in enumerate(generated, start=1)
        ]
        return GenerationResult(
            generation_id=generation_id,
            flashcards=candidates,
            generated_count=len(candidates),
            source_text_length=text_length,
        )
