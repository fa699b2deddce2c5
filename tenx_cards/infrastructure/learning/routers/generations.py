"""API routes for AI flashcard generation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenx_cards.application.learning.use_cases.generate_flashcards_use_case import (
    GenerateFlashcardsUseCase,
)
from tenx_cards.core import container
from tenx_cards.domain.common.exceptions import DomainError
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.exceptions import AppError
from tenx_cards.infrastructure.common.di import inject_use_case
from tenx_cards.infrastructure.identity.dependencies import get_current_user
from tenx_cards.infrastructure.learning.schemas import (
    CandidateFlashcardSchema,
    GenerationCreateRequest,
    GenerationCreateResponse,
    GenerationStats,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_generation(
    request: GenerationCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: GenerateFlashcardsUseCase = Depends(
        inject_use_case(container.generate_flashcards_use_case)
    ),
) -> GenerationCreateResponse:
    """
    Generate candidate flashcards from a piece of text.

    Nothing is saved as a flashcard here; the candidates are reviewed on the
    client and persisted through ``POST /flashcards``.
    """
    try:
        result = await use_case.generate(
            user_id=current_user.id.value,
            source_text=request.source_text,
            model=request.model,
        )
    except (AppError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to generate flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Wystąpił nieoczekiwany błąd. Spróbuj ponownie później.",
        ) from e

    return GenerationCreateResponse(
        generation_id=result.generation_id.value,
        flashcards=[
            CandidateFlashcardSchema(
                id=int(candidate.id),
                front=candidate.front,
                back=candidate.back,
                source=candidate.source,
            )
            for candidate in result.flashcards
        ],
        stats=GenerationStats(
            generated_count=result.generated_count,
            source_text_length=result.source_text_length,
        ),
    )
