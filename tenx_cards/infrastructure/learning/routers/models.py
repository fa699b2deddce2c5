"""API route listing the models flashcards can be generated with."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenx_cards.core import container
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.exceptions import AppError
from tenx_cards.infrastructure.ai.flashcard_generator import FlashcardGenerationService
from tenx_cards.infrastructure.identity.dependencies import get_current_user
from tenx_cards.infrastructure.learning.schemas import ModelInfo, ModelListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/models", tags=["models"])


def get_flashcard_generator() -> FlashcardGenerationService:
    return container.flashcard_generator()


@router.get("")
async def list_models(
    current_user: Annotated[User, Depends(get_current_user)],
    generator: Annotated[FlashcardGenerationService, Depends(get_flashcard_generator)],
) -> ModelListResponse:
    """List free provider models, or only the default model in mock mode."""
    try:
        models = await generator.available_models()
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to list models: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Wystąpił nieoczekiwany błąd. Spróbuj ponownie później.",
        ) from e

    return ModelListResponse(
        data=[ModelInfo(id=m.id, name=m.name or m.id) for m in models],
        default_model=generator.default_model,
    )
