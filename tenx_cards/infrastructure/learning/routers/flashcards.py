"""API routes for flashcard management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tenx_cards.application.learning.services.flashcard_service import FlashcardService
from tenx_cards.application.learning.use_cases.dtos import CreateFlashcardCommand
from tenx_cards.core import container
from tenx_cards.domain.common.exceptions import DomainError
from tenx_cards.domain.common.value_objects import GenerationId
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.domain.learning.entities.flashcard import Flashcard as FlashcardEntity
from tenx_cards.exceptions import AppError, FlashcardNotFoundError, ValidationError
from tenx_cards.infrastructure.common.di import inject_use_case
from tenx_cards.infrastructure.identity.dependencies import get_current_user
from tenx_cards.infrastructure.learning.schemas import (
    Flashcard,
    FlashcardDeleteResponse,
    FlashcardListResponse,
    FlashcardResponse,
    FlashcardsCreateRequest,
    FlashcardUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])

FlashcardIdParam = Annotated[int | None, Query(alias="id", ge=1)]


def _require_id(flashcard_id: int | None) -> int:
    if flashcard_id is None:
        message = "ID fiszki jest wymagane"
        raise ValidationError(message, summary=message)
    return flashcard_id


def _to_schema(entity: FlashcardEntity) -> Flashcard:
    return Flashcard(
        id=entity.id.value,
        front=entity.front,
        back=entity.back,
        source=entity.source,
        generation_id=entity.generation_id.value if entity.generation_id else None,
        user_id=entity.user_id.value,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Wystąpił nieoczekiwany błąd. Spróbuj ponownie później.",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_flashcards(
    request: FlashcardsCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: FlashcardService = Depends(inject_use_case(container.flashcard_service)),
) -> FlashcardListResponse:
    """
    Save a batch of flashcards for the current user.

    Cards produced by a generation carry its ``generation_id``; manual cards
    leave it empty.
    """
    commands = [
        CreateFlashcardCommand(
            user_id=current_user.id,
            front=item.front,
            back=item.back,
            source=item.source,
            generation_id=GenerationId(item.generation_id) if item.generation_id else None,
        )
        for item in request.flashcards
    ]
    try:
        created = service.create_flashcards(commands)
    except (AppError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("create flashcards", e) from e

    data = [_to_schema(card) for card in created]
    return FlashcardListResponse(data=data, count=len(data))


@router.get("")
def get_flashcards(
    current_user: Annotated[User, Depends(get_current_user)],
    flashcard_id: FlashcardIdParam = None,
    service: FlashcardService = Depends(inject_use_case(container.flashcard_service)),
) -> FlashcardResponse | FlashcardListResponse:
    """Return one flashcard when ``id`` is given, otherwise all of them."""
    try:
        if flashcard_id is not None:
            card = service.get_flashcard_by_id(flashcard_id, current_user.id.value)
            if card is None:
                raise FlashcardNotFoundError(flashcard_id)
            return FlashcardResponse(data=_to_schema(card))

        cards = service.get_user_flashcards(current_user.id.value)
    except (AppError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("fetch flashcards", e) from e

    data = [_to_schema(card) for card in cards]
    return FlashcardListResponse(data=data, count=len(data))


@router.put("")
def update_flashcard(
    request: FlashcardUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    flashcard_id: FlashcardIdParam = None,
    service: FlashcardService = Depends(inject_use_case(container.flashcard_service)),
) -> FlashcardResponse:
    """Update front, back or source of one flashcard."""
    target_id = _require_id(flashcard_id)
    try:
        card = service.update_flashcard(
            flashcard_id=target_id,
            user_id=current_user.id.value,
            front=request.front,
            back=request.back,
            source=request.source,
        )
    except (AppError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("update flashcard", e) from e

    return FlashcardResponse(data=_to_schema(card))


@router.delete("")
def delete_flashcard(
    current_user: Annotated[User, Depends(get_current_user)],
    flashcard_id: FlashcardIdParam = None,
    service: FlashcardService = Depends(inject_use_case(container.flashcard_service)),
) -> FlashcardDeleteResponse:
    """Delete one flashcard of the current user."""
    target_id = _require_id(flashcard_id)
    try:
        service.delete_flashcard(target_id, current_user.id.value)
    except (AppError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("delete flashcard", e) from e

    return FlashcardDeleteResponse(success=True, message="Fiszka została usunięta")
