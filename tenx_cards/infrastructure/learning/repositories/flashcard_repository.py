"""Repository for Flashcard domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tenx_cards.domain.common.value_objects import FlashcardId, UserId
from tenx_cards.domain.learning.entities.flashcard import Flashcard
from tenx_cards.exceptions import DatabaseError, GenerationReferenceError
from tenx_cards.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from tenx_cards.models import Flashcard as FlashcardORM

logger = logging.getLogger(__name__)


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId) -> list[Flashcard]:
        """
        Get all flashcards of a user.

        Args:
            user_id: The owner

        Returns:
            List of flashcard entities ordered by created_at DESC
        """
        stmt = (
            select(FlashcardORM)
            .where(FlashcardORM.user_id == user_id.value)
            .order_by(FlashcardORM.created_at.desc(), FlashcardORM.id.desc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            flashcard: The flashcard entity to save

        Returns:
            Saved flashcard entity with database-generated values
        """
        if not flashcard.id.is_persisted():
            return self.save_all([flashcard])[0]

        orm_model = self.db.get(FlashcardORM, flashcard.id.value)
        if not orm_model:
            raise ValueError(f"Flashcard {flashcard.id.value} not found")
        self.mapper.to_orm(flashcard, orm_model)
        self._commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert new flashcards in one transaction.

        Raises:
            GenerationReferenceError: If a generation foreign key is rejected
            DatabaseError: On any other datastore failure
        """
        orm_models = [self.mapper.to_orm(flashcard) for flashcard in flashcards]
        self.db.add_all(orm_models)
        self._commit()
        for orm_model in orm_models:
            self.db.refresh(orm_model)
        logger.info(f"Inserted {len(orm_models)} flashcards")
        return [self.mapper.to_domain(orm_model) for orm_model in orm_models]

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            True if deleted, False if not found
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        flashcard_orm = self.db.execute(stmt).scalar_one_or_none()

        if not flashcard_orm:
            return False

        self.db.delete(flashcard_orm)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Flashcard write rejected by constraint: {e.orig}")
            if "generation" in str(e.orig).lower() or "foreign key" in str(e.orig).lower():
                raise GenerationReferenceError() from e
            raise DatabaseError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Flashcard write failed: {e!s}", exc_info=True)
            raise DatabaseError() from e
