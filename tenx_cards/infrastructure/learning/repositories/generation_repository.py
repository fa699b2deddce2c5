"""Repositories for generation records and generation error logs."""

import logging
from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenx_cards.domain.common.value_objects import GenerationId, UserId
from tenx_cards.domain.learning.entities.generation import Generation
from tenx_cards.domain.learning.entities.generation_error_log import GenerationErrorLog
from tenx_cards.exceptions import DatabaseError
from tenx_cards.infrastructure.learning.mappers.generation_mapper import (
    GenerationErrorLogMapper,
    GenerationMapper,
)
from tenx_cards.models import Generation as GenerationORM

logger = logging.getLogger(__name__)


class GenerationRepository:
    """Repository for Generation domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationMapper()

    def find_by_id(self, generation_id: GenerationId, user_id: UserId) -> Generation | None:
        """
        Find a generation by ID with user ownership check.

        Args:
            generation_id: The generation ID
            user_id: The user ID for ownership verification

        Returns:
            Generation entity if found and owned by user, None otherwise
        """
        stmt = select(GenerationORM).where(
            GenerationORM.id == generation_id.value,
            GenerationORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_owned_ids(self, generation_ids: Collection[int], user_id: UserId) -> set[int]:
        """
        Filter generation IDs down to those owned by the user.

        Args:
            generation_ids: Candidate IDs
            user_id: The owner

        Returns:
            IDs that exist and belong to ``user_id``
        """
        if not generation_ids:
            return set()
        stmt = select(GenerationORM.id).where(
            GenerationORM.id.in_(list(generation_ids)),
            GenerationORM.user_id == user_id.value,
        )
        return set(self.db.execute(stmt).scalars().all())

    def save(self, generation: Generation) -> Generation:
        """
        Save a generation (create or update counters).

        Raises:
            DatabaseError: If the write fails
        """
        try:
            if not generation.id.is_persisted():
                orm_model = self.mapper.to_orm(generation)
                self.db.add(orm_model)
            else:
                orm_model = self.db.get(GenerationORM, generation.id.value)
                if not orm_model:
                    raise ValueError(f"Generation {generation.id.value} not found")
                self.mapper.to_orm(generation, orm_model)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save generation: {e!s}", exc_info=True)
            raise DatabaseError("Nie udało się zapisać rekordu generacji") from e

        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)


class GenerationErrorLogRepository:
    """Repository for GenerationErrorLog domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationErrorLogMapper()

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        orm_model = self.mapper.to_orm(error_log)
        self.db.add(orm_model)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("Nie udało się zapisać logu błędu generacji") from e
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
