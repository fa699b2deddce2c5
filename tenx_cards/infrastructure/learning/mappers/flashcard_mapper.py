"""Mapper for Flashcard ORM ↔ Domain conversion."""

from tenx_cards.domain.common.value_objects import FlashcardId, GenerationId, UserId
from tenx_cards.domain.learning.entities.flashcard import Flashcard, FlashcardSource
from tenx_cards.models import Flashcard as FlashcardORM


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.create_with_id(
            id=FlashcardId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            front=orm_model.front,
            back=orm_model.back,
            source=FlashcardSource(orm_model.source),
            generation_id=GenerationId(orm_model.generation_id)
            if orm_model.generation_id
            else None,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Flashcard, orm_model: FlashcardORM | None = None
    ) -> FlashcardORM:
        """Convert domain entity to ORM model. The owner is never reassigned."""
        if orm_model:
            orm_model.front = domain_entity.front
            orm_model.back = domain_entity.back
            orm_model.source = domain_entity.source.value
            orm_model.generation_id = (
                domain_entity.generation_id.value if domain_entity.generation_id else None
            )
            return orm_model

        return FlashcardORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            front=domain_entity.front,
            back=domain_entity.back,
            source=domain_entity.source.value,
            generation_id=domain_entity.generation_id.value
            if domain_entity.generation_id
            else None,
        )
