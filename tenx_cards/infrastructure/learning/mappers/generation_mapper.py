"""Mappers for Generation and GenerationErrorLog ORM ↔ Domain conversion."""

from tenx_cards.domain.common.value_objects import (
    ContentHash,
    GenerationErrorLogId,
    GenerationId,
    UserId,
)
from tenx_cards.domain.learning.entities.generation import Generation
from tenx_cards.domain.learning.entities.generation_error_log import GenerationErrorLog
from tenx_cards.models import Generation as GenerationORM
from tenx_cards.models import GenerationErrorLog as GenerationErrorLogORM


class GenerationMapper:
    def to_domain(self, orm_model: GenerationORM) -> Generation:
        return Generation(
            id=GenerationId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model=orm_model.model,
            source_text_hash=ContentHash(orm_model.source_text_hash),
            source_text_length=orm_model.source_text_length,
            generated_count=orm_model.generated_count,
            accepted_unedited_count=orm_model.accepted_unedited_count,
            accepted_edited_count=orm_model.accepted_edited_count,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Generation, orm_model: GenerationORM | None = None
    ) -> GenerationORM:
        if orm_model:
            # Only the counters change after creation
            orm_model.generated_count = domain_entity.generated_count
            orm_model.accepted_unedited_count = domain_entity.accepted_unedited_count
            orm_model.accepted_edited_count = domain_entity.accepted_edited_count
            return orm_model

        return GenerationORM(
            id=domain_entity.id.value if domain_entity.id.is_persisted() else None,
            user_id=domain_entity.user_id.value,
            model=domain_entity.model,
            source_text_hash=domain_entity.source_text_hash.value,
            source_text_length=domain_entity.source_text_length,
            generated_count=domain_entity.generated_count,
            accepted_unedited_count=domain_entity.accepted_unedited_count,
            accepted_edited_count=domain_entity.accepted_edited_count,
        )


class GenerationErrorLogMapper:
    def to_domain(self, orm_model: GenerationErrorLogORM) -> GenerationErrorLog:
        return GenerationErrorLog(
            id=GenerationErrorLogId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model=orm_model.model,
            source_text_hash=ContentHash(orm_model.source_text_hash),
            source_text_length=orm_model.source_text_length,
            error_code=orm_model.error_code,
            error_message=orm_model.error_message,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: GenerationErrorLog) -> GenerationErrorLogORM:
        return GenerationErrorLogORM(
            user_id=domain_entity.user_id.value,
            model=domain_entity.model,
            source_text_hash=domain_entity.source_text_hash.value,
            source_text_length=domain_entity.source_text_length,
            error_code=domain_entity.error_code,
            error_message=domain_entity.error_message,
        )
