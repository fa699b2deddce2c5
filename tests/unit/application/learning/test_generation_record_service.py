"""Tests for GenerationRecordService."""

import pytest
from sqlalchemy.orm import Session

from tenx_cards import models
from tenx_cards.application.learning.services.generation_record_service import (
    GenerationNotFoundError,
    GenerationRecordService,
)
from tenx_cards.domain.common.exceptions import ValidationError
from tenx_cards.domain.common.value_objects import ContentHash, GenerationId
from tenx_cards.domain.learning.entities.generation_error_log import GenerationErrorLog
from tenx_cards.infrastructure.learning.repositories import (
    GenerationErrorLogRepository,
    GenerationRepository,
)

MODEL = "google/gemma-3n-e2b-it:free"
TEXT_HASH = ContentHash.compute("source text")


class FailingErrorLogRepository:
    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        raise RuntimeError("database is gone")


@pytest.fixture
def service(db_session: Session) -> GenerationRecordService:
    return GenerationRecordService(
        GenerationRepository(db_session), GenerationErrorLogRepository(db_session)
    )


class TestCreateGeneration:
    """Test suite for creating generation records."""

    def test_creates_zeroed_record(
        self, service: GenerationRecordService, db_session: Session, test_user: models.User
    ) -> None:
        generation_id = service.create_generation(
            user_id=test_user.id,
            model=MODEL,
            source_text_hash=TEXT_HASH,
            source_text_length=1500,
        )

        assert generation_id.is_persisted()
        row = db_session.get(models.Generation, generation_id.value)
        assert row is not None
        assert row.user_id == test_user.id
        assert row.source_text_hash == str(TEXT_HASH)
        assert row.source_text_length == 1500
        assert row.generated_count == 0
        assert row.accepted_unedited_count == 0
        assert row.accepted_edited_count == 0


class TestUpdateStats:
    """Test suite for updating generation counters."""

    def test_updates_counters(
        self, service: GenerationRecordService, test_user: models.User
    ) -> None:
        generation_id = service.create_generation(test_user.id, MODEL, TEXT_HASH, 1500)

        updated = service.update_stats(generation_id, test_user.id, generated_count=5)

        assert updated.generated_count == 5
        stored = service.get_generation(generation_id.value, test_user.id)
        assert stored is not None
        assert stored.generated_count == 5
        assert stored.accepted_unedited_count == 0

    def test_foreign_generation_not_found(
        self,
        service: GenerationRecordService,
        test_user: models.User,
        other_user: models.User,
    ) -> None:
        generation_id = service.create_generation(other_user.id, MODEL, TEXT_HASH, 1500)

        with pytest.raises(GenerationNotFoundError):
            service.update_stats(generation_id, test_user.id, generated_count=5)

    def test_missing_generation_not_found(
        self, service: GenerationRecordService, test_user: models.User
    ) -> None:
        with pytest.raises(GenerationNotFoundError):
            service.update_stats(GenerationId(999), test_user.id, generated_count=1)

    def test_negative_count_rejected(
        self, service: GenerationRecordService, test_user: models.User
    ) -> None:
        generation_id = service.create_generation(test_user.id, MODEL, TEXT_HASH, 1500)

        with pytest.raises(ValidationError):
            service.update_stats(generation_id, test_user.id, generated_count=-1)


class TestLogError:
    """Test suite for recording failed generations."""

    def test_writes_error_row(
        self, service: GenerationRecordService, db_session: Session, test_user: models.User
    ) -> None:
        service.log_error(
            user_id=test_user.id,
            model=MODEL,
            source_text_hash=TEXT_HASH,
            source_text_length=1500,
            error_code="TIMEOUT_ERROR",
            error_message="Upłynął limit czasu",
        )

        rows = db_session.query(models.GenerationErrorLog).all()
        assert len(rows) == 1
        assert rows[0].user_id == test_user.id
        assert rows[0].error_code == "TIMEOUT_ERROR"
        assert rows[0].error_message == "Upłynął limit czasu"

    def test_write_failure_is_swallowed(self, db_session: Session) -> None:
        service = GenerationRecordService(
            GenerationRepository(db_session), FailingErrorLogRepository()
        )

        service.log_error(
            user_id=1,
            model=MODEL,
            source_text_hash=TEXT_HASH,
            source_text_length=1500,
            error_code="API_ERROR",
        )
