from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from tenx_cards.application.identity.use_cases import (
    AuthenticationUseCase,
    PasswordManagementUseCase,
    RegisterUserUseCase,
)
from tenx_cards.application.learning.services.flashcard_service import FlashcardService
from tenx_cards.application.learning.services.generation_record_service import (
    GenerationRecordService,
)
from tenx_cards.application.learning.use_cases.generate_flashcards_use_case import (
    GenerateFlashcardsUseCase,
)
from tenx_cards.config import get_settings
from tenx_cards.infrastructure.ai.factory import (
    create_completion_client,
    create_flashcard_generator,
)
from tenx_cards.infrastructure.identity.auth.password_service import PepperedPasswordHasher
from tenx_cards.infrastructure.identity.repositories.user_repository import UserRepository
from tenx_cards.infrastructure.identity.services.reset_notifier import (
    LoggingPasswordResetNotifier,
)
from tenx_cards.infrastructure.identity.services.token_service_adapter import TokenServiceAdapter
from tenx_cards.infrastructure.learning.repositories import (
    FlashcardRepository,
    GenerationErrorLogRepository,
    GenerationRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Request-scoped session, overridden per request by inject_use_case
    db = providers.Dependency(instance_of=Session)

    settings = providers.Singleton(get_settings)

    # Repositories
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)
    generation_repository = providers.Factory(GenerationRepository, db=db)
    generation_error_log_repository = providers.Factory(GenerationErrorLogRepository, db=db)

    # Identity repositories and services
    user_repository = providers.Factory(UserRepository, db=db)
    password_service = providers.Singleton(
        PepperedPasswordHasher, pepper=settings.provided.PASSWORD_PEPPER
    )
    token_service = providers.Singleton(TokenServiceAdapter)
    password_reset_notifier = providers.Singleton(LoggingPasswordResetNotifier)

    # AI services, shared across requests so the cost counters accumulate
    completion_client = providers.Singleton(create_completion_client, settings=settings)
    flashcard_generator = providers.Singleton(
        create_flashcard_generator,
        settings=settings,
        completion_client=completion_client,
    )

    # Learning module services and use cases
    generation_record_service = providers.Factory(
        GenerationRecordService,
        generation_repository=generation_repository,
        error_log_repository=generation_error_log_repository,
    )

    flashcard_service = providers.Factory(
        FlashcardService,
        flashcard_repository=flashcard_repository,
        generation_repository=generation_repository,
    )

    generate_flashcards_use_case = providers.Factory(
        GenerateFlashcardsUseCase,
        generation_record_service=generation_record_service,
        flashcard_generator=flashcard_generator,
    )

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )

    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )

    password_management_use_case = providers.Factory(
        PasswordManagementUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
        reset_notifier=password_reset_notifier,
    )


container = Container()
