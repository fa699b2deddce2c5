from collections.abc import Collection
from typing import Protocol

from tenx_cards.domain.common.value_objects import GenerationId, UserId
from tenx_cards.domain.learning.entities.generation import Generation
from tenx_cards.domain.learning.entities.generation_error_log import GenerationErrorLog


class GenerationRepositoryProtocol(Protocol):
    def find_by_id(self, generation_id: GenerationId, user_id: UserId) -> Generation | None: ...

    def find_owned_ids(self, generation_ids: Collection[int], user_id: UserId) -> set[int]:
        """Return the subset of ``generation_ids`` that exist and belong to ``user_id``."""
        ...

    def save(self, generation: Generation) -> Generation: ...


class GenerationErrorLogRepositoryProtocol(Protocol):
    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog: ...
