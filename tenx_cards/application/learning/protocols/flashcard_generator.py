from typing import Protocol

from tenx_cards.application.learning.use_cases.dtos import CostUsage, GeneratedFlashcard


class FlashcardGeneratorProtocol(Protocol):
    """Turns source text into candidate flashcards."""

    @property
    def is_mock_mode(self) -> bool: ...

    @property
    def default_model(self) -> str: ...

    async def generate_flashcards(
        self, source_text: str, model: str | None = None
    ) -> list[GeneratedFlashcard]: ...

    def usage(self) -> CostUsage: ...
