"""Custom exception hierarchy for the 10x Cards application."""

from collections.abc import Iterable

from fastapi import HTTPException
from starlette import status


class AppError(Exception):
    """Base exception for all application errors.

    Every subclass carries the HTTP status and a stable machine-readable code,
    so the HTTP layer can render it without inspecting the concrete type.
    """

    code: str | None = None

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        *,
        code: str | None = None,
        summary: str | None = None,
    ) -> None:
        """Initialize exception with message, status code and optional error code."""
        self.message = message
        self.status_code = status_code
        if code is not None:
            self.code = code
        self.summary = summary
        super().__init__(self.message)


class ValidationError(AppError):
    """Input failed validation."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, summary: str | None = None) -> None:
        super().__init__(message, status_code=400, summary=summary or "Błąd walidacji")


class NotFoundError(AppError):
    """Resource not found error."""

    code = "NOT_FOUND"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404, summary="Nie znaleziono")


class FlashcardNotFoundError(NotFoundError):
    """Flashcard missing or owned by another user."""

    def __init__(self, flashcard_id: int | None = None) -> None:
        self.flashcard_id = flashcard_id
        super().__init__("Fiszka nie została znaleziona")


class ForeignKeyError(AppError):
    """A referenced row does not exist or belongs to another user."""

    code = "FOREIGN_KEY_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400, summary="Nieprawidłowe powiązanie")


class GenerationReferenceError(ForeignKeyError):
    """Flashcards reference generations the user does not own."""

    def __init__(self, generation_ids: Iterable[int] = ()) -> None:
        self.generation_ids = sorted(generation_ids)
        if self.generation_ids:
            ids = ", ".join(str(gid) for gid in self.generation_ids)
            message = (
                "Podane identyfikatory generacji nie istnieją lub nie należą "
                f"do tego użytkownika: {ids}"
            )
        else:
            message = "Podany generation_id jest nieprawidłowy lub nie należy do tego użytkownika"
        super().__init__(message)


class DatabaseError(AppError):
    """Datastore failure that is not a constraint violation."""

    code = "DATABASE_ERROR"

    def __init__(self, message: str = "Wystąpił błąd podczas operacji na bazie danych") -> None:
        super().__init__(message, status_code=500, summary="Błąd bazy danych")


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Nieprawidłowe dane uwierzytelniające",
    headers={"WWW-Authenticate": "Bearer"},
)
