"""Errors raised by account registration, sign-in and password management."""

from tenx_cards.domain.common.exceptions import DomainError, EntityNotFoundError


class UserNotFoundError(EntityNotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id)


class EmailAlreadyExistsError(DomainError):
    """Sign-up with an e-mail address that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__("Ten adres email jest już zarejestrowany", {"email": email})
        self.email = email


class InvalidCredentialsError(DomainError):
    """Unknown e-mail or wrong password; the message never says which."""

    def __init__(self) -> None:
        super().__init__("Nieprawidłowy email lub hasło")


class PasswordVerificationError(DomainError):
    """The current password given with a password change does not match."""

    def __init__(self) -> None:
        super().__init__("Obecne hasło jest nieprawidłowe")


class InvalidResetTokenError(DomainError):
    """Reset token is malformed, expired, or was issued for an older password."""

    def __init__(self) -> None:
        super().__init__("Link do resetowania hasła jest nieprawidłowy lub wygasł")


class RegistrationDisabledError(DomainError):
    """Sign-up attempted while ALLOW_USER_REGISTRATIONS is off."""

    def __init__(self) -> None:
        super().__init__("Rejestracja użytkowników jest obecnie wyłączona")
