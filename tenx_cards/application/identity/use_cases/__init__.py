from .authentication_use_case import AuthenticationUseCase
from .password_management_use_case import PasswordManagementUseCase
from .register_user_use_case import RegisterUserUseCase

__all__ = [
    "AuthenticationUseCase",
    "PasswordManagementUseCase",
    "RegisterUserUseCase",
]
