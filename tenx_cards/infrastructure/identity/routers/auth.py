import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from tenx_cards.application.identity.use_cases import (
    AuthenticationUseCase,
    PasswordManagementUseCase,
    RegisterUserUseCase,
)
from tenx_cards.core import container
from tenx_cards.domain.common.exceptions import DomainError
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    PasswordVerificationError,
    RegistrationDisabledError,
)
from tenx_cards.exceptions import AppError
from tenx_cards.infrastructure.common.di import inject_use_case
from tenx_cards.infrastructure.common.rate_limit import limiter
from tenx_cards.infrastructure.identity.auth.token_service import TokenPair
from tenx_cards.infrastructure.identity.dependencies import get_optional_user
from tenx_cards.infrastructure.identity.schemas import (
    MessageResponse,
    PasswordResetRequest,
    PasswordUpdateRequest,
    UserLoginRequest,
    UserRegisterRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # type: ignore[misc]
async def register(
    request: Request,
    register_data: UserRegisterRequest,
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> TokenPair:
    """Create an account and return a token for immediate sign-in."""
    try:
        _, token_pair = use_case.register_user(register_data.email, register_data.password)
        return token_pair
    except RegistrationDisabledError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from None
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from None
    except (AppError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to register user: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Wystąpił nieoczekiwany błąd. Spróbuj ponownie później.",
        ) from e


@router.post("/login")
@limiter.limit("5/minute")  # type: ignore[misc]
async def login(
    request: Request,
    credentials: UserLoginRequest,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> TokenPair:
    try:
        _, token_pair = use_case.authenticate_user(credentials.email, credentials.password)
        return token_pair
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from None


@router.post("/logout")
async def logout() -> MessageResponse:
    """
    Sign out.

    Access tokens are stateless, so the client simply discards its token;
    it stays valid until it expires.
    """
    return MessageResponse(message="Wylogowano pomyślnie")


@router.post("/reset-password")
@limiter.limit("5/minute")  # type: ignore[misc]
async def request_password_reset(
    request: Request,
    reset_data: PasswordResetRequest,
    use_case: PasswordManagementUseCase = Depends(
        inject_use_case(container.password_management_use_case)
    ),
) -> MessageResponse:
    """Send a reset link; the answer is the same whether or not the email exists."""
    use_case.request_password_reset(reset_data.email)
    return MessageResponse(
        message="Jeśli konto istnieje, wysłaliśmy link do resetowania hasła"
    )


@router.post("/update-password")
@limiter.limit("5/minute")  # type: ignore[misc]
async def update_password(
    request: Request,
    update_data: PasswordUpdateRequest,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    use_case: PasswordManagementUseCase = Depends(
        inject_use_case(container.password_management_use_case)
    ),
) -> MessageResponse:
    """
    Change the password.

    Signed-in users confirm with their current password; everyone else needs
    the token from a reset link.
    """
    try:
        if current_user is not None and update_data.current_password:
            use_case.change_password(
                current_user.id.value, update_data.current_password, update_data.new_password
            )
        elif update_data.reset_token:
            use_case.reset_password(update_data.reset_token, update_data.new_password)
        else:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Wymagane jest zalogowanie lub token resetujący",
                headers={"WWW-Authenticate": "Bearer"},
            )
    except PasswordVerificationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from None
    except InvalidResetTokenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from None

    return MessageResponse(message="Hasło zostało zmienione")
