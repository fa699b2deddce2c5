"""Feature flags module for centralized feature toggle management."""

from typing import Literal

from pydantic import BaseModel, Field

from tenx_cards.config import get_settings


class FeatureFlags(BaseModel):
    """Pydantic model defining all feature flags in the application."""

    mock_ai: bool = Field(..., description="Whether flashcards come from canned data")
    user_registrations: bool = Field(..., description="Whether user registration is enabled")


FeatureFlagKey = Literal["mock_ai", "user_registrations"]


def get_feature_flags() -> FeatureFlags:
    """Get current feature flags based on application configuration."""
    settings = get_settings()

    return FeatureFlags(
        mock_ai=settings.ai_mock_mode,
        user_registrations=settings.ALLOW_USER_REGISTRATIONS,
    )


def get_feature_flag(key: FeatureFlagKey) -> bool:
    return getattr(get_feature_flags(), key)


def is_mock_ai_enabled() -> bool:
    """Check if flashcard generation runs against canned data."""
    return get_feature_flag("mock_ai")


def is_user_registrations_enabled() -> bool:
    """Check if user registrations are enabled."""
    return get_feature_flag("user_registrations")
