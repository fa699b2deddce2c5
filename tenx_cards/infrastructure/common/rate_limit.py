"""Shared rate limiter for the auth endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from tenx_cards.config import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().ENVIRONMENT != "test",
)
