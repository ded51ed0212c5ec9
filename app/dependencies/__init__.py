"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_field_resolver,
    get_person_update_service,
    get_pike13_client,
    get_session_credentials,
    get_token_cipher_service,
    get_token_store,
)
from .config import get_app_settings, get_preferred_field_name

__all__ = [
    "get_app_settings",
    "get_field_resolver",
    "get_person_update_service",
    "get_preferred_field_name",
    "get_pike13_client",
    "get_session_credentials",
    "get_token_cipher_service",
    "get_token_store",
]
