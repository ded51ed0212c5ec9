"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from app.clients import Pike13Client, TokenStore
from app.core.config import get_settings
from app.services import (
    FieldResolver,
    PersonUpdateService,
    SessionCredentials,
    TokenCipherService,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_pike13_client() -> Pike13Client:
    """Create a singleton Pike13 desk client."""
    return Pike13Client(_settings())


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the durable single-slot token store."""
    return TokenStore(_settings().token_file_path)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for the session cookie."""
    settings = _settings()
    secret = settings.session_secret or settings.client_secret
    return TokenCipherService(
        secret=secret, max_age_seconds=settings.session_max_age_seconds
    )


def get_session_credentials() -> SessionCredentials:
    """Build the request credential resolver."""
    return SessionCredentials(
        cipher=get_token_cipher_service(),
        store=get_token_store(),
        max_age_seconds=_settings().session_max_age_seconds,
    )


def get_field_resolver() -> FieldResolver:
    """Build a field resolver bound to the Pike13 client."""
    return FieldResolver(get_pike13_client())


def get_person_update_service() -> PersonUpdateService:
    """Build the person update service bound to the Pike13 client."""
    return PersonUpdateService(get_pike13_client())


__all__ = [
    "get_field_resolver",
    "get_person_update_service",
    "get_pike13_client",
    "get_session_credentials",
    "get_token_cipher_service",
    "get_token_store",
]
