"""Service layer exports."""

from .credentials import SessionCredentials, resolve_access_token
from .field_resolver import FieldResolver
from .person_updates import PersonUpdateService, UpdateResult
from .token_cipher import TokenCipherService

__all__ = [
    "FieldResolver",
    "PersonUpdateService",
    "SessionCredentials",
    "TokenCipherService",
    "UpdateResult",
    "resolve_access_token",
]
