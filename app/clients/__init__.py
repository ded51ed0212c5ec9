"""Expose constructed client wrappers."""

from .pike13 import Pike13Client
from .token_store import TokenStore

__all__ = [
    "Pike13Client",
    "TokenStore",
]
