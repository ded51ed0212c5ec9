"""
Access-token resolution for inbound requests.

A request is authenticated by the token bound to its session cookie, or,
failing that, by the token written to the durable store by the most recent
authorization. Tokens are never checked for expiry or refreshed; a stale
token surfaces as an authorization failure from Pike13.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request, Response

from app.clients.token_store import TokenStore
from app.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "sess"


def resolve_access_token(session_token: Optional[str], store: TokenStore) -> Optional[str]:
    """Prefer the session-bound token, then the durable store."""
    if session_token:
        return session_token
    return store.get_access_token()


class SessionCredentials:
    """Bind access tokens to the caller's encrypted session cookie."""

    def __init__(
        self,
        *,
        cipher: TokenCipherService,
        store: TokenStore,
        max_age_seconds: int,
        cookie_name: str = SESSION_COOKIE_NAME,
    ) -> None:
        self._cipher = cipher
        self._store = store
        self._max_age = max_age_seconds
        self._cookie_name = cookie_name

    def session_token(self, request: Request) -> Optional[str]:
        cookie = request.cookies.get(self._cookie_name)
        if not cookie:
            return None
        try:
            return self._cipher.decrypt(cookie)
        except ValueError:
            logger.info("Ignoring unreadable session cookie")
            return None

    def resolve(self, request: Request) -> Optional[str]:
        return resolve_access_token(self.session_token(request), self._store)

    def remember(self, response: Response, token_payload: Dict[str, Any]) -> None:
        """Bind a freshly issued token to the session and the durable store."""
        access_token = token_payload.get("access_token")
        if access_token:
            response.set_cookie(
                key=self._cookie_name,
                value=self._cipher.encrypt(access_token),
                max_age=self._max_age,
                httponly=True,
                samesite="lax",
            )
        self._store.save(token_payload)


__all__ = ["SESSION_COOKIE_NAME", "SessionCredentials", "resolve_access_token"]
