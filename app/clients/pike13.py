"""
Pike13 desk API client.

Covers the OAuth authorization-code flow and the handful of desk resources
the updater touches (custom fields, people, locations).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from app.core.config import AppSettings
from app.core.errors import Pike13APIError

logger = logging.getLogger(__name__)


def _body(response: httpx.Response) -> Any:
    """Parsed JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _as_object(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


class Pike13Client:
    """Issue authenticated requests against a single Pike13 tenant."""

    DESK_PREFIX = "/api/v2/desk"

    def __init__(
        self,
        settings: AppSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def base_url(self) -> str:
        """Tenant host; raises ``ConfigurationError`` without a subdomain."""
        return f"https://{self._settings.require_subdomain()}.pike13.com"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    def build_authorization_url(self) -> str:
        """Construct the Pike13 OAuth consent URL."""
        params = {
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "response_type": "code",
        }
        return f"{self.base_url}/oauth/authorize?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code for a token payload.

        The payload is returned as-is so it can be persisted verbatim; callers
        read ``access_token`` from it.
        """
        url = f"{self.base_url}/oauth/token"
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._settings.redirect_uri,
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
        }
        return _as_object(await self._send("POST", url, json=payload))

    async def get(
        self, path: str, access_token: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        url = f"{self.base_url}{self.DESK_PREFIX}{path}"
        return await self._send(
            "GET", url, headers=self._auth_headers(access_token), params=params or None
        )

    async def patch(self, path: str, access_token: str, payload: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{self.DESK_PREFIX}{path}"
        return await self._send(
            "PATCH", url, headers=self._auth_headers(access_token), json=payload
        )

    async def list_custom_fields(self, access_token: str) -> List[Dict[str, Any]]:
        data = await self.get("/custom_fields", access_token)
        return _as_object(data).get("custom_fields") or []

    async def get_person(self, access_token: str, person_id: int | str) -> Optional[Dict[str, Any]]:
        """Return the first person record for ``person_id`` or ``None``."""
        data = await self.get(f"/people/{person_id}", access_token)
        people = _as_object(data).get("people") or []
        return people[0] if people else None

    async def list_locations(self, access_token: str) -> List[Dict[str, Any]]:
        data = await self.get("/locations", access_token)
        return _as_object(data).get("locations") or []

    @staticmethod
    def _auth_headers(access_token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Pike13 %s %s failed: %s", method, url, exc)
            raise Pike13APIError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            logger.warning(
                "Pike13 %s %s returned HTTP %s", method, url, response.status_code
            )
            raise Pike13APIError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                payload=_body(response),
            )

        if not response.content:
            return None
        return _body(response)


__all__ = ["Pike13Client"]
