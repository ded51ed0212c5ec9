try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from app.clients.pike13 import Pike13Client
from app.core.errors import ConfigurationError, Pike13APIError


def test_authorization_url_targets_tenant(pike13_client) -> None:
    url = urlparse(pike13_client.build_authorization_url())

    assert url.scheme == "https"
    assert url.netloc == "testclub.pike13.com"
    assert url.path == "/oauth/authorize"
    assert parse_qs(url.query) == {
        "client_id": ["test-client-id"],
        "redirect_uri": ["http://localhost:3000/auth/pike13/callback"],
        "response_type": ["code"],
    }


def test_missing_subdomain_is_a_configuration_error(settings) -> None:
    client = Pike13Client(settings.model_copy(update={"pike13_subdomain": None}))

    with pytest.raises(ConfigurationError, match="PIKE13_SUBDOMAIN not set"):
        client.build_authorization_url()


@pytest.mark.anyio
async def test_missing_subdomain_fails_before_network(settings) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    client = Pike13Client(
        settings.model_copy(update={"pike13_subdomain": ""}),
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(ConfigurationError):
        await client.get("/custom_fields", "token")
    assert calls == []


@pytest.mark.anyio
async def test_get_attaches_bearer_token_and_query(pike13_client, fake_pike13) -> None:
    await pike13_client.get("/locations", "abc123", params={"per_page": 10})

    request = fake_pike13.requests[-1]
    assert request.headers["authorization"] == "Bearer abc123"
    assert str(request.url) == "https://testclub.pike13.com/api/v2/desk/locations?per_page=10"


@pytest.mark.anyio
async def test_patch_sends_json_body(pike13_client, fake_pike13) -> None:
    fake_pike13.add_person(7)

    await pike13_client.patch("/people/7", "abc123", {"person": {"location_id": 3}})

    request = fake_pike13.requests[-1]
    assert request.method == "PATCH"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"person": {"location_id": 3}}
    assert fake_pike13.people["7"]["location_id"] == 3


@pytest.mark.anyio
async def test_http_errors_carry_remote_payload(pike13_client) -> None:
    with pytest.raises(Pike13APIError) as exc_info:
        await pike13_client.get_person("abc123", 404404)

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == {"errors": ["Person not found"]}


@pytest.mark.anyio
async def test_transport_errors_are_wrapped(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = Pike13Client(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(Pike13APIError) as exc_info:
        await client.list_locations("abc123")

    assert exc_info.value.status_code is None
    assert exc_info.value.detail == "connection refused"


@pytest.mark.anyio
async def test_exchange_authorization_code_posts_credentials(
    pike13_client, fake_pike13
) -> None:
    token = await pike13_client.exchange_authorization_code("the-code")

    assert token["access_token"] == "pike13-access"
    request = fake_pike13.requests[-1]
    assert request.url.path == "/oauth/token"
    assert json.loads(request.content) == {
        "grant_type": "authorization_code",
        "code": "the-code",
        "redirect_uri": "http://localhost:3000/auth/pike13/callback",
        "client_id": "test-client-id",
        "client_secret": "test-client-secret",
    }


@pytest.mark.anyio
async def test_get_person_returns_none_for_empty_result(settings) -> None:
    client = Pike13Client(
        settings,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"people": []})),
    )

    assert await client.get_person("abc123", 1) is None


@pytest.mark.anyio
async def test_non_json_success_body_is_returned_as_text(pike13_client, fake_pike13) -> None:
    fake_pike13.add_person(7)
    fake_pike13.plain_text_patches = True

    result = await pike13_client.patch("/people/7", "abc123", {"person": {"location_id": 3}})

    assert result == "OK"
    assert fake_pike13.people["7"]["location_id"] == 3


@pytest.mark.anyio
async def test_non_json_error_body_is_kept_as_detail(settings) -> None:
    client = Pike13Client(
        settings,
        transport=httpx.MockTransport(
            lambda request: httpx.Response(502, text="Bad Gateway")
        ),
    )

    with pytest.raises(Pike13APIError) as exc_info:
        await client.list_locations("abc123")

    assert exc_info.value.status_code == 502
    assert exc_info.value.detail == "Bad Gateway"
