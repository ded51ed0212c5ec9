"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
    from .fake_pike13 import FakePike13
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401
    from fake_pike13 import FakePike13  # type: ignore

import pytest

from app.clients.pike13 import Pike13Client
from app.core.config import get_settings


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture()
def settings():
    return get_settings().model_copy(update={"usa_fencing_field_name": None})


@pytest.fixture()
def fake_pike13() -> FakePike13:
    return FakePike13()


@pytest.fixture()
def pike13_client(settings, fake_pike13) -> Pike13Client:
    return Pike13Client(settings, transport=fake_pike13.transport)


@pytest.fixture()
def token_store(tmp_path):
    from app.clients.token_store import TokenStore

    return TokenStore(tmp_path / "last_token.json")


@pytest.fixture()
def app_overrides(settings, pike13_client, token_store):
    """Point the app at the fake Pike13 tenant and a temporary token file."""
    from app import dependencies
    from app.main import app
    from app.services import (
        FieldResolver,
        PersonUpdateService,
        SessionCredentials,
        TokenCipherService,
    )

    cipher = TokenCipherService(secret="session-secret", max_age_seconds=3600)
    state = {"settings": settings}

    app.dependency_overrides.update(
        {
            dependencies.get_app_settings: lambda: state["settings"],
            dependencies.get_pike13_client: lambda: pike13_client,
            dependencies.get_token_store: lambda: token_store,
            dependencies.get_session_credentials: lambda: SessionCredentials(
                cipher=cipher, store=token_store, max_age_seconds=3600
            ),
            dependencies.get_field_resolver: lambda: FieldResolver(pike13_client),
            dependencies.get_person_update_service: lambda: PersonUpdateService(
                pike13_client
            ),
        }
    )

    yield state

    app.dependency_overrides.clear()


@pytest.fixture()
async def api_client(app_overrides):
    import httpx

    from app.main import app

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
