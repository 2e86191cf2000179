"""Shared fixtures: an isolated app and store per test."""

import pytest
from fastapi.testclient import TestClient

from evaluaciones.config import Settings
from evaluaciones.database import create_schema, make_engine, make_session_maker
from evaluaciones.main import create_app

ACCESS_CODE = "codigo-docente-test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        session_secret="test-session-secret",
        access_code_docente=ACCESS_CODE,
        login_rate_limit="20/15 minutes",
    )


@pytest.fixture
async def db(settings):
    engine = make_engine(settings)
    await create_schema(engine)
    session_maker = make_session_maker(engine)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def teacher_client(client):
    response = client.post("/login", data={"code": ACCESS_CODE}, follow_redirects=False)
    assert response.status_code == 302
    return client
