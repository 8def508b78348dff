"""Shared fixtures: a fixed clock, per-test SQLite databases and an API client."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tasklist.core.config import Settings
from tasklist.core.database import Database
from tasklist.main import create_app

from .fakes import FixedClock


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture()
def client(settings: Settings, clock: FixedClock):
    with TestClient(create_app(settings, clock)) as test_client:
        yield test_client


@pytest.fixture()
async def database(settings: Settings):
    db = Database(settings)
    await db.create_all()
    yield db
    await db.dispose()
