"""Shared fixtures for the API service tests.

Every test gets its own in-memory SQLite database, so tests never depend on
each other's data or on an external Postgres instance.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from services.api.app.db import build_engine, build_session_factory, init_schema
from services.api.app.main import create_app
from services.api.app.models import Player, PlayerProfile
from services.api.app.service import PlayerService
from services.api.app.settings import Settings
from services.api.app.store import PlayerStore


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def client(settings):
    """Sync test client; entering it runs the lifespan (schema creation)."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(session) -> PlayerStore:
    return PlayerStore(session)


@pytest.fixture
def service(store) -> PlayerService:
    return PlayerService(store)


@pytest.fixture
def federer(store) -> Player:
    """A persisted player that owns a profile."""
    return store.insert(
        Player(
            name="Roger Federer",
            nationality="Switzerland",
            birth_date=date(1981, 8, 8),
            titles=20,
            player_profile=PlayerProfile(twitter="@rogerfederer"),
        )
    )


@pytest.fixture
def nadal(store) -> Player:
    return store.insert(
        Player(name="Rafael Nadal", nationality="Spain", birth_date=date(1986, 6, 3), titles=22)
    )
