import pytest
from fastapi.testclient import TestClient

from app.core.config import DEFAULT_SEED_PATH, get_settings
from app.db import MovieStore, get_store, load_seed_movies
from app.main import app


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    for name in ("PORT", "HOST", "ALLOWED_ORIGINS", "MOVIES_SEED_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return MovieStore()


@pytest.fixture
def seeded_store():
    return MovieStore(load_seed_movies(DEFAULT_SEED_PATH))


def _client_for(store):
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def client(store):
    yield _client_for(store)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(seeded_store):
    yield _client_for(seeded_store)
    app.dependency_overrides.clear()


@pytest.fixture
def movie_payload():
    return {
        "title": "X",
        "year": 2020,
        "director": "D",
        "duration": 100,
        "poster": "http://p",
        "genre": ["Drama"],
    }
