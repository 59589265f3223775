import logging

from fastapi.testclient import TestClient

from app import db, server
from app.core.config import DEFAULT_ALLOWED_ORIGINS, DEFAULT_SEED_PATH, get_settings
from app.core.logging_config import configure_logging
from app.main import app


def test_settings_defaults():
    settings = get_settings()
    assert settings.port == 1234
    assert settings.host == "0.0.0.0"
    assert settings.allowed_origins == DEFAULT_ALLOWED_ORIGINS
    assert settings.movies_seed_path == DEFAULT_SEED_PATH
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", '["https://a.dev"]')
    monkeypatch.setenv("MOVIES_SEED_PATH", str(tmp_path / "seed.json"))
    settings = get_settings()
    assert settings.port == 8080
    assert settings.allowed_origins == ["https://a.dev"]
    assert settings.movies_seed_path == tmp_path / "seed.json"


def test_lowercase_port_variable(monkeypatch):
    monkeypatch.setenv("port", "4321")
    assert get_settings().port == 4321


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_configure_logging_sets_app_level():
    configure_logging("debug")
    assert logging.getLogger("app").level == logging.DEBUG
    configure_logging("info")


def test_lifespan_loads_seed_file(monkeypatch, tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text("[]", encoding="utf-8")
    monkeypatch.setenv("MOVIES_SEED_PATH", str(seed))
    monkeypatch.setattr(db, "_store", None)

    with TestClient(app) as client:
        assert client.get("/movies").json() == []
        assert len(db.get_store()) == 0


def test_default_seed_is_served(monkeypatch):
    monkeypatch.setattr(db, "_store", None)
    with TestClient(app) as client:
        movies = client.get("/movies").json()
    assert len(movies) == 10
    assert len({movie["id"] for movie in movies}) == 10


def test_serverless_entrypoint_exports_app():
    from api.index import app as exported

    assert exported is app


def test_server_logs_listening_address_to_stdout(monkeypatch, capsys):
    calls = []
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setattr(server.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    root = logging.getLogger()
    saved = root.handlers[:]
    root.handlers.clear()
    try:
        server.main()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
    finally:
        root.handlers.extend(saved)

    captured = capsys.readouterr()
    assert "Server listening on http://localhost:4000" in captured.out
    assert "Server listening" not in captured.err
    assert calls == [(("app.main:app",), {"host": "0.0.0.0", "port": 4000, "log_level": "info"})]
