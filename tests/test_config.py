import logging

from app.config import Settings
from app.logging_setup import setup_logging


def test_defaults(monkeypatch):
    for name in ("TASKS_PORT", "TASKS_DATABASE_URL", "TASKS_STATIC_DIR"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.database_url == "sqlite:///./tasks.db"
    assert settings.static_dir == "static"
    assert settings.metrics_enabled is True


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TASKS_PORT", "9090")
    monkeypatch.setenv("TASKS_DATABASE_URL", "sqlite:////tmp/other.db")
    monkeypatch.setenv("TASKS_METRICS_ENABLED", "false")
    settings = Settings(_env_file=None)
    assert settings.port == 9090
    assert settings.database_url == "sqlite:////tmp/other.db"
    assert settings.metrics_enabled is False


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
