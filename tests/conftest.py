import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.store import TaskStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
        static_dir=str(tmp_path / "static"),
        metrics_enabled=False,
    )


@pytest.fixture
def store(settings):
    store = TaskStore(settings.database_url)
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def client(store, settings):
    app = create_app(store, settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_task(client):
    def _make(title="Learn Go", description="Study", status="pending"):
        resp = client.post(
            "/api/tasks",
            json={"title": title, "description": description, "status": status},
        )
        assert resp.status_code == 201
        return resp.json()["data"]

    return _make
