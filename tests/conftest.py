"""Shared pytest fixtures for the web studio backend.

The database URL and simulation delay are set in the environment *before*
the app is imported, so the engine created at import time points at a
throwaway SQLite file.
"""
import os
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="webstudio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["DEPLOY_SIMULATION_DELAY"] = "0"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ.pop("OPENROUTER_API_KEY", None)
os.environ.pop("VERCEL_TOKEN", None)
os.environ.pop("NETLIFY_TOKEN", None)
os.environ.pop("COOLIFY_TOKEN", None)

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core.database import engine  # noqa: E402
from app.models.base import Base  # noqa: E402


# ---------------------------------------------------------------------------
# Database & client
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate every table around each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, email: str) -> dict:
    response = client.post("/auth/login", json={"email": email})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    """Bearer headers for a freshly logged-in user."""
    token = login(client, "alice@example.com")["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(client):
    """Bearer headers for a second, unrelated user."""
    token = login(client, "mallory@example.com")["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def workspace(client, auth_headers):
    response = client.post("/workspaces", json={"name": "W"}, headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def project(client, auth_headers, workspace):
    response = client.post(f"/workspaces/{workspace['id']}/projects", json={"name": "P"}, headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def create_file(client, auth_headers, project):
    """Factory creating files in the default project."""

    def _create(name, type="file", parent_id=None, content=None):
        body = {"name": name, "type": type}
        if parent_id:
            body["parentId"] = parent_id
        if content is not None:
            body["content"] = content
        response = client.post(f"/projects/{project['id']}/files", json=body, headers=auth_headers)
        assert response.status_code == 200, response.text
        return response.json()

    return _create


# ---------------------------------------------------------------------------
# Plain records for the pure core functions
# ---------------------------------------------------------------------------

def make_record(id, name, parent_id=None, type="file", content="", path=None, project_id="proj-1"):
    return SimpleNamespace(
        id=id,
        name=name,
        path=path or name,
        type=type,
        content=content,
        parent_id=parent_id,
        project_id=project_id,
    )


@pytest.fixture
def record():
    return make_record
