"""API test fixtures.

Each ``client`` runs the full lifespan against its own in-memory
database, so every test starts from a freshly bootstrapped store.
"""

import pytest
from fastapi.testclient import TestClient

from rbac_admin.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def login(client: TestClient, username: str, password: str) -> dict[str, str]:
    response = client.post(
        "/api/v1/user/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "123456")


@pytest.fixture
def member(client, admin_headers):
    """A registered account holding only the default ``user`` role."""
    response = client.post(
        "/api/v1/users/register",
        json={"username": "member", "password": "member123", "email": "m@example.com"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return {"id": response.json()["id"], "headers": login(client, "member", "member123")}
