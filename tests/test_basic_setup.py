"""
Basic test to verify the project setup is working correctly.
"""

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.config.settings import Settings


def test_app_creation():
    """Test that the FastAPI app can be created successfully."""
    assert app is not None
    assert app.title == "Idiom Editor Backend"


def test_root_endpoint():
    """Test the root endpoint returns expected response."""
    client = TestClient(app)
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert "status" in data
    assert data["status"] == "running"
    assert "X-Request-ID" in response.headers


def test_routes_registered():
    """Test every idiom and type route is mounted."""
    paths = set(app.openapi()["paths"])
    for path in [
        "/idioms",
        "/idiom",
        "/update-idiom",
        "/upload-image",
        "/idiom_major_types",
        "/idiom_minor_types",
        "/major-types",
        "/major-types/{type_code}",
        "/major-types/{type_code}/minor-types",
        "/minor-types",
        "/minor-types/{type_code}",
    ]:
        assert path in paths


@pytest.mark.parametrize("raw, expected", [("", ""), ("api", "/api"), ("/api/", "/api"), ("/", "")])
def test_api_prefix_is_normalized(raw, expected):
    assert Settings(api_prefix=raw).api_prefix == expected


if __name__ == "__main__":
    pytest.main([__file__])
