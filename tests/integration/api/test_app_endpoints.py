"""Integration tests for the unversioned endpoints."""

from fastapi.testclient import TestClient


class TestHealth:
    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": "1.0.0",
            "api_versions": ["v1"],
        }


class TestRoot:
    def test_root_points_to_v1(self, test_client: TestClient, api_v1_prefix: str):
        body = test_client.get("/").json()

        assert body["api_base"] == api_v1_prefix
        assert body["endpoints"]["auth"] == f"{api_v1_prefix}/auth"
        assert body["docs"] == "/docs"
