# tests/test_main.py
from fastapi.testclient import TestClient
from projectmanager.main import app

def test_root():
    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Project Manager API is running"}

def test_unknown_route_uses_error_envelope():
    with TestClient(app) as client:
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
