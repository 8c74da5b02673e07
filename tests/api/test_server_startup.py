"""
Startup-Tests für die FastAPI-App (Lifespan, Startup-Validierung).
"""

import pytest
from fastapi.testclient import TestClient

from app import server
from app.services.proofreading_service import ProofreadingService


def test_lifespan_creates_service_in_test_mode():
    with TestClient(server.app) as client:
        assert client.get("/").json() == {"message": "Proofread API running"}
        assert isinstance(server.app.state.proofreading_service, ProofreadingService)

        response = client.post("/proofread", json={"transcript": "smith went home"})
        assert response.status_code == 200
        assert len(response.json()["issues"]) == 2


def test_startup_validation_requires_api_key(monkeypatch):
    monkeypatch.setenv("TEST_MODE", "0")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        server.validate_startup_config()


def test_startup_validation_passes_with_api_key(monkeypatch):
    monkeypatch.setenv("TEST_MODE", "0")
    monkeypatch.setenv("OPENAI_API_KEY", "test-key-not-used")

    server.validate_startup_config()
