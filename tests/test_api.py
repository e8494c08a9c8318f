"""
HTTP tests for the FastAPI app, with the diagnosis service swapped for one backed by a fake client
"""
import pytest
from fastapi.testclient import TestClient

import app.main as main_module
from app.dependencies import get_diagnosis_service
from app.main import app
from app.services.diagnosis import ANALYSIS_FAILED_MESSAGE, PROFILES, ImageDiagnosisService
from tests.fakes import make_client


@pytest.fixture
def api(structured_service):
    app.dependency_overrides[get_diagnosis_service] = lambda: structured_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def override_with(content=None, side_effect=None):
    client = make_client(content, side_effect=side_effect)
    service = ImageDiagnosisService(client=client, profile=PROFILES["structured"])
    app.dependency_overrides[get_diagnosis_service] = lambda: service
    return client


class TestAnalyzeEndpoint:

    def test_success(self, api, fake_client):
        files = {"file": ("leaf.png", b"fake png bytes", "application/octet-stream")}

        r = api.post("/analyze", files=files)

        assert r.status_code == 200
        assert r.json() == {
            "diseaseName": "X",
            "severity": "Low",
            "treatmentAdvice": "Y",
            "confidenceScore": 0.8,
        }
        fake_client.chat.completions.create.assert_awaited_once()

    def test_file_too_large(self, api, fake_client):
        files = {"file": ("leaf.jpg", b"0" * (4 * 1024 * 1024 + 1), "image/jpeg")}

        r = api.post("/analyze", files=files)

        assert r.status_code == 413
        assert "too large" in r.json()["detail"]
        fake_client.chat.completions.create.assert_not_awaited()

    def test_unsupported_type(self, api, fake_client):
        files = {"file": ("notes.txt", b"hello", "text/plain")}

        r = api.post("/analyze", files=files)

        assert r.status_code == 415
        assert "Invalid file type" in r.json()["detail"]
        fake_client.chat.completions.create.assert_not_awaited()

    def test_missing_file(self, api):
        r = api.post("/analyze")
        assert r.status_code == 422

    @pytest.mark.parametrize("content,side_effect", [
        ("not-json-at-all", None),
        ("   ", None),
        ("[" * 200000, None),
        (None, RuntimeError("invalid api key sk-secret")),
    ])
    def test_failures_are_generic(self, content, side_effect):
        override_with(content, side_effect)
        try:
            r = TestClient(app).post("/analyze", files={"file": ("leaf.png", b"x", "image/png")})
        finally:
            app.dependency_overrides.clear()

        assert r.status_code == 500
        assert r.json() == {"detail": ANALYSIS_FAILED_MESSAGE}
        assert "sk-secret" not in r.text

    def test_service_not_started(self):
        r = TestClient(app).post("/analyze", files={"file": ("leaf.png", b"x", "image/png")})
        assert r.status_code == 500


class TestHealth:

    def test_root(self, api):
        r = api.get("/")
        assert r.status_code == 200
        js = r.json()
        assert js["model"] == "google/gemini-2.5-flash"
        assert js["profile"] == "structured"

    def test_health(self, api):
        r = api.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"
        assert r.json()["services"]["openrouter"] is True

    def test_health_before_startup(self):
        r = TestClient(app).get("/health")
        assert r.json()["status"] == "degraded"


class TestLifespan:

    def test_startup_builds_and_closes_service(self, monkeypatch, structured_service, fake_client):
        monkeypatch.setattr(main_module, "create_diagnosis_service", lambda: structured_service)

        with TestClient(app) as client:
            assert app.state.diagnosis_service is structured_service
            assert client.get("/health").json()["status"] == "healthy"

        fake_client.close.assert_awaited_once()
        del app.state.diagnosis_service
