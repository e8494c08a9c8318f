"""Shared fixtures"""
import pytest

from app.services.diagnosis import PROFILES, ImageDiagnosisService
from tests.fakes import FENCED_JSON, make_client


@pytest.fixture
def fake_client():
    return make_client(FENCED_JSON)


@pytest.fixture
def structured_service(fake_client):
    return ImageDiagnosisService(client=fake_client, profile=PROFILES["structured"])
