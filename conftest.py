"""Shared fixtures: a fresh application per test with stubbed upstreams."""

import random
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from backend.chatbot.fallback import FallbackResponder
from backend.chatbot.gemini import GeminiClient
from backend.chatbot.intent import SimulatedIntentDetector
from backend.config import Settings
from backend.directory.users import UserDirectory
from backend.family.service import FamilyService
from backend.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_cloud_project_id=None,
        google_application_credentials=None,
        gemini_api_key="test-key",
    )


@pytest.fixture
def directory():
    return UserDirectory()


@pytest.fixture
def family_service(directory):
    return FamilyService(directory=directory)


@pytest.fixture
def simulated_detector():
    return SimulatedIntentDetector(FallbackResponder(rng=random.Random(7)))


@pytest.fixture
def gemini_session():
    """A requests.Session stand-in; set ``.post.return_value`` per test."""
    return MagicMock()


@pytest.fixture
def app(settings, simulated_detector, gemini_session):
    return create_app(
        settings=settings,
        intent_detector=simulated_detector,
        gemini=GeminiClient(settings, session=gemini_session),
    )


@pytest.fixture
def client(app):
    return TestClient(app)
