"""
API test fixtures.

Builds the real application and overrides service dependencies with
services wired to the in-memory backends.

Dependencies: fastapi, pytest
System role: HTTP test infrastructure
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docchat.api.deps import (
    get_chat_service,
    get_health_service,
    get_ingestion_service,
    get_session_service,
    get_settings_dependency,
)
from docchat.api.main import create_app
from docchat.application.services import (
    ChatService,
    HealthService,
    IngestionService,
    SessionService,
)
from docchat.configs import Settings
from docchat.configs.upload import UploadSettings
from docchat.core.text_extractor import TextExtractor

API_PREFIX = "/api/chatbot"


@pytest.fixture
def app(fake_gemini, vector_store, fallback_store) -> FastAPI:
    """Create application with services wired to in-memory backends."""
    app = create_app()
    settings = Settings(upload=UploadSettings(max_files=3, max_file_size=64))

    app.dependency_overrides[get_settings_dependency] = lambda: settings
    app.dependency_overrides[get_ingestion_service] = lambda: IngestionService(
        extractor=TextExtractor(fake_gemini),
        vector_store=vector_store,
        fallback_store=fallback_store,
    )
    app.dependency_overrides[get_chat_service] = lambda: ChatService(
        gemini_client=fake_gemini,
        vector_store=vector_store,
        fallback_store=fallback_store,
    )
    app.dependency_overrides[get_session_service] = lambda: SessionService(
        vector_store=vector_store,
        fallback_store=fallback_store,
    )
    app.dependency_overrides[get_health_service] = lambda: HealthService(
        vector_store=vector_store,
        fallback_store=fallback_store,
        gemini_configured=True,
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
