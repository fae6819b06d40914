"""
Shared pytest fixtures for ExpertFinder tests.

This module provides common fixtures including:
- FakeClock: controllable time source for session expiry
- Token authority and auth service instances
- FastAPI test application wired with mocked LLM and search clients
"""

import os
import sys
from datetime import UTC, datetime, timedelta
from typing import List
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from expertfinder.config.provider import APIConfig, AuthConfig, OpenAIConfig, SearchConfig
from expertfinder.modules.api import ExpertLink
from expertfinder.modules.auth import AuthFactory, TokenAuthority
from expertfinder.modules.llm import OpenAIClient
from expertfinder.modules.search import GoogleSearchClient


# =============================================================================
# Time
# =============================================================================

class FakeClock:
    """
    Manually advanced clock.

    Usage:
        def test_expiry(clock):
            authority = TokenAuthority(["t"], clock=clock)
            clock.advance(hours=5)
    """

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


# =============================================================================
# Auth
# =============================================================================

@pytest.fixture
def authority(clock):
    """Authority with the tokens used across the test suite."""
    return TokenAuthority(["abc123", "tok1", "tok2"], clock=clock)


@pytest.fixture
def auth_service(clock):
    return AuthFactory.build_for_testing(["abc123", "tok1", "tok2"], clock=clock)


# =============================================================================
# Configuration
# =============================================================================

class StaticConfigProvider:
    """ConfigProvider returning fixed values, independent of the environment."""

    def __init__(self, tokens: List[str] = None, cors_origins: List[str] = None):
        self.tokens = tokens
        self.cors_origins = cors_origins or []

    def get_api_config(self) -> APIConfig:
        return APIConfig(cors_origins=self.cors_origins)

    def get_auth_config(self) -> AuthConfig:
        if self.tokens is None:
            raise ValueError("AUTH_TOKENS environment variable is required.")
        return AuthConfig(tokens=self.tokens)

    def get_openai_config(self) -> OpenAIConfig:
        return OpenAIConfig(api_key="sk-test", base_url="https://llm.test/v1")

    def get_search_config(self) -> SearchConfig:
        return SearchConfig(
            api_key="google-test", engine_id="cx-test", base_url="https://search.test/customsearch/v1"
        )


@pytest.fixture
def config_provider():
    return StaticConfigProvider(tokens=["abc123", "tok1", "tok2"])


# =============================================================================
# Upstream mocks
# =============================================================================

@pytest.fixture
def llm_client():
    """Mocked LLM client with a markdown answer and a topic."""
    client = AsyncMock(spec=OpenAIClient)
    client.get_answer.return_value = "**Computer vision** is a field of AI."
    client.extract_topic.return_value = " computer vision "
    return client


@pytest.fixture
def search_client():
    """Mocked search client returning two profile links."""
    client = AsyncMock(spec=GoogleSearchClient)
    client.search.return_value = [
        ExpertLink(title="Jane Doe", url="https://www.linkedin.com/in/janedoe", snippet="CV lead"),
        ExpertLink(title="John Roe", url="https://www.linkedin.com/in/johnroe", snippet=""),
    ]
    return client


# =============================================================================
# FastAPI test client
# =============================================================================

@pytest.fixture
def app(config_provider, auth_service, llm_client, search_client):
    from expertfinder.main import create_app

    return create_app(
        config_provider=config_provider,
        auth_service=auth_service,
        llm_client=llm_client,
        search_client=search_client,
    )


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_token(client):
    """A freshly issued session token for the abc123 one-time token."""
    response = client.post("/api/auth/validate", json={"token": "abc123"})
    assert response.status_code == 200
    return response.json()["sessionToken"]
