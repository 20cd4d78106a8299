"""Test configuration and fixtures."""

import pytest
from factories import API, FakeGitHub

from github_sync.github_client.request_builder import RequestBuilder


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Fake GitHub REST API."""
    return FakeGitHub()


@pytest.fixture
def builder() -> RequestBuilder:
    """Request builder pointed at the public API with a test token."""
    return RequestBuilder(api_url=API, token="test_token", per_page=100)
