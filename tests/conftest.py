from __future__ import annotations

import pytest

from profilegen.github.client import GitHubClient
from tests._fixtures.fake_github import FakeOpener


@pytest.fixture
def opener() -> FakeOpener:
    """Provide an empty fake GitHub API; tests register the routes they need."""
    return FakeOpener()


@pytest.fixture
def client(opener: FakeOpener) -> GitHubClient:
    """Provide a client wired to the fake opener."""
    return GitHubClient("test-token", opener=opener)
