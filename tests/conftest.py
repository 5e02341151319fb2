"""Shared fixtures for spotify_auth tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from spotify_auth.config import SpotifyAuthConfig

FROZEN_NOW_MS = 1_700_000_000_000


class FakeIdentity:
    """Identity provider double that records calls and returns a canned redirect."""

    def __init__(self, redirect_url: str | None = None, error: Exception | None = None) -> None:
        self.redirect_url = redirect_url
        self.error = error
        self.calls: list[tuple[str, bool]] = []

    async def request_interactive_redirect(self, url: str, interactive: bool = True) -> str:
        self.calls.append((url, interactive))
        if self.error is not None:
            raise self.error
        return self.redirect_url or ""


@pytest.fixture
def config() -> SpotifyAuthConfig:
    return SpotifyAuthConfig(client_id="X", redirect_uri="https://r")


@pytest.fixture
def frozen_now():
    with patch("spotify_auth.oauth._current_time_ms", return_value=FROZEN_NOW_MS):
        yield FROZEN_NOW_MS
