"""Tests for config loading."""

from __future__ import annotations

import pytest

from spotify_auth.config import SpotifyAuthConfig, load_config
from spotify_auth.constants import SPOTIFY_AUTHORIZE_URL, SPOTIFY_TOKEN_URL
from spotify_auth.exceptions import ConfigError, SpotifyAuthError


def test_load_from_mapping() -> None:
    config = load_config({"SPOTIFY_CLIENT_ID": "abc", "SPOTIFY_REDIRECT_URI": "https://r/cb"})
    assert config == SpotifyAuthConfig(
        client_id="abc",
        redirect_uri="https://r/cb",
        authorize_url=SPOTIFY_AUTHORIZE_URL,
        token_url=SPOTIFY_TOKEN_URL,
    )


def test_endpoint_overrides() -> None:
    config = load_config(
        {
            "SPOTIFY_CLIENT_ID": "abc",
            "SPOTIFY_REDIRECT_URI": "https://r/cb",
            "SPOTIFY_AUTHORIZE_URL": "http://localhost:9000/authorize",
            "SPOTIFY_TOKEN_URL": "http://localhost:9000/token",
        }
    )
    assert config.authorize_url == "http://localhost:9000/authorize"
    assert config.token_url == "http://localhost:9000/token"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "from-env")
    monkeypatch.setenv("SPOTIFY_REDIRECT_URI", "https://env/cb")
    config = load_config()
    assert config.client_id == "from-env"
    assert config.redirect_uri == "https://env/cb"


@pytest.mark.parametrize(
    "environ, missing",
    [
        ({"SPOTIFY_REDIRECT_URI": "https://r"}, "SPOTIFY_CLIENT_ID"),
        ({"SPOTIFY_CLIENT_ID": "abc"}, "SPOTIFY_REDIRECT_URI"),
        ({"SPOTIFY_CLIENT_ID": "  ", "SPOTIFY_REDIRECT_URI": "https://r"}, "SPOTIFY_CLIENT_ID"),
    ],
)
def test_missing_required(environ: dict[str, str], missing: str) -> None:
    with pytest.raises(ConfigError, match=missing) as exc_info:
        load_config(environ)
    assert isinstance(exc_info.value, SpotifyAuthError)


def test_config_is_frozen() -> None:
    config = SpotifyAuthConfig(client_id="X", redirect_uri="https://r")
    with pytest.raises(AttributeError):
        config.client_id = "Y"  # type: ignore[misc]
