"""Client configuration for the Spotify OAuth flow."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    ENV_AUTHORIZE_URL,
    ENV_CLIENT_ID,
    ENV_REDIRECT_URI,
    ENV_TOKEN_URL,
    SPOTIFY_AUTHORIZE_URL,
    SPOTIFY_TOKEN_URL,
)
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpotifyAuthConfig:
    client_id: str
    redirect_uri: str
    authorize_url: str = SPOTIFY_AUTHORIZE_URL
    token_url: str = SPOTIFY_TOKEN_URL


def _required(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> SpotifyAuthConfig:
    """Build a config from ``SPOTIFY_*`` environment variables.

    ``SPOTIFY_CLIENT_ID`` and ``SPOTIFY_REDIRECT_URI`` are required; the
    endpoint URLs fall back to the public Spotify accounts service.
    """
    env = os.environ if environ is None else environ

    config = SpotifyAuthConfig(
        client_id=_required(env, ENV_CLIENT_ID),
        redirect_uri=_required(env, ENV_REDIRECT_URI),
        authorize_url=env.get(ENV_AUTHORIZE_URL) or SPOTIFY_AUTHORIZE_URL,
        token_url=env.get(ENV_TOKEN_URL) or SPOTIFY_TOKEN_URL,
    )
    logger.debug("Loaded config, redirect URI: %s", config.redirect_uri)
    return config
