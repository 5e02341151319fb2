"""OAuth flow handling for Spotify authentication."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypedDict
from urllib.parse import parse_qs, urlparse

import httpx

from .config import SpotifyAuthConfig
from .constants import SPOTIFY_SCOPES, TOKEN_EXPIRY_MS
from .identity import IdentityProvider
from .pkce import get_code_verifier_and_challenge

logger = logging.getLogger(__name__)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class TokenPayload(TypedDict, total=False):
    access_token: str
    token_type: str
    expires_in: int
    scope: str
    refresh_token: str
    expiration_timestamp: int


class AuthStatus(str, Enum):
    SUCCESS = "success"
    USER_CANCELLED = "user_cancelled"
    NETWORK_FAILURE = "network_failure"
    SERVER_REJECTED = "server_rejected"


@dataclass
class TokenResult:
    """Outcome of a token request. Falsy unless a token was obtained."""

    status: AuthStatus
    token: TokenPayload | None = None
    error: str | None = None

    def __bool__(self) -> bool:
        return self.status is AuthStatus.SUCCESS


def get_auth_url(config: SpotifyAuthConfig, scope: str, code_challenge: str) -> str:
    # scope must already be encoded ("+" between scopes)
    return (
        f"{config.authorize_url}?response_type=code"
        f"&client_id={config.client_id}"
        f"&code_challenge_method=S256"
        f"&code_challenge={code_challenge}"
        f"&scope={scope}"
        f"&redirect_uri={config.redirect_uri}"
    )


async def get_authorization(auth_url: str, identity: IdentityProvider) -> str | None:
    """Run the interactive consent flow and return the final redirect URL.

    Any failure raised by the identity provider is logged and reported as None.
    """
    try:
        return await identity.request_interactive_redirect(auth_url, interactive=True)
    except Exception as e:
        logger.warning("Authorization failure: %s", e)
        return None


def _query_params(url: str) -> dict[str, list[str]]:
    return parse_qs(urlparse(url).query, keep_blank_values=True)


def validate_auth_code(auth_code_url: str | None) -> str | None:
    if not auth_code_url:
        return None

    params = _query_params(auth_code_url)
    if "code" not in params:
        return None

    return params["code"][0]


def redirect_error(auth_code_url: str | None) -> str | None:
    if not auth_code_url:
        return None
    return _query_params(auth_code_url).get("error", [None])[0]


@asynccontextmanager
async def _client_scope(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient() as owned:
        yield owned


def _error_description(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict):
        return str(data.get("error_description") or data.get("error") or response.text)
    return response.text


async def _request_token(
    config: SpotifyAuthConfig,
    form: dict[str, str],
    client: httpx.AsyncClient | None,
    action: str,
) -> TokenResult:
    try:
        async with _client_scope(client) as http:
            response = await http.post(config.token_url, data=form, headers=FORM_HEADERS)
    except httpx.HTTPError as e:
        logger.warning("%s failed: %s", action, e)
        return TokenResult(AuthStatus.NETWORK_FAILURE, error=str(e))

    if not response.is_success:
        description = _error_description(response)
        logger.warning("%s error. %s", action, response.status_code)
        logger.warning("%s", description)
        return TokenResult(
            AuthStatus.SERVER_REJECTED,
            error=f"{action} failed: {response.status_code} - {description}",
        )

    try:
        data: Any = response.json()
    except ValueError as e:
        logger.warning("%s returned invalid JSON: %s", action, e)
        return TokenResult(AuthStatus.SERVER_REJECTED, error=f"{action} returned invalid JSON")

    if not isinstance(data, dict):
        logger.warning("%s returned unexpected payload", action)
        return TokenResult(AuthStatus.SERVER_REJECTED, error=f"{action} returned unexpected payload")

    token: TokenPayload = data  # type: ignore[assignment]
    token["expiration_timestamp"] = _current_time_ms() + TOKEN_EXPIRY_MS
    return TokenResult(AuthStatus.SUCCESS, token=token)


async def exchange_auth_code_for_token(
    config: SpotifyAuthConfig,
    auth_code: str,
    code_verifier: str,
    client: httpx.AsyncClient | None = None,
) -> TokenResult:
    form = {
        "client_id": config.client_id,
        "grant_type": "authorization_code",
        "code": auth_code,
        "code_verifier": code_verifier,
        "redirect_uri": config.redirect_uri,
    }
    result = await _request_token(config, form, client, "Token exchange")
    if result:
        logger.info("Exchanged authorization code for access token")
    return result


async def refresh_access_token(
    config: SpotifyAuthConfig,
    refresh_token: str,
    client: httpx.AsyncClient | None = None,
) -> TokenResult:
    form = {
        "client_id": config.client_id,
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }
    result = await _request_token(config, form, client, "Token refresh")
    if result.token is not None:
        # Spotify may keep the current refresh token without echoing it back
        result.token.setdefault("refresh_token", refresh_token)
        logger.info("Refreshed access token")
    return result


async def get_access_token(
    config: SpotifyAuthConfig,
    identity: IdentityProvider,
    scopes: str = SPOTIFY_SCOPES,
    client: httpx.AsyncClient | None = None,
) -> TokenResult:
    """Run the full authorization code flow with PKCE.

    Each step feeds the next; the first step that fails ends the flow and its
    outcome is returned. Nothing is retried.
    """
    pkce = await get_code_verifier_and_challenge()
    url = get_auth_url(config, scopes, pkce.challenge)
    logger.debug("Authorization URL: %s", url)

    redirect_url = await get_authorization(url, identity)
    if not redirect_url:
        return TokenResult(AuthStatus.USER_CANCELLED, error="Authorization was not completed")

    auth_code = validate_auth_code(redirect_url)
    if not auth_code:
        error = redirect_error(redirect_url)
        logger.warning("No authorization code in redirect (error: %s)", error)
        if error == "access_denied":
            return TokenResult(AuthStatus.USER_CANCELLED, error="User denied access")
        return TokenResult(
            AuthStatus.SERVER_REJECTED,
            error=f"Authorization failed: {error}" if error else "No authorization code in redirect URL",
        )

    return await exchange_auth_code_for_token(config, auth_code, pkce.verifier, client)


def _current_time_ms() -> int:
    return int(time.time() * 1000)
