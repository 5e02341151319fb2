#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime

from dotenv import find_dotenv, load_dotenv

from .config import SpotifyAuthConfig, load_config
from .constants import SPOTIFY_SCOPES
from .exceptions import ConfigError
from .identity import ConsoleRedirectFlow
from .oauth import (
    TokenResult,
    exchange_auth_code_for_token,
    get_access_token,
    get_auth_url,
    refresh_access_token,
    validate_auth_code,
)
from .pkce import get_code_verifier_and_challenge


def _print_result(result: TokenResult) -> None:
    if not result or result.token is None:
        print(f"\033[31m{result.status.value}: {result.error}\033[0m", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.token, indent=2))
    expires = datetime.fromtimestamp(result.token["expiration_timestamp"] / 1000)
    print(f"\nToken expires: {expires}", file=sys.stderr)


def cmd_login(config: SpotifyAuthConfig, scopes: str) -> None:
    print("Starting Spotify authorization...\n", file=sys.stderr)
    result = asyncio.run(get_access_token(config, ConsoleRedirectFlow(), scopes=scopes))
    _print_result(result)


def cmd_refresh(config: SpotifyAuthConfig, refresh_token: str) -> None:
    result = asyncio.run(refresh_access_token(config, refresh_token))
    _print_result(result)


def cmd_url(config: SpotifyAuthConfig, scopes: str) -> None:
    pkce = asyncio.run(get_code_verifier_and_challenge())
    print(get_auth_url(config, scopes, pkce.challenge))
    print(f"\nCode verifier: {pkce.verifier}", file=sys.stderr)


def cmd_exchange(config: SpotifyAuthConfig, code: str, verifier: str) -> None:
    # accept either the bare code or the full redirect URL
    auth_code = validate_auth_code(code) if "://" in code else code
    if not auth_code:
        print("\033[31mNo authorization code in redirect URL\033[0m", file=sys.stderr)
        sys.exit(1)

    result = asyncio.run(exchange_auth_code_for_token(config, auth_code, verifier))
    _print_result(result)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Spotify OAuth (PKCE) Client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  SPOTIFY_CLIENT_ID, SPOTIFY_REDIRECT_URI (required)
  SPOTIFY_AUTHORIZE_URL, SPOTIFY_TOKEN_URL (optional)
  Variables are also read from a .env file in the working directory.

Examples:
  spotify-auth login
  spotify-auth refresh <refresh_token>
  spotify-auth url --scope user-read-email+user-read-private
  spotify-auth exchange <code_or_redirect_url> <code_verifier>
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    login_parser = subparsers.add_parser("login", help="Authorize in the browser and get an access token")
    login_parser.add_argument("--scope", default=SPOTIFY_SCOPES, help="Scopes joined with '+'")

    refresh_parser = subparsers.add_parser("refresh", help="Get a new access token from a refresh token")
    refresh_parser.add_argument("refresh_token", help="Refresh token from an earlier login")

    url_parser = subparsers.add_parser("url", help="Print an authorization URL and its code verifier")
    url_parser.add_argument("--scope", default=SPOTIFY_SCOPES, help="Scopes joined with '+'")

    exchange_parser = subparsers.add_parser("exchange", help="Exchange an authorization code from 'url' for an access token")
    exchange_parser.add_argument("code", help="Authorization code, or the full redirect URL")
    exchange_parser.add_argument("verifier", help="Code verifier printed by 'url'")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return

    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)

    try:
        config = load_config()
    except ConfigError as e:
        print(f"\033[31m{e}\033[0m", file=sys.stderr)
        sys.exit(1)

    if args.command == "login":
        cmd_login(config, args.scope)
    elif args.command == "refresh":
        cmd_refresh(config, args.refresh_token)
    elif args.command == "url":
        cmd_url(config, args.scope)
    elif args.command == "exchange":
        cmd_exchange(config, args.code, args.verifier)


if __name__ == "__main__":
    main()
