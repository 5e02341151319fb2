"""Interactive redirect capability used to obtain the authorization redirect URL."""

from __future__ import annotations

import asyncio
import logging
import sys
import webbrowser
from collections.abc import Callable
from typing import Protocol

from .exceptions import AuthorizationCancelled

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    async def request_interactive_redirect(self, url: str, interactive: bool = True) -> str:
        """Send the user to ``url`` and return the final redirect URL.

        Implementations raise on failure, e.g. :class:`AuthorizationCancelled`
        when the user closes the consent page.
        """
        ...


def open_browser(url: str) -> None:
    if not webbrowser.open(url):
        logger.warning("Could not open browser automatically")


def prompt_stderr(message: str) -> str:
    # stdout stays reserved for the token JSON printed by the CLI
    sys.stderr.write(message)
    sys.stderr.flush()
    return sys.stdin.readline()


class ConsoleRedirectFlow:
    """Open the consent page in a browser and read the redirect URL from stdin.

    After approving access, Spotify redirects to the registered redirect URI;
    the user copies the full address from the browser bar and pastes it here.
    Instructions and the prompt go to stderr.
    """

    def __init__(
        self,
        opener: Callable[[str], None] = open_browser,
        prompt: Callable[[str], str] = prompt_stderr,
    ) -> None:
        self._opener = opener
        self._prompt = prompt

    async def request_interactive_redirect(self, url: str, interactive: bool = True) -> str:
        if not interactive:
            raise AuthorizationCancelled("Interactive consent is required to authorize")

        logger.info("Opening browser for Spotify authorization")
        try:
            self._opener(url)
        except (OSError, webbrowser.Error) as e:
            logger.warning("Could not open browser: %s", e)

        print("If browser did not open, visit this URL:\n", file=sys.stderr)
        print(url, file=sys.stderr)
        print("\nAfter authorizing, copy the full address you were redirected to.\n", file=sys.stderr)

        redirect_url = await asyncio.to_thread(self._prompt, "Paste the redirect URL here: ")
        redirect_url = redirect_url.strip()
        if not redirect_url:
            raise AuthorizationCancelled("No redirect URL entered")
        return redirect_url
