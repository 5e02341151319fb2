"""Exceptions raised by spotify_auth.

Token operations report failures through ``oauth.TokenResult`` instead of
raising. These exceptions cover the remaining seams::

    SpotifyAuthError
    +-- ConfigError              missing or invalid configuration
    +-- AuthorizationCancelled   user aborted the interactive redirect
"""


class SpotifyAuthError(Exception):
    """Base exception for all spotify_auth errors."""


class ConfigError(SpotifyAuthError):
    """Raised when required configuration is missing."""


class AuthorizationCancelled(SpotifyAuthError):
    """Raised by identity providers when no redirect URL was obtained."""
