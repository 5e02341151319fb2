"""
Spotify OAuth constants
Public endpoints and defaults for the Authorization Code flow with PKCE
"""

# OAuth endpoints
SPOTIFY_AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# OAuth scopes, pre-encoded with "+" as the separator
SPOTIFY_SCOPES = "+".join(
    [
        "playlist-modify-public",
        "playlist-modify-private",
        "user-library-modify",
        "user-library-read",
        "playlist-read-private",
        "user-read-email",
        "user-read-private",
        "playlist-read-collaborative",
    ]
)

# PKCE verifier length (RFC 7636 allows 43-128)
CODE_VERIFIER_LENGTH = 64

# Tokens live 60 minutes; stamp expiry one minute early
TOKEN_EXPIRY_MS = 59 * 60 * 1000

# Environment variables read by config.load_config
ENV_CLIENT_ID = "SPOTIFY_CLIENT_ID"
ENV_REDIRECT_URI = "SPOTIFY_REDIRECT_URI"
ENV_AUTHORIZE_URL = "SPOTIFY_AUTHORIZE_URL"
ENV_TOKEN_URL = "SPOTIFY_TOKEN_URL"
