"""PKCE (Proof Key for Code Exchange) utilities for secure OAuth flow without client secrets."""

from __future__ import annotations

import base64
import hashlib
import secrets
import string
from dataclasses import dataclass

from .constants import CODE_VERIFIER_LENGTH

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


@dataclass
class PKCEPair:
    verifier: str
    challenge: str


def generate_random_string(length: int) -> str:
    # byte % 62 is slightly biased toward the first 8 characters
    random_bytes = secrets.token_bytes(length)
    return "".join(ALPHABET[b % len(ALPHABET)] for b in random_bytes)


async def hash_string(value: str) -> bytes:
    return hashlib.sha256(value.encode("utf-8")).digest()


def encode_to_base64(data: bytes) -> str:
    return (
        base64.b64encode(data)
        .decode("ascii")
        .replace("=", "")
        .replace("+", "-")
        .replace("/", "_")
    )


async def get_code_verifier_and_challenge(verifier: str | None = None) -> PKCEPair:
    """Return a fresh verifier (or the one given) with its S256 challenge."""
    if verifier is None:
        verifier = generate_random_string(CODE_VERIFIER_LENGTH)
    challenge = encode_to_base64(await hash_string(verifier))
    return PKCEPair(verifier=verifier, challenge=challenge)
