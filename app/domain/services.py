from __future__ import annotations

import base64
import hashlib
import secrets
import string
from datetime import datetime, timezone

TOKEN_ALPHABET = string.ascii_letters + string.digits
IDENTIFIER_PREFIX = "one-time-token:"


def generate_random_string(length: int = 32) -> str:
    """
    Random token from [A-Za-z0-9] using the CSPRNG.
    32 chars -> ~190 bits of entropy.
    """
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def default_key_hasher(token: str) -> str:
    """SHA-256 of the token, base64url without padding."""
    digest = hashlib.sha256(token.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def verification_identifier(stored_token: str) -> str:
    return f"{IDENTIFIER_PREFIX}{stored_token}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
