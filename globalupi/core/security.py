"""Credential hashing, bearer tokens and request sessions.

Passwords are stored as salted PBKDF2-SHA256 digests in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``. Tokens are HS256 JWTs
carrying the account ``id`` and ``email`` with an expiry of
``Settings.token_ttl_days``.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from globalupi.core.config import Settings
from globalupi.core.errors import Unauthorized

HASH_SCHEME = "pbkdf2_sha256"
HASH_ITERATIONS = 120_000

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Session:
    """Identity of the acting account, resolved once per request."""

    account_id: int
    email: str


def hash_password(password: str, iterations: int = HASH_ITERATIONS) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, iterations, salt_hex, digest_hex = stored.split("$")
        if scheme != HASH_SCHEME:
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)


def issue_token(account_id: int, email: str, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=settings.token_ttl_days)
    claims = {"id": account_id, "email": email, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Session:
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        raise Unauthorized("Invalid token") from e
    account_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(account_id, int) or not email:
        raise Unauthorized("Invalid token")
    return Session(account_id=account_id, email=email)


def get_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Session:
    """FastAPI dependency resolving the bearer token into a Session."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token provided")
    return decode_token(credentials.credentials, request.app.state.settings)
