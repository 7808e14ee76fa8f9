"""Module: security."""

import hashlib
import hmac
import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from vetcare.core.config import settings
from vetcare.core.errors import InvalidCredential, InvalidCredentialFormat

# Shared password hashing format/version marker.
PASSWORD_SCHEME = "pbkdf2_sha256"


@dataclass(slots=True)
class TokenPayload:
    subject_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


def hash_password(password: str, iterations: int | None = None) -> str:
    """
    Create a PBKDF2-SHA256 password hash string.

    Stored format:
      pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>
    """
    iterations = iterations or settings.password_iterations
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )
    return f"{PASSWORD_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """
    Verify password against a digest produced by ``hash_password``.

    A mismatch returns False. A digest that cannot be parsed raises
    InvalidCredentialFormat, since it means the stored record is corrupt.
    """
    if not stored or not stored.startswith(f"{PASSWORD_SCHEME}$"):
        raise InvalidCredentialFormat()

    try:
        _, iterations_raw, salt_hex, hash_hex = stored.split("$", 3)
        iterations = int(iterations_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError as exc:
        raise InvalidCredentialFormat() from exc

    if iterations <= 0 or not salt or not expected:
        raise InvalidCredentialFormat()

    computed = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )
    return hmac.compare_digest(computed, expected)


def create_access_token(subject_id: int, email: str, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(subject_id),
        "email": email,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenPayload:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidCredential("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidCredential("Invalid token") from exc

    try:
        subject_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise InvalidCredential("Invalid token") from exc

    return TokenPayload(
        subject_id=subject_id,
        email=payload.get("email", ""),
        issued_at=datetime.fromtimestamp(payload["iat"], UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
