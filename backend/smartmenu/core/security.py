"""Security utilities: password hashing and signed access tokens."""

from __future__ import annotations

import binascii
import json
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, Optional

import bcrypt
import jwt
from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    InvalidTokenError,
)
from jwt.utils import base64url_decode, base64url_encode

from smartmenu.core.config import Settings, get_settings
from smartmenu.core.errors import BadSignature, Expired, Malformed, Unsupported

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "iat", "exp")

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hash.

    Uses bcrypt's built-in timing-safe comparison.
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification error: {e}")
        return False


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(),
    ).decode("utf-8")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_segments(token: str) -> None:
    """Reject tokens whose segments do not decode.

    Header and payload must be base64url JSON, otherwise the token is
    malformed. A signature segment that is not canonical base64url is
    treated as a bad signature, since any altered character lands here.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise Malformed("Token must have three segments")
    header, payload, signature = parts
    try:
        json.loads(base64url_decode(header))
        json.loads(base64url_decode(payload))
    except (ValueError, TypeError, binascii.Error) as e:
        raise Malformed(f"Malformed token: {e}") from e
    try:
        raw = base64url_decode(signature)
    except (ValueError, TypeError, binascii.Error) as e:
        raise BadSignature() from e
    if base64url_encode(raw).decode("ascii") != signature:
        raise BadSignature()


class TokenIssuer:
    """Issues and validates HMAC-signed access tokens.

    Tokens are standard JWTs (header.payload.signature, base64url) carrying
    ``sub``, ``iat`` and ``exp``. Validation is stateless: there is no
    server-side session store and no revocation list.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if not algorithm.startswith("HS"):
            raise ValueError(f"Only HMAC algorithms are supported, got {algorithm}")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            ttl=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, subject: str) -> str:
        """Create a signed token for ``subject`` valid for the configured TTL."""
        if not subject:
            raise ValueError("subject must not be empty")
        now = self._clock()
        payload = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> str:
        """Verify ``token`` and return its subject.

        Raises BadSignature, Malformed, Expired or Unsupported.
        """
        if not token:
            raise Malformed("Token is empty")
        _check_segments(token)
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "require": list(REQUIRED_CLAIMS),
                    # expiry is checked below against our own clock
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except InvalidSignatureError as e:
            raise BadSignature() from e
        except InvalidAlgorithmError as e:
            raise Unsupported(f"Unsupported token algorithm: {e}") from e
        except DecodeError as e:
            raise Malformed(f"Malformed token: {e}") from e
        except InvalidTokenError as e:
            raise Malformed(f"Invalid token claims: {e}") from e

        subject = payload["sub"]
        expires_at = payload["exp"]
        if not isinstance(subject, str) or not subject:
            raise Malformed("Token subject is missing")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise Malformed("Token expiry is not a timestamp")
        if self._clock().timestamp() > expires_at:
            raise Expired()
        return subject


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Token issuer built once from settings; the key is read-only afterwards."""
    return TokenIssuer.from_settings(get_settings())
