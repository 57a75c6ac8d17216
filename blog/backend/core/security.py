"""
Security Utilities.

Credential verification and session token signing.

The administrator password is configured as a hash in config/.env
(ADMIN_PASSWORD_HASH). Two formats are accepted:

    HMAC-SHA512   hex digest of HMAC(key=PASSWORD_SALT, msg=password + PASSWORD_SALT)
    bcrypt        any hash starting with $2a$, $2b$ or $2y$

Session tokens are HS256 JWTs signed with JWT_SECRET, issued by
security.jwt.issuer and valid for security.jwt.session_expire_minutes.
"""

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from blog.backend.core.config import get_app_config, get_settings
from blog.backend.core.exceptions import EmptyCredentialError
from blog.backend.core.logging import get_logger
from blog.backend.core.utils import utc_now

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of a token check. ``error`` is set when ``valid`` is False."""

    valid: bool
    claims: dict[str, Any] | None = None
    error: str | None = None


def hash_password(password: str, salt: str) -> str:
    """
    Hash a password with HMAC-SHA512.

    Args:
        password: Plain password
        salt: Configured salt, used both as key and as suffix

    Returns:
        Lowercase hex digest

    Raises:
        EmptyCredentialError: If password or salt is empty
    """
    if not password or not salt:
        raise EmptyCredentialError()
    return hmac.new(
        salt.encode("utf-8"),
        (password + salt).encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


def verify_password(candidate: str, salt: str, password_hash: str) -> bool:
    """
    Verify a password against the configured hash.

    Raises:
        EmptyCredentialError: If candidate or salt is empty
    """
    if not candidate or not salt:
        raise EmptyCredentialError()

    if password_hash.startswith(BCRYPT_PREFIXES):
        return bcrypt.checkpw(candidate.encode("utf-8"), password_hash.encode("utf-8"))

    return hmac.compare_digest(hash_password(candidate, salt), password_hash.lower())


def create_session_token(claims: dict[str, Any]) -> tuple[str, datetime]:
    """
    Sign a session token.

    Args:
        claims: Extra claims to embed (e.g. the client address)

    Returns:
        Tuple of (token, expiry) where expiry is a naive UTC datetime
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt

    expire = utc_now() + timedelta(minutes=jwt_config.session_expire_minutes)
    to_encode = {**claims, "exp": expire, "iss": jwt_config.issuer, "jti": uuid4().hex}
    token = jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)
    return token, expire


def verify_token(token: str | None) -> TokenVerification:
    """
    Check a token's signature, issuer and expiry. Never raises.

    Returns:
        TokenVerification with the decoded claims on success, or the
        decoder's reason on failure
    """
    if not token:
        return TokenVerification(valid=False)

    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            issuer=jwt_config.issuer,
        )
    except JWTError as e:
        logger.warning("Token verification failed", extra={"error": str(e)})
        return TokenVerification(valid=False, error=str(e))
    return TokenVerification(valid=True, claims=claims)
