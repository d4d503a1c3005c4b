from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import bcrypt
from jose import jwt, JWTError

from lawdesk.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    """
    Hash a password with a per-record bcrypt salt.
    """
    return bcrypt.hashpw(_secret_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_secret_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(
    claims: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Mint a signed token carrying the given claims plus an ``exp``.
    """
    to_encode = dict(claims)
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode["exp"] = int(expire.timestamp())
    return jwt.encode(to_encode, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, secret: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Verify a token and return its claims.

    Returns None when the signature does not match, the token is malformed or
    its ``exp`` is in the past.
    """
    try:
        return jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None
