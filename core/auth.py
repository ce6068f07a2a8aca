"""Authentication utilities: password hashing, access tokens, bearer dependency"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import settings
from core.exceptions import InvalidTokenException, TokenMissingException
from core.logging import logger
from core.monitoring import set_user

# Bearer scheme; missing credentials are reported by get_current_user_id
bearer_scheme = HTTPBearer(auto_error=False)


# ========== Passwords ==========
# bcrypt only reads the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a plaintext password with bcrypt (cost BCRYPT_ROUNDS)"""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("⚠️ Stored password hash is malformed")
        return False


# ========== Tokens ==========
def create_access_token(user_id: str, expires_days: Optional[int] = None) -> str:
    """
    Issue a signed access token carrying the user id

    Args:
        user_id: Identifier stored in the ``userId`` claim
        expires_days: Lifetime override (defaults to JWT_EXPIRES_DAYS)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(days=expires_days or settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Verify a token and return its user id

    Raises:
        InvalidTokenException: bad signature, expired, or no userId claim
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info(f"🔒 Token rejected: {type(e).__name__}")
        raise InvalidTokenException() from e

    user_id = payload.get("userId")
    if not user_id:
        raise InvalidTokenException()
    return str(user_id)


# ========== FastAPI Dependency ==========
async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme)
) -> str:
    """
    Resolve the caller from the ``Authorization: Bearer <token>`` header

    Raises:
        TokenMissingException: no bearer token (401)
        InvalidTokenException: token invalid or expired (403)
    """
    if credentials is None or not credentials.credentials:
        raise TokenMissingException()

    user_id = decode_access_token(credentials.credentials)
    set_user(user_id)
    return user_id
