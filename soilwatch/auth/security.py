"""
Password hashing, JWT access tokens and sensor webhook tokens
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel

from ..core.config import settings
from ..logging_config import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class TokenPayload(BaseModel):
    """
    Claims carried by an access token
    - sub: user id as a string
    - exp: expiry as a UNIX timestamp
    """
    sub: str
    exp: int
    iat: Optional[int] = None

    @property
    def user_id(self) -> int:
        return int(self.sub)

# ============================================================
# Password Hashing
# ============================================================

def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt

    Returns:
        Bcrypt hash suitable for database storage
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a bcrypt hash"""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode('utf-8'))
    except ValueError as e:
        # Malformed hash in the database
        logger.error("password_hash_invalid", error=str(e))
        return False

# ============================================================
# JWT Token Functions
# ============================================================

def create_access_token(user_id: int, expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed, time-limited access token for a user

    Args:
        user_id: User primary key, stored in the "sub" claim
        expires_minutes: Lifetime override; defaults to settings.jwt_expiry_minutes
    """
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=expires_minutes or settings.jwt_expiry_minutes)
    claims = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """
    Decode and validate an access token

    Returns:
        TokenPayload if the signature, expiry and subject are valid, None otherwise
    """
    try:
        data = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        payload = TokenPayload(**data)
    except JWTError as e:
        logger.warning("access_token_rejected", reason=str(e))
        return None
    except (ValueError, TypeError) as e:
        logger.warning("access_token_rejected", reason=f"malformed claims: {e}")
        return None

    if not payload.sub.isdigit():
        logger.warning("access_token_rejected", reason="subject is not a user id")
        return None
    return payload

# ============================================================
# Webhook Tokens
# ============================================================

def generate_webhook_token() -> str:
    """
    Generate a sensor webhook token

    Returns:
        URL-safe random string (settings.webhook_token_bytes of entropy)
    """
    return secrets.token_urlsafe(settings.webhook_token_bytes)
