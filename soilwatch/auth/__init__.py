"""Authentication: password hashing, JWT, webhook tokens"""

from .security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    generate_webhook_token,
    TokenPayload,
)
from .dependencies import get_current_user_id

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "generate_webhook_token",
    "TokenPayload",
    "get_current_user_id",
]
