"""
gigplatform/core/tokens.py

Access token utilities shared with the external identity service:
- Issue a JWT access token with expiration and JTI (seed script, tests)
- Decode and validate an access token into its payload
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from gigplatform.core.config import settings
from gigplatform.database.enums import UserRole

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """Claims the request layer relies on."""

    sub: UUID
    role: UserRole
    jti: str | None = None


class InvalidTokenError(Exception):
    """Raised when a token cannot be decoded or lacks required claims."""


def create_access_token(
    account_id: UUID, role: UserRole, expires_delta: timedelta | None = None
) -> str:
    """
    Create a JWT access token with expiration and unique JTI.

    Args:
        account_id (UUID): Account the token authenticates (stored as `sub`).
        role (UserRole): Role claim copied from the account.
        expires_delta (timedelta | None): Optional custom lifetime. Defaults to settings.

    Returns:
        str: Encoded JWT access token.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    jti = str(uuid.uuid4())
    payload: dict[str, Any] = {
        "sub": str(account_id),
        "role": role.value,
        "exp": expire,
        "jti": jti,
    }
    logger.info(f"Issuing access token for sub={account_id} exp={expire} jti={jti}")
    return str(jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM))


def decode_access_token(token: str) -> TokenPayload:
    """Decode a token and validate its claims; raises InvalidTokenError."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"[AUTH] JWT decoding/validation failed: {e}")
        raise InvalidTokenError(str(e)) from e
