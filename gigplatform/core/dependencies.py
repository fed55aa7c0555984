"""
gigplatform/core/dependencies.py

Authentication and Authorization Dependencies

Provides the authenticated actor to every route:
- Validates JWT tokens from Bearer header OR HttpOnly cookie
- Checks against blacklisted tokens (logout protection)
- Retrieves the authenticated account from the database
- Restricts access based on account roles

Pagination Dependency:
- Provides reusable dependency for pagination (skip, limit).
"""

import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Cookie, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.core.blacklist import is_token_blacklisted
from gigplatform.core.tokens import InvalidTokenError, decode_access_token
from gigplatform.database.enums import UserRole
from gigplatform.database.models import Account
from gigplatform.database.session import get_db

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# OAuth2 Configuration
# ---------------------------------------------------
# auto_error disabled so a missing header falls through to the cookie check
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/auth/login", auto_error=False
)


# ---------------------------------------------------
# Pagination Dependency
# ---------------------------------------------------
class PaginationParams:
    """
    Dependency that provides pagination parameters from query parameters.
    """

    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip for pagination"),
        limit: int = Query(100, ge=1, le=500, description="Maximum number of records to return"),
    ):
        self.skip = skip
        self.limit = limit


# ---------------------------------------------------
# Authentication Functions
# ---------------------------------------------------
async def get_current_user(
    token_header: Annotated[str | None, Depends(oauth2_scheme)] = None,
    token_cookie: Annotated[str | None, Cookie(alias="access_token")] = None,
    db: AsyncSession = Depends(get_db),
) -> Account:
    """
    Authenticate the current account based on the provided JWT access token,
    checking Bearer header first, then HttpOnly cookie.

    Raises:
        HTTPException: 401 Unauthorized if authentication fails.
    """
    token = token_header or token_cookie

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"} if token is None else None,
    )

    if token is None:
        logger.debug("[AUTH] No token found in Authorization header or access_token cookie.")
        raise credentials_exception

    try:
        token_data = decode_access_token(token)
    except InvalidTokenError:
        raise credentials_exception

    if token_data.jti and await is_token_blacklisted(token_data.jti):
        logger.warning(f"[AUTH] Blacklisted token detected: jti={token_data.jti}")
        raise credentials_exception

    account = await db.get(Account, token_data.sub)

    if not account:
        logger.warning(f"[AUTH] JWT valid but no matching account found: id={token_data.sub}")
        raise credentials_exception

    if not account.is_active:
        logger.warning(f"[AUTH] Authentication attempt by inactive account: {account.id}")
        raise credentials_exception

    if account.role != token_data.role:
        logger.warning(
            f"[AUTH] Role claim mismatch for account {account.id}: token={token_data.role}, stored={account.role}"
        )
        raise credentials_exception

    logger.debug(
        f"[AUTH] Account {account.id} authenticated via {'Header' if token_header else 'Cookie'}."
    )
    return account


# ---------------------------------------------------
# Authorization Functions (Role-Based)
# ---------------------------------------------------
def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, Account]]:
    """
    Dependency to restrict access to accounts having any of the specified roles.
    """

    async def checker(user: Account = Depends(get_current_user)) -> Account:
        if user.role not in roles:
            logger.warning(
                f"[RBAC] Access denied: Account {user.id} with role {user.role} attempted access (allowed roles: {roles})"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role: {user.role.value}",
            )
        return user

    return checker


require_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)
