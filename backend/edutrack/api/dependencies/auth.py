"""
Authentication Dependencies

FastAPI dependencies for caller identity and role checks.

Dependency Hierarchy:
=====================
    get_token_claims()    ← Extract and verify the Bearer JWT
           │
           ▼
    get_current_user()    ← Caller as a UserRecord (id, role)
           │
           ▼
    require_admin()       ← Same, 403 unless role == admin

Type Aliases:
=============
    CurrentUser     - Any authenticated staff member
    AdminUser       - Authenticated admin

Usage:
======
    from edutrack.api.dependencies.auth import AdminUser, CurrentUser

    @router.get("/review")
    async def review_queue(admin: AdminUser):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from edutrack.config.settings import settings
from edutrack.shared.core.exceptions import AuthenticationError, AuthorizationError
from edutrack.shared.schemas.entities import UserRecord
from edutrack.shared.utils.security import SecurityUtils, TokenClaims


# auto_error=False so a missing header surfaces as our 401 error body
security = HTTPBearer(auto_error=False)


async def get_token_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> TokenClaims:
    """
    Extract and verify the JWT from the Authorization header.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
) -> UserRecord:
    """The caller as a typed record."""
    return UserRecord(id=claims.user_id, role=claims.role)


async def require_admin(
    user: Annotated[UserRecord, Depends(get_current_user)],
) -> UserRecord:
    """
    The caller, provided they are an admin.

    Raises:
        AuthorizationError: If the caller is not an admin
    """
    if not user.is_admin:
        raise AuthorizationError("Admin access required", details={"role": user.role.value})
    return user


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[UserRecord, Depends(get_current_user)]

AdminUser = Annotated[UserRecord, Depends(require_admin)]
