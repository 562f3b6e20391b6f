"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Authentication: get_current_user(), require_admin(), CurrentUser, AdminUser
- Services: get_data_source(), get_audience_service(), get_authoring_service()

Type Aliases:
=============
Type aliases keep route signatures short:

    # Instead of this:
    async def handler(user: UserRecord = Depends(require_admin)):

    # Write this:
    async def handler(admin: AdminUser):
"""

from edutrack.api.dependencies.auth import (
    get_token_claims,
    get_current_user,
    require_admin,
    CurrentUser,
    AdminUser,
)
from edutrack.api.dependencies.services import (
    get_data_source,
    get_audience_service,
    get_authoring_service,
)

__all__ = [
    # Authentication
    "get_token_claims",
    "get_current_user",
    "require_admin",
    "CurrentUser",
    "AdminUser",
    # Services
    "get_data_source",
    "get_audience_service",
    "get_authoring_service",
]
