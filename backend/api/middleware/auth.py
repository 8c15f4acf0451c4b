"""
Bearer token authentication for FastAPI routes.

Resolves the Authorization header into a Principal. Failures raise the
auth module's AuthenticationError subclasses, which the API error
handlers turn into 401 responses.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import Principal

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Principal:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Principal = Depends(get_current_user)):
            return {"username": user.username}
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    return await auth.get_principal(credentials.credentials)
