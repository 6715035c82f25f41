"""
PostBoard Backend — Authentication Dependency
===============================================

What:  The bearer-token gate for protected routes.
How:   Reads `Authorization: Bearer <token>`, resolves it through
       TokenService and returns the AuthContext. Route groups attach it as a
       router-level dependency; handlers that need the caller declare it as a
       parameter too (FastAPI resolves it once per request).

Missing header, wrong scheme, unknown, revoked and expired tokens all fail
the same way: AuthenticationError → 401 "Unauthenticated.".
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.exceptions import AuthenticationError
from postboard.services.token_service import AuthContext, token_service

# auto_error=False: the 401 is raised here so it goes through our envelope
bearer_scheme = HTTPBearer(auto_error=False, description="Token returned by /register or /login")


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return await token_service.authenticate(db, credentials.credentials)
