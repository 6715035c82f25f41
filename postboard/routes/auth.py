"""
PostBoard Backend — Authentication Route Handlers
===================================================

What:  POST /register, POST /login, POST /logout.
How:   Request bodies are validated by the pydantic models; the handlers
       delegate to AuthService and wrap the result in the envelope.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.dependencies import get_auth_context
from postboard.responses import envelope
from postboard.schemas.auth import AuthPayload, LoginRequest, RegisterRequest
from postboard.schemas.envelope import Envelope, ErrorEnvelope
from postboard.services.auth_service import auth_service
from postboard.services.token_service import AuthContext

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    status_code=201,
    response_model=Envelope[AuthPayload],
    responses={
        422: {"description": "Validation failed", "model": ErrorEnvelope},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    """Create an account and return it together with its first token."""
    result = await auth_service.register(db, payload)
    return envelope(result, "Registered successfully", status_code=201)


@router.post(
    "/login",
    response_model=Envelope[AuthPayload],
    responses={
        401: {"description": "Invalid credentials", "model": ErrorEnvelope},
        422: {"description": "Validation failed", "model": ErrorEnvelope},
    },
    summary="Log in and receive a bearer token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    result = await auth_service.login(db, payload)
    return envelope(result, "Logged in successfully")


@router.post(
    "/logout",
    response_model=Envelope[None],
    responses={
        401: {"description": "Unauthenticated", "model": ErrorEnvelope},
    },
    summary="Revoke the token used for this request",
)
async def logout(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    await auth_service.logout(db, auth)
    return envelope(None, "Logged out successfully")
