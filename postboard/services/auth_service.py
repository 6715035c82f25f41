"""
PostBoard Backend — Auth Service (Register / Login / Logout)
==============================================================

What:  The authentication state transitions, independent of HTTP.
How:   Composes the users table, password hashing and TokenService.
Who:   Called by routes/auth.py.

Flows:
    register: validate uniqueness → hash password → insert user → issue token → commit
    login:    look up by email → verify hash → issue token → commit
    logout:   revoke the token that authenticated the request → commit

Each flow commits before returning, so a token handed to the client is
already usable by its next request.

Login failures never say whether the email or the password was wrong.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import AuthenticationError, DatabaseError, ValidationError
from postboard.models.user import User
from postboard.schemas.auth import AuthPayload, LoginRequest, RegisterRequest, UserResponse
from postboard.services.passwords import hash_password, verify_password
from postboard.services.token_service import AuthContext, token_service

logger = logging.getLogger(__name__)

REGISTER_TOKEN_NAME = "register-token"
LOGIN_TOKEN_NAME = "login-token"

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
EMAIL_TAKEN_MESSAGE = "The email has already been taken."


class AuthService:
    """
    Business logic for account and session handling.

    Error Handling Strategy:
        Input problems raise ValidationError (422), bad credentials raise
        AuthenticationError (401), store failures are wrapped in
        DatabaseError (500).
    """

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> AuthPayload:
        """
        Create an account and sign it in.

        Raises:
            ValidationError: email already registered
            DatabaseError: insert failed
        """
        if await self._find_by_email(db, payload.email) is not None:
            raise ValidationError.for_field("email", EMAIL_TAKEN_MESSAGE)

        user = User(
            name=payload.name,
            email=payload.email,
            password=hash_password(payload.password),
        )
        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await db.rollback()
            raise ValidationError.for_field("email", EMAIL_TAKEN_MESSAGE)
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e))
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        token = await token_service.issue(db, user, REGISTER_TOKEN_NAME)
        await self._commit(db, "register", user.id)
        logger.info("Registered user %s", user.id)
        return AuthPayload(user=UserResponse.model_validate(user), token=token)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> AuthPayload:
        """
        Exchange credentials for a fresh token.

        Earlier tokens of the same user remain valid.

        Raises:
            AuthenticationError: unknown email or wrong password (same message)
        """
        user = await self._find_by_email(db, payload.email)
        valid, new_hash = verify_password(payload.password, user.password if user else None)
        if user is None or not valid:
            logger.info("Failed login attempt")
            raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

        if new_hash:
            user.password = new_hash

        token = await token_service.issue(db, user, LOGIN_TOKEN_NAME)
        await self._commit(db, "login", user.id)
        logger.info("User %s logged in", user.id)
        return AuthPayload(user=UserResponse.model_validate(user), token=token)

    async def logout(self, db: AsyncSession, auth: AuthContext) -> None:
        """Revoke only the token used for this request."""
        await token_service.revoke(db, auth.token)
        await self._commit(db, "logout", auth.user.id)
        logger.info("User %s logged out", auth.user.id)

    async def _commit(self, db: AsyncSession, action: str, user_id: int) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error committing %s for user %s: %s", action, user_id, str(e))
            raise DatabaseError(
                message="Could not save your session. Please try again.",
                context={"action": action, "user_id": user_id, "error_type": type(e).__name__},
            )

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise DatabaseError(
                message="Could not verify credentials. Please try again.",
                context={"error_type": type(e).__name__},
            )


auth_service = AuthService()
