"""
PostBoard Backend — Token Service (Bearer Token Issuer)
=========================================================

What:  Issues, resolves and revokes opaque personal access tokens.
How:   A token is "<row id>|<40 random chars>". The row stores only the
       SHA-256 digest of the random part; resolution re-hashes the presented
       secret and compares digests in constant time.
Who:   AuthService (issue/revoke) and the bearer dependency (authenticate).

Token lifecycle:
    issue()         → row inserted, plain text returned once
    authenticate()  → row found, not expired, last_used_at bumped
    revoke()        → row deleted; later authenticate() calls fail
"""

import hashlib
import hmac
import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.config import settings
from postboard.database import MAX_INTEGER_ID
from postboard.exceptions import AuthenticationError, DatabaseError
from postboard.models.access_token import PersonalAccessToken
from postboard.models.mixins import utcnow
from postboard.models.user import User

logger = logging.getLogger(__name__)

TOKEN_SECRET_LENGTH = 40
_TOKEN_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of one request: the user and the token used."""

    user: User
    token: PersonalAccessToken


def hash_token(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TokenService:
    """Stateless token operations; the session is passed to every call."""

    async def issue(self, db: AsyncSession, user: User, name: str) -> str:
        """
        Create a token row for `user` and return its plain-text form.

        The plain text is not recoverable afterwards.
        """
        secret = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_SECRET_LENGTH))
        expires_at: Optional[datetime] = None
        if settings.token_expiration_minutes:
            expires_at = utcnow() + timedelta(minutes=settings.token_expiration_minutes)

        token = PersonalAccessToken(
            user_id=user.id,
            name=name,
            token=hash_token(secret),
            expires_at=expires_at,
        )
        try:
            db.add(token)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error issuing token for user %s: %s", user.id, str(e))
            raise DatabaseError(
                message="Could not issue an access token. Please try again.",
                context={"user_id": user.id, "error_type": type(e).__name__},
            )

        logger.info("Issued %s #%s for user %s", name, token.id, user.id)
        return f"{token.id}|{secret}"

    async def authenticate(self, db: AsyncSession, plain_text_token: str) -> AuthContext:
        """
        Resolve a presented bearer token to its user.

        Raises:
            AuthenticationError: token malformed, unknown, revoked or expired
            DatabaseError: lookup failed
        """
        token = await self._find(db, plain_text_token)
        if token is None or token.user is None:
            raise AuthenticationError()

        now = utcnow()
        if token.expires_at is not None and _as_utc(token.expires_at) <= now:
            logger.info("Rejected expired token #%s", token.id)
            raise AuthenticationError()

        token.last_used_at = now
        return AuthContext(user=token.user, token=token)

    async def revoke(self, db: AsyncSession, token: PersonalAccessToken) -> None:
        """Delete exactly this token. Other tokens of the same user stay valid."""
        try:
            await db.delete(token)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error revoking token #%s: %s", token.id, str(e))
            raise DatabaseError(
                message="Could not revoke the access token. Please try again.",
                context={"token_id": token.id, "error_type": type(e).__name__},
            )
        logger.info("Revoked token #%s for user %s", token.id, token.user_id)

    async def _find(self, db: AsyncSession, plain_text_token: str) -> Optional[PersonalAccessToken]:
        """
        Look a token up by "<id>|<secret>", or by digest alone when the id
        prefix is missing.
        """
        token_id, sep, secret = plain_text_token.partition("|")
        try:
            if not sep:
                result = await db.execute(
                    select(PersonalAccessToken).where(
                        PersonalAccessToken.token == hash_token(plain_text_token)
                    )
                )
                return result.unique().scalar_one_or_none()

            # str.isdigit() also accepts digits int() rejects, such as "²"
            if not (token_id.isascii() and token_id.isdigit()) or not secret:
                return None
            if int(token_id) > MAX_INTEGER_ID:
                return None
            token = await db.get(PersonalAccessToken, int(token_id))
        except SQLAlchemyError as e:
            logger.error("Database error resolving bearer token: %s", str(e))
            raise DatabaseError(
                message="Could not verify credentials. Please try again.",
                context={"error_type": type(e).__name__},
            )

        if token is None or not hmac.compare_digest(token.token, hash_token(secret)):
            return None
        return token


# Stateless, shared by all requests
token_service = TokenService()
