"""
PostBoard Backend — Personal Access Token Model
=================================================

What:  ORM model for `personal_access_tokens`, the token issuer's store.
How:   The client receives "<id>|<secret>". Only the SHA-256 hex digest of
       <secret> is stored in `token`, so a leaked table cannot be replayed.

State machine per row:
    Issued (row inserted) → Valid (used, last_used_at bumped) → Revoked
    (row deleted at logout). Deletion is terminal: the same plain-text token
    can never resolve again.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from postboard.models.user import User


class PersonalAccessToken(TimestampMixin, Base):
    """One bearer token issued to a user (one per login or registration)."""

    __tablename__ = "personal_access_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # "register-token" or "login-token"
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # SHA-256 hex digest of the secret part
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    last_used_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None,
    )

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None,
    )

    # Eagerly loaded: every authenticated request needs the owner
    user: Mapped["User"] = relationship(back_populates="tokens", lazy="joined")

    def __repr__(self) -> str:
        return f"<PersonalAccessToken(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
