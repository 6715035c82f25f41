"""
PostBoard Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table (the credential store).
Who:   Written by AuthService.register; read by login and by TokenService
       when resolving a bearer token.

Lifecycle:
    Created at registration, never deleted. `password` only ever holds a
    passlib hash string and is never serialized (see schemas/auth.py).
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from postboard.models.access_token import PersonalAccessToken
    from postboard.models.post import Post


class User(TimestampMixin, Base):
    """A registered author."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Uniqueness is also enforced by the service before insert so the client
    # gets a field-level validation error instead of an IntegrityError.
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    posts: Mapped[List["Post"]] = relationship(back_populates="author", lazy="noload")

    tokens: Mapped[List["PersonalAccessToken"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
