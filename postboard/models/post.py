"""
PostBoard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model for the `posts` table.
Who:   Used by PostService for every CRUD operation.

Lifecycle:
    1. Created by an authenticated request with title, content, author_id
    2. Updated through title/content only; author_id never changes
    3. "Deleted" by stamping deleted_at; the row stays in the table

Soft delete:
    Every default read goes through `Post.active()`, which filters on
    `deleted_at IS NULL`. A tombstoned post is invisible to list, show,
    update and delete alike.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Select, String, Text, select
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin, utcnow

if TYPE_CHECKING:
    from postboard.models.user import User


class Post(TimestampMixin, Base):
    """A blog post written by a user."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # NULL = live, timestamp = soft-deleted
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    author: Mapped["User"] = relationship(back_populates="posts", lazy="noload")

    __table_args__ = (
        Index("idx_posts_deleted_at", "deleted_at"),
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = utcnow()

    @classmethod
    def active(cls) -> Select:
        """SELECT over posts that have not been soft-deleted."""
        return select(cls).where(cls.deleted_at.is_(None))

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, author_id={self.author_id}, "
            f"deleted={self.is_deleted})>"
        )
