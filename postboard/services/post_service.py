"""
PostBoard Backend — Post Service (CRUD Business Logic)
========================================================

What:  List, create, show, update and soft-delete posts.
How:   Every read goes through `Post.active()`, so tombstoned rows behave
       exactly like rows that never existed.
Who:   Called by routes/posts.py after the bearer gate has passed.

Error Handling Strategy:
    Missing or soft-deleted ids raise NotFoundError (404), and so do ids
    outside the key column's range. A create with an unknown author raises
    ValidationError on `author_id` (422) before any insert. SQLAlchemy
    failures are logged and wrapped in DatabaseError.

Writes commit before returning, so the row is durable by the time the
route builds its response.

Ownership is not checked: any authenticated user may update or delete any
post.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import MAX_INTEGER_ID
from postboard.exceptions import DatabaseError, NotFoundError, PostBoardError, ValidationError
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.post import PostCreateRequest, PostResponse, PostUpdateRequest

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR_MESSAGE = "The selected author id is invalid."


class PostService:
    """Stateless; receives the request's session on every call."""

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """All live posts in insertion order. An empty list is a normal result."""
        try:
            result = await db.execute(Post.active().order_by(Post.id))
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [PostResponse.model_validate(post) for post in posts]

    async def create_post(self, db: AsyncSession, payload: PostCreateRequest) -> PostResponse:
        """
        Persist a new post.

        Raises:
            ValidationError: author_id does not reference an existing user
            DatabaseError: insert failed
        """
        try:
            author = None
            if payload.author_id <= MAX_INTEGER_ID:
                author = await db.get(User, payload.author_id)
            if author is None:
                raise ValidationError.for_field("author_id", UNKNOWN_AUTHOR_MESSAGE)

            post = Post(
                title=payload.title,
                content=payload.content,
                author_id=payload.author_id,
            )
            db.add(post)
            await db.flush()
            await db.refresh(post)
            await db.commit()
        except PostBoardError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post. Please try again.",
                context={"author_id": payload.author_id, "error_type": type(e).__name__},
            )

        logger.info("Post %s created by author %s", post.id, post.author_id)
        return PostResponse.model_validate(post)

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Raises:
            NotFoundError: no live post with this id
        """
        post = await self._get_active(db, post_id)
        return PostResponse.model_validate(post)

    async def update_post(
        self,
        db: AsyncSession,
        post_id: int,
        payload: PostUpdateRequest,
    ) -> PostResponse:
        """
        Replace title and content. author_id is never touched.

        Raises:
            NotFoundError: no live post with this id
        """
        post = await self._get_active(db, post_id)
        try:
            post.title = payload.title
            post.content = payload.content
            await db.flush()
            await db.refresh(post)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        logger.info("Post %s updated", post_id)
        return PostResponse.model_validate(post)

    async def delete_post(self, db: AsyncSession, post_id: int) -> None:
        """
        Soft-delete a post by stamping deleted_at.

        A second call for the same id raises NotFoundError; the tombstone
        set by the first call is left as is.
        """
        post = await self._get_active(db, post_id)
        try:
            post.soft_delete()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        logger.info("Post %s soft-deleted", post_id)

    async def _get_active(self, db: AsyncSession, post_id: int) -> Post:
        if not 0 < post_id <= MAX_INTEGER_ID:
            raise NotFoundError(resource="post", resource_id=post_id)

        try:
            result = await db.execute(Post.active().where(Post.id == post_id))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post


post_service = PostService()
