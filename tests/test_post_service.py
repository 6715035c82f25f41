"""
PostBoard Backend — Post Service Unit Tests
=============================================

What:  Tests for PostService business logic (create, get, delete, list).
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Missing post raises NotFoundError
    ✅ Unknown author raises ValidationError before any insert
    ✅ Empty list is a normal result
    ✅ Database failures are wrapped in DatabaseError
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from postboard.database import MAX_INTEGER_ID
from postboard.exceptions import DatabaseError, NotFoundError, ValidationError
from postboard.models.post import Post
from postboard.schemas.post import PostCreateRequest
from postboard.services.post_service import UNKNOWN_AUTHOR_MESSAGE, PostService


def _make_post(**overrides) -> Post:
    now = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    values = dict(
        id=1,
        title="Hello",
        content="World",
        author_id=7,
        created_at=now,
        updated_at=now,
        deleted_at=None,
    )
    values.update(overrides)
    return Post(**values)


def _result_with(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalars.return_value.all.return_value = value
    return result


class TestPostServiceGet:
    """Tests for get_post and the shared active-row lookup."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        """Non-existent (or soft-deleted) post should raise NotFoundError."""
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_post(mock_db_session, 99)

        assert exc_info.value.message == "Post not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(_make_post())

        result = await self.service.get_post(mock_db_session, 1)

        assert result.id == 1
        assert result.title == "Hello"
        assert result.deleted_at is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_post(mock_db_session, 1)

        assert exc_info.value.context["post_id"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", [0, -1, MAX_INTEGER_ID + 1, 10**20])
    async def test_out_of_range_id_is_not_found_without_query(self, mock_db_session, post_id):
        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, post_id)

        mock_db_session.execute.assert_not_awaited()


class TestPostServiceCreate:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_unknown_author_is_rejected_before_insert(self, mock_db_session):
        mock_db_session.get.return_value = None
        payload = PostCreateRequest(title="T", content="C", author_id=42)

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_post(mock_db_session, payload)

        assert exc_info.value.errors == {"author_id": [UNKNOWN_AUTHOR_MESSAGE]}
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_flush_failure_is_database_error(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock()
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("locked"))
        payload = PostCreateRequest(title="T", content="C", author_id=42)

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_post(mock_db_session, payload)

        assert exc_info.value.status_code == 500
        assert exc_info.value.context["author_id"] == 42

    @pytest.mark.asyncio
    async def test_author_id_beyond_key_range_is_unknown(self, mock_db_session):
        payload = PostCreateRequest(title="T", content="C", author_id=10**20)

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_post(mock_db_session, payload)

        assert exc_info.value.errors == {"author_id": [UNKNOWN_AUTHOR_MESSAGE]}
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_commits_before_returning(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock()
        payload = PostCreateRequest(title="T", content="C", author_id=42)

        async def refresh(post):
            post.id = 1
            post.created_at = post.updated_at = datetime(2024, 1, 15, tzinfo=timezone.utc)

        mock_db_session.refresh.side_effect = refresh

        result = await self.service.create_post(mock_db_session, payload)

        assert result.id == 1
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_is_database_error(self, mock_db_session):
        post = _make_post()
        mock_db_session.execute.return_value = _result_with(post)
        mock_db_session.commit.side_effect = OperationalError("UPDATE", {}, Exception("locked"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.delete_post(mock_db_session, 1)

        assert exc_info.value.context["post_id"] == 1


class TestPostServiceList:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with([])

        assert await self.service.list_posts(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_posts_maps_rows(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(
            [_make_post(id=1), _make_post(id=2, title="Second")]
        )

        result = await self.service.list_posts(mock_db_session)

        assert [post.id for post in result] == [1, 2]
        assert result[1].title == "Second"


class TestPostServiceDelete:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_delete_stamps_deleted_at(self, mock_db_session):
        post = _make_post()
        mock_db_session.execute.return_value = _result_with(post)

        await self.service.delete_post(mock_db_session, 1)

        assert post.deleted_at is not None
        assert post.is_deleted
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_post(mock_db_session, 5)

        mock_db_session.commit.assert_not_awaited()
