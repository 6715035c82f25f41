"""
PostBoard Backend — Post Route Handlers
=========================================

What:  CRUD endpoints under /v1/posts.
How:   The whole router sits behind `get_auth_context`, so a missing or
       invalid bearer token is rejected before any handler body runs.
       Handlers receive the caller explicitly as `auth`.

Route Inventory:
    GET    /v1/posts                    list live posts
    POST   /v1/posts/store              create
    GET    /v1/posts/show/{post_id}     show
    PUT    /v1/posts/update/{post_id}   update title/content
    DELETE /v1/posts/destroy/{post_id}  soft delete (204, empty body)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.dependencies import get_auth_context
from postboard.responses import envelope
from postboard.schemas.envelope import Envelope, ErrorEnvelope
from postboard.schemas.post import PostCreateRequest, PostResponse, PostUpdateRequest
from postboard.services.post_service import post_service
from postboard.services.token_service import AuthContext

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1/posts",
    tags=["Posts"],
    dependencies=[Depends(get_auth_context)],
    responses={401: {"description": "Unauthenticated", "model": ErrorEnvelope}},
)

_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorEnvelope}}
_INVALID = {422: {"description": "Validation failed", "model": ErrorEnvelope}}


@router.get(
    "",
    response_model=Envelope[List[PostResponse]],
    summary="List all posts",
)
async def index(
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    """Live posts in insertion order; `data` is `[]` when there are none."""
    posts = await post_service.list_posts(db)
    return envelope(posts, "Show all posts")


@router.post(
    "/store",
    status_code=201,
    response_model=Envelope[PostResponse],
    responses=_INVALID,
    summary="Create a post",
)
async def store(
    payload: PostCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    post = await post_service.create_post(db, payload)
    logger.debug("User %s stored post %s", auth.user.id, post.id)
    return envelope(post, "New post created", status_code=201)


@router.get(
    "/show/{post_id}",
    response_model=Envelope[PostResponse],
    responses=_NOT_FOUND,
    summary="Show a post",
)
async def show(
    post_id: int,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    post = await post_service.get_post(db, post_id)
    return envelope(post, "Show post")


@router.put(
    "/update/{post_id}",
    response_model=Envelope[PostResponse],
    responses={**_NOT_FOUND, **_INVALID},
    summary="Update a post's title and content",
)
async def update(
    post_id: int,
    payload: PostUpdateRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    post = await post_service.update_post(db, post_id, payload)
    logger.debug("User %s updated post %s", auth.user.id, post_id)
    return envelope(post, "Post updated")


@router.delete(
    "/destroy/{post_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Soft-delete a post",
)
async def destroy(
    post_id: int,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Stamps deleted_at. Deleting an already deleted post returns 404."""
    await post_service.delete_post(db, post_id)
    logger.debug("User %s deleted post %s", auth.user.id, post_id)
    return Response(status_code=204)
