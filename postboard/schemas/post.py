"""
PostBoard Backend — Post Schemas
==================================

One explicit input model per write operation plus the response model.
Unknown body keys are ignored, so an `author_id` sent to the update
endpoint has no effect.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class PostCreateRequest(BaseModel):
    """Body of POST /v1/posts/store."""

    title: Title
    content: Content
    author_id: int = Field(gt=0, description="ID of an existing user")


class PostUpdateRequest(BaseModel):
    """Body of PUT /v1/posts/update/{id}. Only title and content are mutable."""

    title: Title
    content: Content


class PostResponse(BaseModel):
    """Full representation of a live post."""

    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
