"""
PostBoard Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`, which
`create_tables()` and Alembic's env.py rely on.
"""

from postboard.models.access_token import PersonalAccessToken
from postboard.models.post import Post
from postboard.models.user import User

__all__ = ["PersonalAccessToken", "Post", "User"]
