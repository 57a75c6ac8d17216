"""
Comment Repository.

Data access layer for comments.
"""

from blog.backend.models.comment import Comment
from blog.backend.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment model."""

    model = Comment
    collection = "comment"
