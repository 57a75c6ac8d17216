# Database models package
from blog.backend.models.article import Article
from blog.backend.models.base import Base
from blog.backend.models.comment import Comment
from blog.backend.models.session import Session
from blog.backend.models.tag import Tag, tag_articles

__all__ = [
    "Article",
    "Base",
    "Comment",
    "Session",
    "Tag",
    "tag_articles",
]
