"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from blog.backend.api.v1.endpoints import articles, comments, index, tags

router = APIRouter()

# Login and logout
router.include_router(index.router, tags=["session"])

# Articles endpoints
router.include_router(articles.router, prefix="/articles", tags=["articles"])

# Comments live under their article for create/list and at the top level otherwise
router.include_router(comments.router, tags=["comments"])

# Tags endpoints
router.include_router(tags.router, prefix="/tags", tags=["tags"])
