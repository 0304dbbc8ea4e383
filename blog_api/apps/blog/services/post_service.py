"""Post service."""

from datetime import tzinfo
from typing import Optional

from blog_api.core.bases.base_service import BaseService
from blog_api.apps.blog.repositories.post_repository import PostRepository
from blog_api.apps.blog.models.post import Post
from blog_api.apps.blog.schemas.post import PostResponse


class PostService(BaseService[Post]):
    """Post service class."""

    response_schema = PostResponse

    def __init__(self, repository: PostRepository, tz: Optional[tzinfo] = None):
        super().__init__(repository, tz=tz)
