"""Post repository."""

from blog_api.core.bases.base_repository import BaseRepository
from blog_api.apps.blog.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post
