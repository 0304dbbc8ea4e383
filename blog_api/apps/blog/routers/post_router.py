"""Post router."""

from fastapi import Depends

from blog_api.core.database import Database, get_database
from blog_api.core.bases.base_router import BaseRouter
from blog_api.apps.blog.services.post_service import PostService
from blog_api.apps.blog.repositories.post_repository import PostRepository
from blog_api.apps.blog.schemas.post import PostCreate, PostResponse, PostUpdate


def get_post_repository(database: Database = Depends(get_database)) -> PostRepository:
    """Get post repository bound to the request's database."""
    return PostRepository(database.get_session, get_now=database.now)  # type:ignore


def get_post_service(
    repository: PostRepository = Depends(get_post_repository),
    database: Database = Depends(get_database),
) -> PostService:
    """Get post service rendering timestamps in the database time zone."""
    return PostService(repository, tz=database.tz)


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self):
        super().__init__(
            get_service=get_post_service,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            response_schema=PostResponse,
            prefix="/posts",
            tags=["Posts"]
        )


# Router instance
router = PostRouter().get_router()
