"""Fake post data for tests and the ``seed`` command."""

from typing import Any, Dict, List, Optional

from faker import Faker

from blog_api.apps.blog.models.post import Post
from blog_api.apps.blog.repositories.post_repository import PostRepository


def generate_post_data(fake: Faker) -> Dict[str, Any]:
    """One stored post document with a past publish date."""
    return {
        "title": fake.sentence(nb_words=6).rstrip("."),
        "author_first_name": fake.first_name(),
        "author_last_name": fake.last_name(),
        "content": fake.paragraph(nb_sentences=4),
        "created_at": fake.past_datetime(),
    }


async def seed_posts(
    repository: PostRepository, count: int = 10, fake: Optional[Faker] = None
) -> List[Post]:
    """Bulk insert ``count`` generated posts."""
    fake = fake or Faker()
    return await repository.create_many(
        [generate_post_data(fake) for _ in range(count)]
    )
