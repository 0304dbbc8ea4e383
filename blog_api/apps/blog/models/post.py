"""Post model."""

from sqlalchemy import Column, String, Text
from sqlmodel import Field

from blog_api.core.database import BaseModel


class Post(BaseModel, table=True):
    """Stored blog post document.

    The title lives in the ``Title`` column and the author is kept as a
    structured first/last name pair; the API shape is produced by
    ``PostResponse.from_document``.
    """

    __tablename__ = "blog_posts"  # type: ignore
    title: str = Field(sa_column=Column("Title", String, nullable=False))
    author_first_name: str = Field(
        sa_column=Column("author_firstName", String, nullable=False)
    )
    author_last_name: str = Field(
        default="", sa_column=Column("author_lastName", String, nullable=False)
    )
    content: str = Field(sa_column=Column(Text, nullable=False))

    @property
    def author_name(self) -> str:
        """Display form of the author: first and last name, blanks dropped."""
        return " ".join(
            part for part in (self.author_first_name, self.author_last_name) if part
        )
