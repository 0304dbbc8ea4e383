"""Post schemas.

Incoming bodies accept the author either as ``{"firstName", "lastName"}`` or
as a plain string. A string is split on its first run of whitespace: the
first token becomes ``firstName`` and the rest ``lastName``. Outgoing posts
always carry the author as a single display string.
"""

from datetime import datetime, tzinfo
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.apps.blog.models.post import Post


class AuthorName(BaseModel):
    """Structured author name."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(default="", alias="lastName")

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @staticmethod
    def split_display(value: str) -> Dict[str, str]:
        parts = value.strip().split(None, 1)
        return {
            "firstName": parts[0] if parts else "",
            "lastName": parts[1] if len(parts) > 1 else "",
        }

    @classmethod
    def from_display(cls, value: str) -> "AuthorName":
        return cls(**cls.split_display(value))

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class PostCreate(BaseModel):
    """Schema for creating a post."""

    title: str = Field(min_length=1)
    author: AuthorName
    content: str = Field(min_length=1)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("author", mode="before")
    @classmethod
    def _parse_author(cls, value: Any) -> Any:
        if isinstance(value, str):
            return AuthorName.split_display(value)
        return value

    def to_document(self) -> Dict[str, Any]:
        """Stored fields for this post."""
        return {
            "title": self.title,
            "author_first_name": self.author.first_name,
            "author_last_name": self.author.last_name,
            "content": self.content,
        }


class PostUpdate(PostCreate):
    """Schema for replacing a post. ``id`` must match the path id."""

    id: int


class PostResponse(BaseModel):
    """Serialized post."""

    id: int
    title: str
    author: str
    content: str
    created: datetime

    @classmethod
    def from_document(cls, post: Post, tz: Optional[tzinfo] = None) -> "PostResponse":
        created = post.created_at
        if tz is not None and created.tzinfo is not None:
            created = created.astimezone(tz)
        return cls(
            id=post.id,
            title=post.title,
            author=post.author_name,
            content=post.content,
            created=created,
        )
