"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, ConfigDict


class ArticleBody(BaseModel):
    """Article fields. Unknown fields are kept and stored as-is."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    slug: str | None = None
    content: str | None = None
    excerpt: str | None = None
    image: str | None = None
    category: str | None = None
    categories: list[str | None] | str | None = None


class CategoryBody(BaseModel):
    category: str | None = None
