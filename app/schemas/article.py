"""Request/response schemas for article endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.models.article import ArticleCategory


class ArticleCreate(BaseModel):
    """Body for POST /articles."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=512)
    summary: str = Field(..., min_length=1)
    article_text: str = Field(..., min_length=1)
    date: datetime | None = Field(default=None, description="Publication date; defaults to now")
    image: str = Field(..., min_length=1, max_length=2048, description="Image URL")
    category: ArticleCategory
    featured: bool = False


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    article_id: int = Field(
        ...,
        validation_alias=AliasChoices("articleId", "id"),
        serialization_alias="articleId",
    )
    hash: str
    title: str
    summary: str
    article_text: str
    date: datetime
    image: str
    category: ArticleCategory
    featured: bool
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
