"""Article endpoints: public reads, authenticated and role-checked writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import require_writer
from app.core.database import get_db
from app.core.errors import DuplicateArticleError
from app.models.article import ArticleCategory
from app.schemas.article import ArticleCreate, ArticleResponse
from app.schemas.auth import CurrentUser
from app.services import articles as article_service

router = APIRouter()

MAX_LIST_LIMIT = 100


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def create_article(
    body: ArticleCreate,
    db: Annotated[Session, Depends(get_db)],
    _writer: Annotated[CurrentUser, Depends(require_writer)],
) -> ArticleResponse:
    """Publish an article. Requires role admin or editor."""
    try:
        article = article_service.create_article(db, body)
    except DuplicateArticleError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return ArticleResponse.model_validate(article)


@router.get("/latest", response_model=list[ArticleResponse])
def latest_articles(
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=MAX_LIST_LIMIT)] = article_service.DEFAULT_LATEST_LIMIT,
) -> list[ArticleResponse]:
    articles = article_service.get_latest_articles(db, limit)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/featured", response_model=list[ArticleResponse])
def featured_articles(
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=MAX_LIST_LIMIT)] = article_service.DEFAULT_FEATURED_LIMIT,
) -> list[ArticleResponse]:
    articles = article_service.get_featured_articles(db, limit)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/category/{category}", response_model=list[ArticleResponse])
def articles_by_category(
    category: ArticleCategory,
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=MAX_LIST_LIMIT)] = article_service.DEFAULT_CATEGORY_LIMIT,
) -> list[ArticleResponse]:
    articles = article_service.get_articles_by_category(db, category, limit)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ArticleResponse:
    article = article_service.get_article_by_id(db, article_id)
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return ArticleResponse.model_validate(article)
